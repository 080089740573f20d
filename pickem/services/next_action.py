"""Next-action resolver.

Picks the single most useful thing to show a participant from the pending
work categories. This is a pure decision table recomputed on every call:

1. OPEN_PICKS      - editable matches without a complete prediction
2. OPEN_BRACKET    - editable bracket slots
3. VIEW_RESULTS    - results newer than the participant last saw
4. LOCKED_WAITING  - everything is locked but something is still pending
5. CAUGHT_UP       - nothing to do

Within a candidate list the winner is the minimum of
(deadline, kickoff, stage order, id). Missing instants and stage orders sort
last, so the order is total and never ambiguous.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import structlog

from pickem.models.records import parse_instant

logger = structlog.get_logger(__name__)


class ActionKind(str, Enum):
    """Recommended action types, highest priority first."""

    OPEN_PICKS = "OPEN_PICKS"
    OPEN_BRACKET = "OPEN_BRACKET"
    VIEW_RESULTS = "VIEW_RESULTS"
    LOCKED_WAITING = "LOCKED_WAITING"
    CAUGHT_UP = "CAUGHT_UP"


class ChipType(str, Enum):
    """What the instant on a status chip refers to."""

    DEADLINE = "deadline"
    UNLOCK = "unlock"
    LAST_SUBMITTED = "last_submitted"


@dataclass(frozen=True)
class Candidate:
    """One unit of pending work competing for attention."""

    id: str
    label: str
    deadline_utc: datetime | None = None
    kickoff_utc: datetime | None = None
    stage_order: int | None = None


@dataclass(frozen=True)
class StatusChip:
    type: ChipType
    label: str
    at_utc: datetime | None = None


@dataclass(frozen=True)
class Action:
    """Resolver output."""

    kind: ActionKind
    label: str
    status_chip: StatusChip
    reason: str
    target_id: str | None = None


def _instant_key(value: datetime | None) -> float:
    # Naive instants are UTC, as at the record boundary.
    instant = parse_instant(value)
    return instant.timestamp() if instant is not None else math.inf


def candidate_sort_key(candidate: Candidate) -> tuple[float, float, float, str]:
    """Total order: deadline, kickoff, stage order, then id."""
    stage_order = candidate.stage_order if candidate.stage_order is not None else math.inf
    return (
        _instant_key(candidate.deadline_utc),
        _instant_key(candidate.kickoff_utc),
        stage_order,
        candidate.id,
    )


def choose_priority_candidate(candidates: Sequence[Candidate]) -> Candidate | None:
    """Most urgent candidate, or None for an empty list."""
    if not candidates:
        return None
    return min(candidates, key=candidate_sort_key)


def results_unseen(
    latest_results_updated_utc: datetime | None,
    seen_results_updated_utc: datetime | None,
) -> bool:
    """True when there are results newer than the seen marker."""
    if latest_results_updated_utc is None:
        return False
    if seen_results_updated_utc is None:
        return True
    return parse_instant(seen_results_updated_utc) < parse_instant(latest_results_updated_utc)


def _deadline_chip(
    deadline_utc: datetime | None,
    last_submitted_utc: datetime | None,
) -> StatusChip:
    if deadline_utc is not None:
        return StatusChip(type=ChipType.DEADLINE, label="Deadline", at_utc=deadline_utc)
    return StatusChip(
        type=ChipType.LAST_SUBMITTED,
        label="Last submitted",
        at_utc=last_submitted_utc,
    )


def resolve_next_action(
    open_pick_candidates: Sequence[Candidate],
    open_bracket_candidates: Sequence[Candidate],
    latest_results_updated_utc: datetime | None = None,
    seen_results_updated_utc: datetime | None = None,
    locked_waiting_deadline_utc: datetime | None = None,
    last_submitted_utc: datetime | None = None,
    locked_waiting_unlock_utc: datetime | None = None,
) -> Action:
    """
    Resolve the participant's next action.

    All inputs must come from one consistent snapshot. The function keeps no
    memory of earlier calls; callers detect changes by comparing results.
    """
    next_pick = choose_priority_candidate(open_pick_candidates)
    next_bracket = choose_priority_candidate(open_bracket_candidates)

    if next_pick is not None:
        action = Action(
            kind=ActionKind.OPEN_PICKS,
            target_id=next_pick.id,
            label=next_pick.label,
            status_chip=_deadline_chip(next_pick.deadline_utc, last_submitted_utc),
            reason="Open picks are highest priority.",
        )
    elif next_bracket is not None:
        action = Action(
            kind=ActionKind.OPEN_BRACKET,
            target_id=next_bracket.id,
            label=next_bracket.label,
            status_chip=_deadline_chip(next_bracket.deadline_utc, last_submitted_utc),
            reason="No open picks remain; bracket picks are next priority.",
        )
    elif results_unseen(latest_results_updated_utc, seen_results_updated_utc):
        action = Action(
            kind=ActionKind.VIEW_RESULTS,
            label="Check latest results",
            status_chip=StatusChip(
                type=ChipType.LAST_SUBMITTED,
                label="Last updated",
                at_utc=latest_results_updated_utc,
            ),
            reason="No pick actions remain and the latest results are unseen.",
        )
    elif locked_waiting_unlock_utc is not None:
        action = Action(
            kind=ActionKind.LOCKED_WAITING,
            label="Waiting for next unlock",
            status_chip=StatusChip(
                type=ChipType.UNLOCK,
                label="Unlock",
                at_utc=locked_waiting_unlock_utc,
            ),
            reason="All current actions are locked.",
        )
    elif locked_waiting_deadline_utc is not None:
        action = Action(
            kind=ActionKind.LOCKED_WAITING,
            label="Waiting for locked matches",
            status_chip=StatusChip(
                type=ChipType.DEADLINE,
                label="Deadline",
                at_utc=locked_waiting_deadline_utc,
            ),
            reason="No open actions remain; locked matches are still pending.",
        )
    else:
        action = Action(
            kind=ActionKind.CAUGHT_UP,
            label="All caught up",
            status_chip=StatusChip(
                type=ChipType.LAST_SUBMITTED,
                label="Last submitted",
                at_utc=last_submitted_utc,
            ),
            reason="No immediate actions or pending updates.",
        )

    logger.debug(
        "next_action_resolved",
        kind=action.kind.value,
        target_id=action.target_id,
        open_picks=len(open_pick_candidates),
        open_bracket=len(open_bracket_candidates),
    )
    return action
