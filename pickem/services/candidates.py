"""Derive next-action resolver inputs from matches and predictions.

This is where the lock clock and the validator meet the resolver: a match
is an open pick while it is still editable and the participant's prediction
for it is incomplete.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timedelta

from pickem.models.domain import Match, Prediction, Side
from pickem.services.lock_clock import LOCK_OFFSET, is_match_locked, lock_instant
from pickem.services.next_action import Candidate
from pickem.services.validation import is_complete


def index_predictions(
    predictions: Iterable[Prediction],
    user_id: str,
) -> dict[str, Prediction]:
    """Map match id to the user's prediction; the latest update wins."""
    by_match: dict[str, Prediction] = {}
    for prediction in predictions:
        if prediction.user_id != user_id:
            continue
        existing = by_match.get(prediction.match_id)
        if existing is None or _is_newer(prediction, existing):
            by_match[prediction.match_id] = prediction
    return by_match


def _is_newer(candidate: Prediction, existing: Prediction) -> bool:
    if candidate.updated_at is None:
        return False
    if existing.updated_at is None:
        return True
    return candidate.updated_at > existing.updated_at


def build_open_pick_candidates(
    matches: Sequence[Match],
    predictions: Iterable[Prediction],
    user_id: str,
    now: datetime,
    offset: timedelta = LOCK_OFFSET,
) -> list[Candidate]:
    """One candidate per editable match the user has not fully predicted."""
    by_match = index_predictions(predictions, user_id)
    candidates = []
    for match in matches:
        if is_match_locked(match, now, offset):
            continue
        if is_complete(match, by_match.get(match.id)):
            continue
        candidates.append(
            Candidate(
                id=match.id,
                label=match.label,
                deadline_utc=lock_instant(match.kickoff_utc, offset),
                kickoff_utc=match.kickoff_utc,
                stage_order=match.stage.order,
            )
        )
    return candidates


def build_open_bracket_candidates(
    matches: Sequence[Match],
    advances_by_match: Mapping[str, Side],
    now: datetime,
    offset: timedelta = LOCK_OFFSET,
) -> list[Candidate]:
    """
    One candidate per editable knockout match without an advancing pick.

    ``advances_by_match`` is the bracket prediction: match id to the side
    the participant expects to go through.
    """
    candidates = []
    for match in matches:
        if not match.stage.is_knockout:
            continue
        if is_match_locked(match, now, offset):
            continue
        if advances_by_match.get(match.id) is not None:
            continue
        candidates.append(
            Candidate(
                id=match.id,
                label=f"{match.stage.value} · {match.label}",
                deadline_utc=lock_instant(match.kickoff_utc, offset),
                kickoff_utc=match.kickoff_utc,
                stage_order=match.stage.order,
            )
        )
    return candidates


def locked_waiting_deadline(
    matches: Iterable[Match],
    now: datetime,
    offset: timedelta = LOCK_OFFSET,
) -> datetime | None:
    """Earliest kickoff among matches that are locked but not yet finished."""
    pending = [
        match.kickoff_utc
        for match in matches
        if not match.is_finished and is_match_locked(match, now, offset)
    ]
    return min(pending) if pending else None


def latest_submission(
    predictions: Iterable[Prediction],
    user_id: str,
) -> datetime | None:
    """Most recent update among the user's predictions."""
    stamps = [
        p.updated_at
        for p in predictions
        if p.user_id == user_id and p.updated_at is not None
    ]
    return max(stamps) if stamps else None
