"""Translate loader records into canonical domain types.

The data loader hands over camelCase dicts. Predictions arrive in two
shapes: the full form carries ``winner``/``decidedBy``, the bracket form
carries a single ``advances`` field. Both collapse into one optional
``TieBreak`` here so nothing downstream has to shape-check.
"""

from datetime import datetime, timezone
from typing import Any

import structlog

from pickem.models.domain import (
    TIE_BREAK_DECISIONS,
    Decision,
    Match,
    MatchScore,
    MatchStatus,
    Outcome,
    Prediction,
    Side,
    Stage,
    Team,
    TieBreak,
)

logger = structlog.get_logger(__name__)


def parse_instant(value: Any) -> datetime | None:
    """
    Parse an ISO-8601 instant into an aware UTC datetime.

    Accepts datetimes, strings with a trailing "Z" and None. Naive values
    are taken to be UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _enum_or_none(enum_cls, value):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _team(raw: dict[str, Any] | None) -> Team | None:
    if not raw:
        return None
    return Team(code=str(raw.get("code", "")), name=str(raw.get("name", "")))


def match_from_record(record: dict[str, Any]) -> Match:
    """Build a Match from a loader record."""
    raw_score = record.get("score")
    score = None
    if raw_score is not None:
        score = MatchScore(home=int(raw_score["home"]), away=int(raw_score["away"]))

    return Match(
        id=str(record["id"]),
        stage=Stage(record["stage"]),
        kickoff_utc=parse_instant(record["kickoffUtc"]),
        status=MatchStatus(record.get("status", MatchStatus.SCHEDULED.value)),
        score=score,
        winner=_enum_or_none(Side, record.get("winner")),
        decided_by=_enum_or_none(Decision, record.get("decidedBy")),
        home_team=_team(record.get("homeTeam")),
        away_team=_team(record.get("awayTeam")),
    )


def tie_break_from_record(record: dict[str, Any]) -> TieBreak | None:
    """
    Resolve the tie-break selection from either prediction shape.

    ``advances`` wins when present. Otherwise ``winner`` only counts when
    paired with an extra-time or penalties ``decidedBy``.
    """
    advances = _enum_or_none(Side, record.get("advances"))
    if advances is not None:
        return TieBreak(winner=advances)

    winner = _enum_or_none(Side, record.get("winner"))
    decided_by = _enum_or_none(Decision, record.get("decidedBy"))
    if winner is not None and decided_by in TIE_BREAK_DECISIONS:
        return TieBreak(winner=winner, decided_by=decided_by)

    if winner is not None:
        logger.debug(
            "tie_break_dropped",
            match_id=record.get("matchId"),
            winner=winner.value,
            decided_by=record.get("decidedBy"),
        )
    return None


def prediction_from_record(record: dict[str, Any]) -> Prediction:
    """Build a canonical Prediction from a loader record.

    Score values pass through untouched; the validator decides if they count.
    """
    return Prediction(
        match_id=str(record["matchId"]),
        user_id=str(record["userId"]),
        home_score=record.get("homeScore"),
        away_score=record.get("awayScore"),
        outcome=_enum_or_none(Outcome, record.get("outcome")),
        tie_break=tie_break_from_record(record),
        updated_at=parse_instant(record.get("updatedAt")),
        created_at=parse_instant(record.get("createdAt")),
    )
