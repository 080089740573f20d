"""Domain models for Pickem."""

from pickem.models.domain import (
    KNOCKOUT_STAGES,
    STAGE_ORDER,
    Decision,
    Match,
    MatchScore,
    MatchStatus,
    Member,
    Outcome,
    Prediction,
    Side,
    Stage,
    Team,
    TieBreak,
)
from pickem.models.records import (
    match_from_record,
    parse_instant,
    prediction_from_record,
)

__all__ = [
    # Domain types
    "Stage",
    "STAGE_ORDER",
    "KNOCKOUT_STAGES",
    "MatchStatus",
    "Side",
    "Decision",
    "Outcome",
    "Team",
    "MatchScore",
    "Match",
    "TieBreak",
    "Prediction",
    "Member",
    # Record translation
    "match_from_record",
    "prediction_from_record",
    "parse_instant",
]
