"""Scoring module for Pickem."""

from pickem.services.scoring.engine import ScoreBreakdown, ScoringEngine, score_prediction
from pickem.services.scoring.schedule import (
    ScoringSchedule,
    StageScoring,
    get_scoring_schedule,
    load_scoring_schedule,
)

__all__ = [
    "ScoringEngine",
    "ScoreBreakdown",
    "score_prediction",
    "ScoringSchedule",
    "StageScoring",
    "get_scoring_schedule",
    "load_scoring_schedule",
]
