"""Prediction rules engine services."""

from pickem.services.candidates import (
    build_open_bracket_candidates,
    build_open_pick_candidates,
    latest_submission,
    locked_waiting_deadline,
)
from pickem.services.leaderboard import LeaderboardEntry, build_leaderboard
from pickem.services.lock_clock import LOCK_OFFSET, is_locked, is_match_locked, lock_instant
from pickem.services.next_action import (
    Action,
    ActionKind,
    Candidate,
    ChipType,
    StatusChip,
    resolve_next_action,
)
from pickem.services.scoring import ScoreBreakdown, ScoringEngine, score_prediction
from pickem.services.validation import is_complete

__all__ = [
    # Lock clock
    "LOCK_OFFSET",
    "lock_instant",
    "is_locked",
    "is_match_locked",
    # Validation
    "is_complete",
    # Scoring
    "ScoringEngine",
    "ScoreBreakdown",
    "score_prediction",
    # Next action
    "Action",
    "ActionKind",
    "Candidate",
    "ChipType",
    "StatusChip",
    "resolve_next_action",
    # Composition helpers
    "build_open_bracket_candidates",
    "build_open_pick_candidates",
    "locked_waiting_deadline",
    "latest_submission",
    "LeaderboardEntry",
    "build_leaderboard",
]
