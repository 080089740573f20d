"""FastAPI dependencies for Pickem."""

from datetime import timedelta

from pickem.config import get_settings
from pickem.services.scoring import ScoringEngine, ScoringSchedule, get_scoring_schedule


def get_schedule() -> ScoringSchedule:
    """Get the scoring schedule dependency."""
    return get_scoring_schedule()


def get_scoring_engine() -> ScoringEngine:
    """Get scoring engine dependency."""
    return ScoringEngine(get_scoring_schedule())


def get_lock_offset() -> timedelta:
    """Get the configured lock offset."""
    return get_settings().lock_offset
