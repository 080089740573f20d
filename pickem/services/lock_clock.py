"""Prediction lock clock.

Predictions freeze a fixed offset before kickoff. ``now`` is always passed
in by the caller; nothing here reads the system clock.
"""

from datetime import datetime, timedelta

from pickem.models.domain import Match, MatchStatus

LOCK_OFFSET = timedelta(minutes=30)


def lock_instant(kickoff_utc: datetime, offset: timedelta = LOCK_OFFSET) -> datetime:
    """Instant after which predictions for a kickoff can no longer change."""
    return kickoff_utc - offset


def is_locked(
    kickoff_utc: datetime,
    now: datetime,
    offset: timedelta = LOCK_OFFSET,
) -> bool:
    """True once ``now`` has reached the lock instant."""
    return now >= lock_instant(kickoff_utc, offset)


def is_match_locked(
    match: Match,
    now: datetime,
    offset: timedelta = LOCK_OFFSET,
) -> bool:
    """
    Lock state for a match.

    Status is authoritative: a match that is already in play or finished is
    locked even if the clock says otherwise (early kickoff).
    """
    if match.status is not MatchStatus.SCHEDULED:
        return True
    return is_locked(match.kickoff_utc, now, offset)
