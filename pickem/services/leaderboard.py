"""Leaderboard aggregation.

Sums score breakdowns per participant over every finished match and ranks
them. Ranking: total, exact, result, knockout points (all descending), then
earliest submission, then name.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import structlog

from pickem.models.domain import Match, Member, Prediction
from pickem.models.records import parse_instant
from pickem.services.scoring.engine import ScoringEngine
from pickem.services.scoring.schedule import ScoringSchedule
from pickem.services.validation import is_complete

logger = structlog.get_logger(__name__)


@dataclass
class LeaderboardEntry:
    """Running totals for one participant."""

    member: Member
    total_points: int = 0
    exact_points: int = 0
    result_points: int = 0
    knockout_points: int = 0
    exact_count: int = 0
    picks_count: int = 0
    earliest_submission: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "member_id": self.member.id,
            "member_name": self.member.name,
            "total_points": self.total_points,
            "exact_points": self.exact_points,
            "result_points": self.result_points,
            "knockout_points": self.knockout_points,
            "exact_count": self.exact_count,
            "picks_count": self.picks_count,
            "earliest_submission": self.earliest_submission,
        }


def _ranking_key(entry: LeaderboardEntry) -> tuple:
    submitted = (
        entry.earliest_submission.timestamp()
        if entry.earliest_submission is not None
        else math.inf
    )
    return (
        -entry.total_points,
        -entry.exact_points,
        -entry.result_points,
        -entry.knockout_points,
        submitted,
        entry.member.name,
    )


def build_leaderboard(
    members: Sequence[Member],
    matches: Sequence[Match],
    predictions: Iterable[Prediction],
    schedule: ScoringSchedule | None = None,
) -> list[LeaderboardEntry]:
    """
    Build the ranked leaderboard.

    Args:
        members: Participants to rank; predictions from anyone else are ignored
        matches: All fixtures
        predictions: Predictions from every participant
        schedule: Scoring schedule; the cached default when omitted

    Returns:
        Entries, best first

    Raises:
        ScheduleMissingError: a finished match's stage has no schedule entry
    """
    engine = ScoringEngine(schedule)
    match_by_id = {match.id: match for match in matches}
    engine.schedule.validate_covers(m.stage for m in matches if m.is_finished)

    entries = {member.id: LeaderboardEntry(member=member) for member in members}
    skipped = 0

    for prediction in predictions:
        match = match_by_id.get(prediction.match_id)
        entry = entries.get(prediction.user_id)
        if match is None or entry is None:
            skipped += 1
            continue
        if not match.is_finished or not is_complete(match, prediction):
            continue

        breakdown = engine.score(match, prediction)
        entry.exact_points += breakdown.exact_points
        entry.result_points += breakdown.result_points
        entry.knockout_points += breakdown.knockout_points
        entry.total_points += breakdown.total
        entry.picks_count += 1
        if breakdown.exact:
            entry.exact_count += 1

        submitted = parse_instant(prediction.created_at or prediction.updated_at)
        if submitted is not None and (
            entry.earliest_submission is None or submitted < entry.earliest_submission
        ):
            entry.earliest_submission = submitted

    if skipped:
        logger.info("leaderboard_predictions_skipped", count=skipped)

    return sorted(entries.values(), key=_ranking_key)
