"""Prediction scoring engine.

Converts a finished match result plus a participant's prediction into a
points breakdown under a per-stage scoring schedule.

Three independent, additive components:
- exact: both scores right, or exactly one score right
- result: predicted outcome (win/draw/loss) matches the regulation outcome
- knockout: predicted tie-break winner matches a match settled in extra
  time or on penalties

A finished match whose stage has no schedule entry raises
ScheduleMissingError. An unfinished match or an incomplete prediction is
the normal case and scores zero.
"""

from dataclasses import dataclass
from typing import Any

import structlog

from pickem.models.domain import TIE_BREAK_DECISIONS, Match, Prediction
from pickem.services.scoring.schedule import (
    ScoringSchedule,
    StageScoring,
    get_scoring_schedule,
)
from pickem.services.validation import (
    is_complete,
    outcome_from_scores,
    predicted_outcome,
    predicted_winner,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Points for one prediction, by component."""

    exact_points: int = 0
    result_points: int = 0
    knockout_points: int = 0

    # Both scores hit; counted separately on the leaderboard
    exact: bool = False

    @property
    def total(self) -> int:
        return self.exact_points + self.result_points + self.knockout_points

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "exact_points": self.exact_points,
            "result_points": self.result_points,
            "knockout_points": self.knockout_points,
            "total": self.total,
            "exact": self.exact,
        }


ZERO_BREAKDOWN = ScoreBreakdown()


class ScoringEngine:
    """
    Score predictions against finished matches.

    total = exact + result + knockout, each component >= 0.
    """

    def __init__(self, schedule: ScoringSchedule | None = None):
        """
        Initialize scoring engine.

        Args:
            schedule: Optional scoring schedule. If not provided, loads the
                     cached schedule from defaults.yaml
        """
        self.schedule = schedule if schedule is not None else get_scoring_schedule()

    @staticmethod
    def score_exact(match: Match, prediction: Prediction, entry: StageScoring) -> tuple[int, bool]:
        """
        Exact-score component.

        Returns (points, both_hit).
        """
        home_hit = prediction.home_score == match.score.home
        away_hit = prediction.away_score == match.score.away

        if home_hit and away_hit:
            return entry.exact_score_both, True
        if home_hit or away_hit:
            return entry.exact_score_one, False
        return 0, False

    @staticmethod
    def score_result(match: Match, prediction: Prediction, entry: StageScoring) -> int:
        """Outcome component, judged on the regulation score."""
        actual = outcome_from_scores(match.score.home, match.score.away)
        if actual is not None and predicted_outcome(prediction) == actual:
            return entry.result
        return 0

    @staticmethod
    def score_knockout(match: Match, prediction: Prediction, entry: StageScoring) -> int:
        """
        Knockout-winner component.

        Only applies to a knockout match level after regulation and settled
        in extra time or on penalties.
        """
        if not match.stage.is_knockout:
            return 0
        if match.winner is None or match.decided_by not in TIE_BREAK_DECISIONS:
            return 0
        if predicted_winner(prediction) == match.winner:
            return entry.knockout_winner or 0
        return 0

    def score(self, match: Match, prediction: Prediction | None) -> ScoreBreakdown:
        """
        Calculate the points breakdown for one prediction.

        Args:
            match: The fixture, with its result if finished
            prediction: The participant's prediction, or None

        Returns:
            ScoreBreakdown; all zero unless the match is finished with a score
            and the prediction is complete

        Raises:
            ScheduleMissingError: the match is finished but its stage has no
                schedule entry
        """
        if not match.is_finished or match.score is None:
            return ZERO_BREAKDOWN

        # Resolve first so a missing entry is never mistaken for zero points
        entry = self.schedule.for_stage(match.stage)

        if not is_complete(match, prediction):
            return ZERO_BREAKDOWN

        exact_points, exact = self.score_exact(match, prediction, entry)
        breakdown = ScoreBreakdown(
            exact_points=exact_points,
            result_points=self.score_result(match, prediction, entry),
            knockout_points=self.score_knockout(match, prediction, entry),
            exact=exact,
        )

        logger.debug(
            "prediction_scored",
            match_id=match.id,
            user_id=prediction.user_id,
            stage=match.stage.value,
            exact=breakdown.exact_points,
            result=breakdown.result_points,
            knockout=breakdown.knockout_points,
            total=breakdown.total,
        )

        return breakdown


# Convenience function for one-off scoring
def score_prediction(
    match: Match,
    prediction: Prediction | None,
    schedule: ScoringSchedule | None = None,
) -> ScoreBreakdown:
    """
    Score a single prediction.

    Args:
        match: The fixture
        prediction: The participant's prediction
        schedule: Scoring schedule; the cached default when omitted

    Returns:
        ScoreBreakdown
    """
    return ScoringEngine(schedule).score(match, prediction)
