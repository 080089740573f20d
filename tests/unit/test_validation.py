"""Unit tests for prediction completeness rules.

Group predictions need both scores. Knockout predictions need a tie-break
selection only when the predicted scoreline is level.
"""

import math

import pytest

from pickem.models.domain import (
    Decision,
    Match,
    Outcome,
    Prediction,
    Side,
    Stage,
    TieBreak,
)
from pickem.services.validation import (
    is_complete,
    outcome_from_scores,
    predicted_outcome,
    predicted_winner,
    valid_score,
)
from tests.conftest import utc

GROUP_MATCH = Match(id="g-1", stage=Stage.GROUP, kickoff_utc=utc(2026, 6, 11, 18, 0))
KNOCKOUT_MATCH = Match(id="k-1", stage=Stage.QF, kickoff_utc=utc(2026, 7, 9, 18, 0))
PENS_HOME = TieBreak(winner=Side.HOME, decided_by=Decision.PENS)


def make_prediction(match_id="g-1", **kwargs) -> Prediction:
    return Prediction(match_id=match_id, user_id="u-1", **kwargs)


class TestValidScore:
    """Malformed input counts as absent, never raises."""

    @pytest.mark.parametrize("value", [0, 1, 7, 12])
    def test_non_negative_ints_valid(self, value):
        assert valid_score(value) is True

    @pytest.mark.parametrize(
        "value", [None, -1, 1.5, 2.0, math.nan, math.inf, "2", True, False]
    )
    def test_malformed_values_invalid(self, value):
        assert valid_score(value) is False


class TestGroupCompleteness:
    """Group stage: both scores present."""

    def test_both_scores_complete(self):
        assert is_complete(GROUP_MATCH, make_prediction(home_score=1, away_score=0))

    def test_draw_needs_no_tie_break(self):
        assert is_complete(GROUP_MATCH, make_prediction(home_score=1, away_score=1))

    def test_missing_score_incomplete(self):
        assert not is_complete(GROUP_MATCH, make_prediction(home_score=1))
        assert not is_complete(GROUP_MATCH, make_prediction(away_score=1))

    def test_negative_score_incomplete(self):
        assert not is_complete(GROUP_MATCH, make_prediction(home_score=-1, away_score=0))

    def test_non_finite_score_incomplete(self):
        assert not is_complete(
            GROUP_MATCH, make_prediction(home_score=math.inf, away_score=0)
        )

    def test_no_prediction_incomplete(self):
        assert is_complete(GROUP_MATCH, None) is False


class TestKnockoutCompleteness:
    """Knockout stage: tie-break required only for a predicted draw."""

    def test_decisive_scoreline_complete(self):
        prediction = make_prediction("k-1", home_score=2, away_score=1)
        assert is_complete(KNOCKOUT_MATCH, prediction)

    def test_draw_without_tie_break_incomplete(self):
        prediction = make_prediction("k-1", home_score=1, away_score=1)
        assert not is_complete(KNOCKOUT_MATCH, prediction)

    def test_draw_with_tie_break_complete(self):
        prediction = make_prediction("k-1", home_score=1, away_score=1, tie_break=PENS_HOME)
        assert is_complete(KNOCKOUT_MATCH, prediction)

    def test_draw_with_advances_only_complete(self):
        """The single "advances" form carries no decided_by and still counts."""
        prediction = make_prediction(
            "k-1", home_score=0, away_score=0, tie_break=TieBreak(winner=Side.AWAY)
        )
        assert is_complete(KNOCKOUT_MATCH, prediction)

    def test_stale_tie_break_ignored_for_decisive_scoreline(self):
        prediction = make_prediction("k-1", home_score=3, away_score=1, tie_break=PENS_HOME)
        assert is_complete(KNOCKOUT_MATCH, prediction)

    def test_tie_break_without_scores_incomplete(self):
        prediction = make_prediction("k-1", tie_break=PENS_HOME)
        assert not is_complete(KNOCKOUT_MATCH, prediction)


class TestDerivedPredictionFields:
    """Outcome and winner derivation."""

    def test_outcome_from_scores(self):
        assert outcome_from_scores(2, 1) is Outcome.WIN
        assert outcome_from_scores(0, 3) is Outcome.LOSS
        assert outcome_from_scores(1, 1) is Outcome.DRAW
        assert outcome_from_scores(None, 1) is None

    def test_declared_outcome_wins_over_scores(self):
        prediction = make_prediction(home_score=2, away_score=1, outcome=Outcome.DRAW)
        assert predicted_outcome(prediction) is Outcome.DRAW

    def test_outcome_derived_when_not_declared(self):
        prediction = make_prediction(home_score=0, away_score=1)
        assert predicted_outcome(prediction) is Outcome.LOSS

    def test_winner_only_for_predicted_draw(self):
        draw = make_prediction("k-1", home_score=1, away_score=1, tie_break=PENS_HOME)
        decisive = make_prediction("k-1", home_score=2, away_score=1, tie_break=PENS_HOME)
        assert predicted_winner(draw) is Side.HOME
        assert predicted_winner(decisive) is None
