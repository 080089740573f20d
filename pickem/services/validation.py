"""Prediction completeness rules.

Group predictions need both scores. Knockout predictions also need a
tie-break selection when the predicted scoreline is level, since a knockout
match cannot end drawn.

Malformed scores (negative, fractional, non-finite, non-numeric) count as
absent. Nothing in this module raises on user input.
"""

from pickem.models.domain import Match, Outcome, Prediction, Side


def valid_score(value: object) -> bool:
    """Whether a predicted score counts as present."""
    # bool is an int subclass; True is not a score
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return value >= 0


def has_scores(prediction: Prediction) -> bool:
    return valid_score(prediction.home_score) and valid_score(prediction.away_score)


def predicts_draw(prediction: Prediction) -> bool:
    return has_scores(prediction) and prediction.home_score == prediction.away_score


def is_complete(match: Match, prediction: Prediction | None) -> bool:
    """Whether a prediction is complete for the match's stage."""
    if prediction is None or not has_scores(prediction):
        return False

    if not match.stage.is_knockout:
        return True

    # A stored tie-break only matters when a draw is predicted
    if prediction.home_score == prediction.away_score:
        return prediction.tie_break is not None
    return True


def outcome_from_scores(home: object, away: object) -> Outcome | None:
    """Home-perspective outcome for a pair of scores, None if either is invalid."""
    if not (valid_score(home) and valid_score(away)):
        return None
    if home > away:
        return Outcome.WIN
    if home < away:
        return Outcome.LOSS
    return Outcome.DRAW


def predicted_outcome(prediction: Prediction) -> Outcome | None:
    """Declared outcome if there is one, else derived from the scores."""
    if prediction.outcome is not None:
        return prediction.outcome
    return outcome_from_scores(prediction.home_score, prediction.away_score)


def predicted_winner(prediction: Prediction) -> Side | None:
    """Side the participant expects to advance from a level scoreline."""
    if prediction.tie_break is None or not predicts_draw(prediction):
        return None
    return prediction.tie_break.winner
