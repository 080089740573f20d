"""Pytest configuration and fixtures for Pickem tests."""

from datetime import datetime, timezone

import pytest


def utc(*args) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def schedule():
    """Scoring schedule used by the worked examples."""
    from pickem.services.scoring import ScoringSchedule

    return ScoringSchedule.from_config(
        {
            "group": {"exact_score_both": 5, "exact_score_one": 2, "result": 1},
            "knockout": {
                "R16": {
                    "exact_score_both": 5,
                    "exact_score_one": 2,
                    "result": 1,
                    "knockout_winner": 3,
                },
                "QF": {
                    "exact_score_both": 5,
                    "exact_score_one": 2,
                    "result": 1,
                    "knockout_winner": 3,
                },
            },
        }
    )


@pytest.fixture
def sample_matches():
    """Sample fixtures covering each lifecycle state."""
    from pickem.models.domain import (
        Decision,
        Match,
        MatchScore,
        MatchStatus,
        Side,
        Stage,
        Team,
    )

    return {
        "group_finished": Match(
            id="m-1",
            stage=Stage.GROUP,
            kickoff_utc=utc(2026, 6, 11, 18, 0),
            status=MatchStatus.FINISHED,
            score=MatchScore(home=2, away=1),
            home_team=Team(code="MEX", name="Mexico"),
            away_team=Team(code="RSA", name="South Africa"),
        ),
        "group_scheduled": Match(
            id="m-2",
            stage=Stage.GROUP,
            kickoff_utc=utc(2026, 6, 12, 18, 0),
            home_team=Team(code="CAN", name="Canada"),
            away_team=Team(code="QAT", name="Qatar"),
        ),
        "knockout_pens": Match(
            id="m-73",
            stage=Stage.R16,
            kickoff_utc=utc(2026, 7, 4, 18, 0),
            status=MatchStatus.FINISHED,
            score=MatchScore(home=1, away=1),
            winner=Side.HOME,
            decided_by=Decision.PENS,
        ),
        "knockout_regulation": Match(
            id="m-74",
            stage=Stage.R16,
            kickoff_utc=utc(2026, 7, 5, 18, 0),
            status=MatchStatus.FINISHED,
            score=MatchScore(home=0, away=2),
        ),
        "knockout_in_play": Match(
            id="m-75",
            stage=Stage.QF,
            kickoff_utc=utc(2026, 7, 9, 18, 0),
            status=MatchStatus.IN_PLAY,
            score=MatchScore(home=0, away=0),
        ),
    }
