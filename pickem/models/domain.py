"""Domain models for Pickem.

Plain value types shared by every engine component. The engine only ever
reads these: matches and the scoring schedule come from the data loader,
predictions come from the participant. Everything here is frozen so equal
inputs compare equal and can be memoised by callers.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Stage(str, Enum):
    """Tournament phases, in bracket order."""

    GROUP = "Group"
    R32 = "R32"
    R16 = "R16"
    QF = "QF"
    SF = "SF"
    THIRD = "Third"
    FINAL = "Final"

    @property
    def is_knockout(self) -> bool:
        return self is not Stage.GROUP

    @property
    def order(self) -> int:
        return STAGE_ORDER[self]


STAGE_ORDER: dict[Stage, int] = {
    Stage.GROUP: 1,
    Stage.R32: 2,
    Stage.R16: 3,
    Stage.QF: 4,
    Stage.SF: 5,
    Stage.THIRD: 6,
    Stage.FINAL: 7,
}

KNOCKOUT_STAGES: tuple[Stage, ...] = tuple(s for s in Stage if s.is_knockout)


class MatchStatus(str, Enum):
    """Lifecycle of a fixture as reported by the data source."""

    SCHEDULED = "SCHEDULED"
    IN_PLAY = "IN_PLAY"
    FINISHED = "FINISHED"


class Side(str, Enum):
    """Home or away side of a fixture."""

    HOME = "HOME"
    AWAY = "AWAY"


class Decision(str, Enum):
    """How a match was settled."""

    REG = "REG"    # Regulation time
    ET = "ET"      # Extra time
    PENS = "PENS"  # Penalty shoot-out


TIE_BREAK_DECISIONS = frozenset({Decision.ET, Decision.PENS})


class Outcome(str, Enum):
    """Match outcome from the home side's perspective."""

    WIN = "WIN"
    DRAW = "DRAW"
    LOSS = "LOSS"


@dataclass(frozen=True)
class Team:
    code: str
    name: str


@dataclass(frozen=True)
class MatchScore:
    """Regulation score."""

    home: int
    away: int


@dataclass(frozen=True)
class Match:
    """
    A scheduled fixture.

    winner/decided_by are only meaningful for a finished knockout match
    that was level after regulation.
    """

    id: str
    stage: Stage
    kickoff_utc: datetime
    status: MatchStatus = MatchStatus.SCHEDULED
    score: MatchScore | None = None
    winner: Side | None = None
    decided_by: Decision | None = None
    home_team: Team | None = None
    away_team: Team | None = None

    @property
    def is_finished(self) -> bool:
        return self.status is MatchStatus.FINISHED

    @property
    def label(self) -> str:
        """Human label used for candidates, e.g. "Mexico vs Canada"."""
        if self.home_team and self.away_team:
            return f"{self.home_team.name} vs {self.away_team.name}"
        return self.id


@dataclass(frozen=True)
class TieBreak:
    """
    Participant's pick for who survives a predicted knockout draw.

    decided_by is None when the record only said which side advances.
    """

    winner: Side
    decided_by: Decision | None = None


@dataclass(frozen=True)
class Prediction:
    """
    One participant's forecast for one match.

    Score fields are typed loosely on purpose: they carry whatever the
    participant typed, and the validator decides whether they count.
    """

    match_id: str
    user_id: str
    home_score: object = None
    away_score: object = None
    outcome: Outcome | None = None
    tie_break: TieBreak | None = None
    updated_at: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Member:
    """Leaderboard participant."""

    id: str
    name: str
