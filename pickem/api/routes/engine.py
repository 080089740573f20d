"""Prediction rules engine API endpoints.

Stateless wrappers around the engine. Request bodies use the loader's
camelCase record shape so they go through the same record adapter as any
other loaded data.
"""

from datetime import datetime, timedelta
from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from pickem.api.dependencies import get_lock_offset, get_schedule, get_scoring_engine
from pickem.errors import ScheduleMissingError
from pickem.models.domain import Decision, MatchStatus, Member, Outcome, Side, Stage
from pickem.models.records import match_from_record, parse_instant, prediction_from_record
from pickem.services.leaderboard import build_leaderboard
from pickem.services.lock_clock import is_locked, lock_instant
from pickem.services.next_action import Candidate, resolve_next_action
from pickem.services.scoring import ScoringEngine, ScoringSchedule
from pickem.services.validation import is_complete

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/engine", tags=["engine"])


class RecordModel(BaseModel):
    """Accepts camelCase or snake_case field names."""

    model_config = ConfigDict(populate_by_name=True)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TeamIn(RecordModel):
    code: str
    name: str


class ScoreIn(RecordModel):
    home: int = Field(ge=0)
    away: int = Field(ge=0)


class MatchIn(RecordModel):
    """Match record."""

    id: str
    stage: Stage
    kickoff_utc: datetime = Field(alias="kickoffUtc")
    status: MatchStatus = MatchStatus.SCHEDULED
    score: ScoreIn | None = None
    winner: Side | None = None
    decided_by: Decision | None = Field(default=None, alias="decidedBy")
    home_team: TeamIn | None = Field(default=None, alias="homeTeam")
    away_team: TeamIn | None = Field(default=None, alias="awayTeam")


class PredictionIn(RecordModel):
    """Prediction record in either tie-break shape."""

    match_id: str = Field(alias="matchId")
    user_id: str = Field(alias="userId")
    # Raw values; the validator decides what counts as a score.
    home_score: Any = Field(default=None, alias="homeScore")
    away_score: Any = Field(default=None, alias="awayScore")
    outcome: Outcome | None = None
    winner: Side | None = None
    decided_by: Decision | None = Field(default=None, alias="decidedBy")
    advances: Side | None = None
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    created_at: datetime | None = Field(default=None, alias="createdAt")


class CandidateIn(RecordModel):
    id: str
    label: str
    deadline_utc: datetime | None = Field(default=None, alias="deadlineUtc")
    kickoff_utc: datetime | None = Field(default=None, alias="kickoffUtc")
    stage_order: int | None = Field(default=None, alias="stageOrder")

    def to_candidate(self) -> Candidate:
        return Candidate(
            id=self.id,
            label=self.label,
            deadline_utc=parse_instant(self.deadline_utc),
            kickoff_utc=parse_instant(self.kickoff_utc),
            stage_order=self.stage_order,
        )


class MemberIn(RecordModel):
    id: str
    name: str


class LockRequest(BaseModel):
    kickoff_utc: datetime
    now: datetime


class LockResponse(BaseModel):
    locked: bool
    lock_instant: datetime


class PredictionRequest(BaseModel):
    match: MatchIn
    prediction: PredictionIn | None = None


class CompleteResponse(BaseModel):
    complete: bool


class ScoreResponse(BaseModel):
    exact_points: int
    result_points: int
    knockout_points: int
    total: int
    exact: bool


class NextActionRequest(BaseModel):
    open_pick_candidates: list[CandidateIn] = Field(default_factory=list)
    open_bracket_candidates: list[CandidateIn] = Field(default_factory=list)
    latest_results_updated_utc: datetime | None = None
    seen_results_updated_utc: datetime | None = None
    locked_waiting_deadline_utc: datetime | None = None
    last_submitted_utc: datetime | None = None
    locked_waiting_unlock_utc: datetime | None = None


class StatusChipOut(BaseModel):
    type: str
    label: str
    at_utc: datetime | None = None


class NextActionResponse(BaseModel):
    kind: str
    target_id: str | None = None
    label: str
    status_chip: StatusChipOut
    reason: str


class LeaderboardRequest(BaseModel):
    members: list[MemberIn]
    matches: list[MatchIn]
    predictions: list[PredictionIn] = Field(default_factory=list)


class LeaderboardItem(BaseModel):
    member_id: str
    member_name: str
    total_points: int
    exact_points: int
    result_points: int
    knockout_points: int
    exact_count: int
    picks_count: int
    earliest_submission: datetime | None = None


def _points_unavailable(e: ScheduleMissingError) -> HTTPException:
    logger.warning("points_unavailable", stage=e.stage)
    return HTTPException(status_code=422, detail=f"points unavailable: {e}")


@router.post("/lock", response_model=LockResponse)
async def lock_state(
    body: LockRequest,
    offset: timedelta = Depends(get_lock_offset),
):
    """Lock state of a kickoff at the supplied instant."""
    kickoff = parse_instant(body.kickoff_utc)
    now = parse_instant(body.now)
    return LockResponse(
        locked=is_locked(kickoff, now, offset),
        lock_instant=lock_instant(kickoff, offset),
    )


@router.post("/complete", response_model=CompleteResponse)
async def completeness(body: PredictionRequest):
    """Whether a prediction is complete for its match's stage."""
    match = match_from_record(body.match.to_record())
    prediction = (
        prediction_from_record(body.prediction.to_record()) if body.prediction else None
    )
    return CompleteResponse(complete=is_complete(match, prediction))


@router.post("/score", response_model=ScoreResponse)
async def score(
    body: PredictionRequest,
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    """
    Points breakdown for one prediction.

    Returns 422 when the match's stage has no scoring schedule entry, so a
    client can show "points unavailable" instead of zero.
    """
    match = match_from_record(body.match.to_record())
    prediction = (
        prediction_from_record(body.prediction.to_record()) if body.prediction else None
    )
    try:
        breakdown = engine.score(match, prediction)
    except ScheduleMissingError as e:
        raise _points_unavailable(e) from e
    return ScoreResponse(**breakdown.to_dict())


@router.post("/next-action", response_model=NextActionResponse)
async def next_action(body: NextActionRequest):
    """Resolve the participant's next recommended action."""
    action = resolve_next_action(
        open_pick_candidates=[c.to_candidate() for c in body.open_pick_candidates],
        open_bracket_candidates=[c.to_candidate() for c in body.open_bracket_candidates],
        latest_results_updated_utc=parse_instant(body.latest_results_updated_utc),
        seen_results_updated_utc=parse_instant(body.seen_results_updated_utc),
        locked_waiting_deadline_utc=parse_instant(body.locked_waiting_deadline_utc),
        last_submitted_utc=parse_instant(body.last_submitted_utc),
        locked_waiting_unlock_utc=parse_instant(body.locked_waiting_unlock_utc),
    )
    return NextActionResponse(
        kind=action.kind.value,
        target_id=action.target_id,
        label=action.label,
        status_chip=StatusChipOut(
            type=action.status_chip.type.value,
            label=action.status_chip.label,
            at_utc=action.status_chip.at_utc,
        ),
        reason=action.reason,
    )


@router.post("/leaderboard", response_model=list[LeaderboardItem])
async def leaderboard(
    body: LeaderboardRequest,
    schedule: ScoringSchedule = Depends(get_schedule),
):
    """Ranked leaderboard over the supplied matches and predictions."""
    try:
        entries = build_leaderboard(
            members=[Member(id=m.id, name=m.name) for m in body.members],
            matches=[match_from_record(m.to_record()) for m in body.matches],
            predictions=[prediction_from_record(p.to_record()) for p in body.predictions],
            schedule=schedule,
        )
    except ScheduleMissingError as e:
        raise _points_unavailable(e) from e
    return [LeaderboardItem(**entry.to_dict()) for entry in entries]
