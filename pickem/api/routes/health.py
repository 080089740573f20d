"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from pickem.errors import PickemError
from pickem.models.domain import Stage
from pickem.services.scoring import load_scoring_schedule

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime


class ReadyCheck(BaseModel):
    """Individual readiness check."""

    status: str
    message: str | None = None


class ReadyResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    checks: dict[str, ReadyCheck]


@router.get("/health", response_model=HealthResponse)
async def health():
    """
    Basic health check.

    Returns healthy if the service is running.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/ready", response_model=ReadyResponse)
async def ready():
    """
    Readiness check.

    Checks:
    - Scoring schedule loads and validates
    - Every stage has a schedule entry
    """
    checks = {}

    try:
        schedule = load_scoring_schedule()
        checks["scoring_schedule"] = ReadyCheck(status="ok")
    except PickemError as e:
        checks["scoring_schedule"] = ReadyCheck(status="error", message=str(e))
        return ReadyResponse(ready=False, checks=checks)

    missing = [stage.value for stage in Stage if not schedule.covers(stage)]
    if missing:
        # Not fatal until a match in one of these stages finishes
        checks["stage_coverage"] = ReadyCheck(
            status="warning", message=f"No entry for: {', '.join(missing)}"
        )
    else:
        checks["stage_coverage"] = ReadyCheck(status="ok")

    return ReadyResponse(ready=True, checks=checks)
