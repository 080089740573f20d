"""Configuration API endpoints."""

from fastapi import APIRouter, Depends

from pickem.api.dependencies import get_schedule
from pickem.config import get_settings
from pickem.services.scoring import ScoringSchedule

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("/scoring")
async def get_scoring_config(schedule: ScoringSchedule = Depends(get_schedule)):
    """Get the active scoring schedule."""
    return schedule.model_dump(mode="json", exclude_none=True)


@router.get("/lock")
async def get_lock_config():
    """Get the prediction lock window."""
    settings = get_settings()
    return {"lock_offset_minutes": settings.lock_offset_minutes}
