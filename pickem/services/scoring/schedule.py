"""Scoring schedule: per-stage point values.

Loaded once from defaults.yaml and never mutated. A stage without an entry
is a configuration error surfaced at scoring time, never a silent zero.
"""

from collections.abc import Iterable
from functools import lru_cache
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from pickem.config import Settings, get_settings
from pickem.errors import ScheduleConfigError, ScheduleMissingError
from pickem.models.domain import Stage

logger = structlog.get_logger(__name__)


class StageScoring(BaseModel):
    """Point values for one stage."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    exact_score_both: int = Field(ge=0)
    exact_score_one: int = Field(ge=0)
    result: int = Field(ge=0)
    knockout_winner: int | None = Field(default=None, ge=0)


class ScoringSchedule(BaseModel):
    """
    Complete scoring configuration.

    One entry for the group stage and one per knockout stage. Knockout
    entries must carry knockout_winner.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    group: StageScoring | None = None
    knockout: dict[Stage, StageScoring] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_knockout_entries(self) -> "ScoringSchedule":
        for stage, entry in self.knockout.items():
            if not stage.is_knockout:
                raise ValueError(f"{stage.value} is not a knockout stage")
            if entry.knockout_winner is None:
                raise ValueError(f"Missing knockout_winner for stage {stage.value}")
        return self

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ScoringSchedule":
        """Build a schedule from the ``scoring`` section of defaults.yaml."""
        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise ScheduleConfigError(f"Invalid scoring schedule: {e}") from e

    def covers(self, stage: Stage) -> bool:
        if stage is Stage.GROUP:
            return self.group is not None
        return stage in self.knockout

    def for_stage(self, stage: Stage) -> StageScoring:
        """Get the entry for a stage, raising ScheduleMissingError if absent."""
        entry = self.group if stage is Stage.GROUP else self.knockout.get(stage)
        if entry is None:
            logger.warning("schedule_missing", stage=stage.value)
            raise ScheduleMissingError(stage.value)
        return entry

    def validate_covers(self, stages: Iterable[Stage]) -> None:
        """Raise ScheduleMissingError for the first stage without an entry."""
        for stage in sorted(set(stages), key=lambda s: s.order):
            self.for_stage(stage)


def _get_fallback_config() -> dict[str, Any]:
    """Fallback schedule if defaults.yaml is not found."""
    knockout_entry = {
        "exact_score_both": 4,
        "exact_score_one": 1,
        "result": 2,
        "knockout_winner": 2,
    }
    return {
        "group": {"exact_score_both": 3, "exact_score_one": 1, "result": 1},
        "knockout": {
            stage.value: dict(knockout_entry)
            for stage in Stage
            if stage.is_knockout
        },
    }


def load_scoring_schedule(settings: Settings | None = None) -> ScoringSchedule:
    """Load the scoring schedule from the configured defaults file."""
    settings = settings or get_settings()
    config = settings.load_defaults_config().get("scoring")
    if not config:
        logger.info("scoring_schedule_fallback", path=str(settings.config_path))
        config = _get_fallback_config()
    schedule = ScoringSchedule.from_config(config)
    logger.debug(
        "scoring_schedule_loaded",
        group=schedule.group is not None,
        knockout=sorted(s.value for s in schedule.knockout),
    )
    return schedule


@lru_cache
def get_scoring_schedule() -> ScoringSchedule:
    """Get the cached scoring schedule."""
    return load_scoring_schedule()
