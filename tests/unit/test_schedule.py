"""Unit tests for scoring schedule loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from pickem.config import Settings
from pickem.errors import ScheduleConfigError, ScheduleMissingError
from pickem.models.domain import Stage
from pickem.services.scoring import ScoringSchedule, load_scoring_schedule


class TestScheduleFromConfig:
    """Test schedule validation."""

    def test_knockout_stage_keys_parsed(self, schedule):
        assert schedule.covers(Stage.GROUP)
        assert schedule.covers(Stage.R16)
        assert not schedule.covers(Stage.FINAL)
        assert schedule.for_stage(Stage.R16).knockout_winner == 3

    def test_knockout_entry_requires_knockout_winner(self):
        with pytest.raises(ScheduleConfigError):
            ScoringSchedule.from_config(
                {"knockout": {"SF": {"exact_score_both": 5, "exact_score_one": 2, "result": 1}}}
            )

    def test_negative_points_rejected(self):
        with pytest.raises(ScheduleConfigError):
            ScoringSchedule.from_config(
                {"group": {"exact_score_both": -1, "exact_score_one": 2, "result": 1}}
            )

    def test_group_not_allowed_under_knockout(self):
        with pytest.raises(ScheduleConfigError):
            ScoringSchedule.from_config(
                {
                    "knockout": {
                        "Group": {
                            "exact_score_both": 1,
                            "exact_score_one": 1,
                            "result": 1,
                            "knockout_winner": 1,
                        }
                    }
                }
            )

    def test_unknown_stage_rejected(self):
        with pytest.raises(ScheduleConfigError):
            ScoringSchedule.from_config(
                {
                    "knockout": {
                        "R64": {
                            "exact_score_both": 1,
                            "exact_score_one": 1,
                            "result": 1,
                            "knockout_winner": 1,
                        }
                    }
                }
            )

    def test_schedule_is_immutable(self, schedule):
        with pytest.raises(ValidationError):
            schedule.group = None


class TestStageLookup:
    """Missing entries are reported, never defaulted."""

    def test_for_stage_missing_raises(self, schedule):
        with pytest.raises(ScheduleMissingError) as exc_info:
            schedule.for_stage(Stage.FINAL)
        assert exc_info.value.stage == "Final"

    def test_validate_covers_reports_earliest_missing_stage(self, schedule):
        with pytest.raises(ScheduleMissingError) as exc_info:
            schedule.validate_covers([Stage.FINAL, Stage.SF, Stage.GROUP])
        assert exc_info.value.stage == "SF"

    def test_validate_covers_passes(self, schedule):
        schedule.validate_covers([Stage.GROUP, Stage.R16, Stage.QF])


class TestLoadScoringSchedule:
    """Test loading from defaults.yaml."""

    def test_bundled_defaults_cover_every_stage(self):
        schedule = load_scoring_schedule(Settings())
        for stage in Stage:
            assert schedule.covers(stage), f"Bundled defaults missing {stage.value}"

    def test_fallback_when_file_missing(self, tmp_path):
        settings = Settings(config_path=tmp_path / "missing.yaml")
        schedule = load_scoring_schedule(settings)
        assert schedule.covers(Stage.GROUP)
        assert schedule.covers(Stage.FINAL)

    def test_loads_custom_file(self, tmp_path):
        config_file: Path = tmp_path / "defaults.yaml"
        config_file.write_text(
            "scoring:\n"
            "  group:\n"
            "    exact_score_both: 10\n"
            "    exact_score_one: 4\n"
            "    result: 2\n"
        )
        schedule = load_scoring_schedule(Settings(config_path=config_file))

        assert schedule.for_stage(Stage.GROUP).exact_score_both == 10
        assert not schedule.covers(Stage.R32)
