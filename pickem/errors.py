"""Exceptions raised by the Pickem engine."""


class PickemError(Exception):
    """Base class for all Pickem errors."""


class ScheduleMissingError(PickemError, LookupError):
    """A finished match's stage has no scoring schedule entry.

    Raised instead of returning a zero breakdown so callers can show
    "points unavailable" rather than a misleading zero.
    """

    def __init__(self, stage: str):
        super().__init__(f"No scoring schedule entry for stage {stage!r}")
        self.stage = stage


class ScheduleConfigError(PickemError, ValueError):
    """The scoring schedule configuration is malformed."""
