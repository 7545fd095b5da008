"""Scheduling failures.

All of them are deterministic functions of their input: the caller fixes the
schedule or picks another date instead of retrying.
"""

from datetime import date


class SchedulingError(Exception):
    """Base class for scheduling-core errors."""


class ScheduleConflictError(SchedulingError):
    """Two ranges on one weekday overlap or leave less than the required break."""

    def __init__(self, day: str, message: str) -> None:
        super().__init__(message)
        self.day = day


class DuplicateOverrideError(SchedulingError):
    def __init__(self, coach_id: int, override_date: date) -> None:
        super().__init__(f"Emergency override already exists for coach {coach_id} on {override_date}")
        self.coach_id = coach_id
        self.override_date = override_date


class InvalidScheduleError(SchedulingError):
    """Malformed schedule handed to the core; a programming error, not user input."""


class SlotUnavailableError(SchedulingError):
    """Requested booking does not match a currently bookable slot."""
