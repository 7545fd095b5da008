from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from cricketcoach.scheduling.timeutils import (
    TIME_PATTERN,
    WEEKDAYS,
    is_known_timezone,
    normalize_time,
)


def _empty_week() -> dict[str, list["TimeRange"]]:
    return {day: [] for day in WEEKDAYS}


class TimeRange(BaseModel):
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    is_active: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def _zero_pad(cls, value: str) -> str:
        return normalize_time(value)

    @model_validator(mode="after")
    def _check_order(self) -> "TimeRange":
        # Ranges crossing midnight are not supported
        if self.start_time >= self.end_time:
            raise ValueError(
                f"end_time {self.end_time} must be after start_time {self.start_time}"
            )
        return self


class WeeklySchedule(BaseModel):
    """A coach's recurring week: time ranges per weekday plus booking policies."""

    weekly_schedule: dict[str, list[TimeRange]] = Field(default_factory=_empty_week)
    timezone: str = "UTC"
    default_duration: int = Field(default=60, ge=15, le=180)  # minutes
    booking_cutoff_hours: int = Field(default=12, ge=0, le=72)
    break_between_slots: int = Field(default=0, ge=0, le=60)  # minutes

    @field_validator("weekly_schedule")
    @classmethod
    def _known_weekdays(cls, value: dict[str, list[TimeRange]]) -> dict[str, list[TimeRange]]:
        unknown = sorted(set(value) - set(WEEKDAYS))
        if unknown:
            raise ValueError(f"Unknown weekday(s): {', '.join(unknown)}")
        return {day: list(value.get(day, [])) for day in WEEKDAYS}

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if not is_known_timezone(value):
            raise ValueError(f"Unknown timezone '{value}'")
        return value

    def ranges(self, day: str) -> list[TimeRange]:
        return self.weekly_schedule.get(day, [])


class WeeklyScheduleRead(WeeklySchedule):
    coach_id: int
    updated_at: datetime


class ScheduleSettingsUpdate(BaseModel):
    timezone: str | None = None
    default_duration: int | None = Field(default=None, ge=15, le=180)
    booking_cutoff_hours: int | None = Field(default=None, ge=0, le=72)
    break_between_slots: int | None = Field(default=None, ge=0, le=60)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str | None) -> str | None:
        if value is not None and not is_known_timezone(value):
            raise ValueError(f"Unknown timezone '{value}'")
        return value
