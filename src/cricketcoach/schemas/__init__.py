from cricketcoach.schemas.availability import BookableSlot, TimeCheckRead
from cricketcoach.schemas.booking import BookingCreate, BookingRead
from cricketcoach.schemas.coach import CoachCreate, CoachRead
from cricketcoach.schemas.override import (
    EmergencyOverrideCreate,
    EmergencyOverrideRead,
    OverrideOptions,
)
from cricketcoach.schemas.schedule import (
    ScheduleSettingsUpdate,
    TimeRange,
    WeeklySchedule,
    WeeklyScheduleRead,
)
from cricketcoach.schemas.system import StatusResponse

__all__ = [
    "BookableSlot",
    "BookingCreate",
    "BookingRead",
    "CoachCreate",
    "CoachRead",
    "EmergencyOverrideCreate",
    "EmergencyOverrideRead",
    "OverrideOptions",
    "ScheduleSettingsUpdate",
    "StatusResponse",
    "TimeCheckRead",
    "TimeRange",
    "WeeklySchedule",
    "WeeklyScheduleRead",
]
