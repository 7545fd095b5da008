from cricketcoach.models.booking import Booking
from cricketcoach.models.coach import Coach
from cricketcoach.models.override import EmergencyOverride
from cricketcoach.models.schedule import CoachSchedule, ScheduleTimeRange

__all__ = [
    "Booking",
    "Coach",
    "CoachSchedule",
    "EmergencyOverride",
    "ScheduleTimeRange",
]
