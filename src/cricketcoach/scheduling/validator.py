"""Intra-day consistency checks for weekly schedules.

Validation is an explicit step: the persistence layer calls
``validate_schedule`` before it writes, rather than relying on a save hook.
"""

from cricketcoach.scheduling.errors import InvalidScheduleError, ScheduleConflictError
from cricketcoach.scheduling.timeutils import WEEKDAYS, to_minutes
from cricketcoach.schemas.schedule import TimeRange, WeeklySchedule


def ranges_overlap(a_start: str, a_end: str, b_start: str, b_end: str) -> bool:
    """Half-open interval test: ``[a_start, a_end)`` intersects ``[b_start, b_end)``."""
    return not (
        to_minutes(a_end) <= to_minutes(b_start) or to_minutes(a_start) >= to_minutes(b_end)
    )


def check_weekdays(schedule: WeeklySchedule) -> None:
    """Fail fast on weekday keys a validated schedule could never contain."""
    unknown = sorted(set(schedule.weekly_schedule) - set(WEEKDAYS))
    if unknown:
        raise InvalidScheduleError(f"Unrecognized weekday key(s): {', '.join(unknown)}")


def sort_day(ranges: list[TimeRange]) -> list[TimeRange]:
    """Sort a day's ranges in place by start time and return the same list."""
    ranges.sort(key=lambda r: r.start_time)
    return ranges


def validate_schedule(schedule: WeeklySchedule) -> None:
    """Sort every day and check adjacent ranges against ``break_between_slots``.

    Raises ScheduleConflictError naming the first offending weekday. An overlap
    is a negative gap, so it fails the same check. Days sorted before the
    failure stay sorted.
    """
    check_weekdays(schedule)
    required = schedule.break_between_slots

    for day in WEEKDAYS:
        ranges = schedule.weekly_schedule.get(day)
        if not ranges:
            continue
        sort_day(ranges)

        for current, following in zip(ranges, ranges[1:]):
            gap = to_minutes(following.start_time) - to_minutes(current.end_time)
            if gap >= required:
                continue
            if gap < 0:
                detail = "overlap"
            else:
                detail = f"are {gap} minutes apart, {required} required"
            raise ScheduleConflictError(
                day,
                f"Invalid schedule for {day}: {current.start_time}-{current.end_time} "
                f"and {following.start_time}-{following.end_time} {detail}",
            )


def is_time_available(schedule: WeeklySchedule, day: str, start_time: str, end_time: str) -> bool:
    """True if ``[start_time, end_time)`` is disjoint from every active range on ``day``."""
    if day not in WEEKDAYS:
        raise InvalidScheduleError(f"Unrecognized weekday '{day}'")
    return not any(
        ranges_overlap(start_time, end_time, r.start_time, r.end_time)
        for r in schedule.ranges(day)
        if r.is_active
    )
