"""Turn a weekly schedule into concrete, dated slots a client can book."""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

import pytz

from cricketcoach.scheduling.errors import InvalidScheduleError
from cricketcoach.scheduling.timeutils import date_window, local_to_utc, weekday_name
from cricketcoach.scheduling.validator import check_weekdays, ranges_overlap
from cricketcoach.schemas.availability import BookableSlot
from cricketcoach.schemas.schedule import WeeklySchedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookedInterval:
    """An already-reserved ``[start_time, end_time)`` on one date, coach timezone."""

    date: date
    start_time: str
    end_time: str


def resolve_availability(
    schedule: WeeklySchedule,
    window_start: date | datetime,
    window_days: int,
    existing_bookings: Iterable[BookedInterval] = (),
    overrides: Iterable[date] = (),
    now: datetime | None = None,
) -> list[BookableSlot]:
    """Materialize the bookable slots of ``schedule`` over a look-ahead window.

    Dates covered are ``[window_start, window_start + window_days)``. A
    ``datetime`` window start is first converted to its calendar date in the
    schedule's timezone. Then, per date:

    1. Dates listed in ``overrides`` offer nothing.
    2. Every active range of the date's weekday becomes a slot.
    3. Slots starting less than ``booking_cutoff_hours`` after ``now`` are
       dropped; a slot exactly at the cutoff is kept.
    4. Slots overlapping an existing booking on that date are dropped.

    The result is sorted by ``(date, start_time)``. It is a snapshot: whoever
    commits a booking must re-check the slot at commit time.
    """
    check_weekdays(schedule)
    if window_days < 0:
        raise InvalidScheduleError(f"window_days must not be negative, got {window_days}")

    now = now or datetime.now(pytz.utc)
    if now.tzinfo is None:
        now = pytz.utc.localize(now)
    if isinstance(window_start, datetime):
        if window_start.tzinfo is None:
            window_start = pytz.utc.localize(window_start)
        window_start = window_start.astimezone(pytz.timezone(schedule.timezone)).date()

    blocked = set(overrides)
    booked: dict[date, list[BookedInterval]] = defaultdict(list)
    for interval in existing_bookings:
        booked[interval.date].append(interval)
    cutoff = timedelta(hours=schedule.booking_cutoff_hours)

    slots: list[BookableSlot] = []
    for day_date in date_window(window_start, window_days):
        if day_date in blocked:
            continue
        day = weekday_name(day_date)

        for time_range in schedule.ranges(day):
            if not time_range.is_active:
                continue

            starts_at = local_to_utc(day_date, time_range.start_time, schedule.timezone)
            if starts_at - now < cutoff:
                continue

            if any(
                ranges_overlap(
                    time_range.start_time, time_range.end_time, b.start_time, b.end_time
                )
                for b in booked.get(day_date, ())
            ):
                continue

            slots.append(
                BookableSlot(
                    day=day,
                    date=day_date,
                    start_time=time_range.start_time,
                    end_time=time_range.end_time,
                    starts_at=starts_at,
                )
            )

    slots.sort(key=lambda s: (s.date, s.start_time))
    logger.debug(
        "Resolved %d slot(s) from %s over %d day(s), %d date(s) overridden",
        len(slots),
        window_start,
        window_days,
        len(blocked),
    )
    return slots
