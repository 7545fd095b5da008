"""Persistence side of the scheduling core.

Loads schedules, bookings and overrides for the resolver, writes schedules
after explicit validation, and commits bookings with a conditional insert
keyed by ``(coach, date, start_time)``.
"""

import logging
from datetime import date, datetime, timedelta

import pytz
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cricketcoach.models.booking import Booking
from cricketcoach.models.schedule import CoachSchedule, ScheduleTimeRange
from cricketcoach.scheduling.errors import SlotUnavailableError
from cricketcoach.scheduling.overrides import list_overrides
from cricketcoach.scheduling.resolver import BookedInterval, resolve_availability
from cricketcoach.scheduling.timeutils import WEEKDAYS, today_in
from cricketcoach.scheduling.validator import validate_schedule
from cricketcoach.schemas.availability import BookableSlot
from cricketcoach.schemas.booking import BookingCreate
from cricketcoach.schemas.schedule import ScheduleSettingsUpdate, TimeRange, WeeklySchedule

logger = logging.getLogger(__name__)


async def get_schedule_row(session: AsyncSession, coach_id: int) -> CoachSchedule | None:
    stmt = select(CoachSchedule).where(CoachSchedule.coach_id == coach_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def load_weekly_schedule(session: AsyncSession, row: CoachSchedule) -> WeeklySchedule:
    """Rebuild the domain schedule from a stored row and its time ranges."""
    stmt = (
        select(ScheduleTimeRange)
        .where(ScheduleTimeRange.schedule_id == row.id)
        .order_by(ScheduleTimeRange.start_time)
    )
    result = await session.execute(stmt)

    week: dict[str, list[TimeRange]] = {day: [] for day in WEEKDAYS}
    for stored in result.scalars().all():
        week.setdefault(stored.day_of_week, []).append(
            TimeRange(
                start_time=stored.start_time,
                end_time=stored.end_time,
                is_active=stored.is_active,
            )
        )
    return WeeklySchedule(
        weekly_schedule=week,
        timezone=row.timezone,
        default_duration=row.default_duration,
        booking_cutoff_hours=row.booking_cutoff_hours,
        break_between_slots=row.break_between_slots,
    )


async def get_schedule(session: AsyncSession, coach_id: int) -> WeeklySchedule | None:
    row = await get_schedule_row(session, coach_id)
    if row is None:
        return None
    return await load_weekly_schedule(session, row)


async def save_schedule(
    session: AsyncSession, coach_id: int, schedule: WeeklySchedule
) -> CoachSchedule:
    """Validate, then create or replace the coach's single schedule.

    Raises ScheduleConflictError before anything is written.
    """
    validate_schedule(schedule)

    row = await get_schedule_row(session, coach_id)
    if row is None:
        row = CoachSchedule(coach_id=coach_id)
        session.add(row)
        await session.flush()
    else:
        await session.execute(
            delete(ScheduleTimeRange).where(ScheduleTimeRange.schedule_id == row.id)
        )

    row.timezone = schedule.timezone
    row.default_duration = schedule.default_duration
    row.booking_cutoff_hours = schedule.booking_cutoff_hours
    row.break_between_slots = schedule.break_between_slots
    row.updated_at = datetime.utcnow()

    count = 0
    for day in WEEKDAYS:
        for time_range in schedule.ranges(day):
            session.add(
                ScheduleTimeRange(
                    schedule_id=row.id,
                    day_of_week=day,
                    start_time=time_range.start_time,
                    end_time=time_range.end_time,
                    is_active=time_range.is_active,
                )
            )
            count += 1

    await session.commit()
    await session.refresh(row)
    logger.info("Saved schedule for coach %s with %d time range(s)", coach_id, count)
    return row


async def update_schedule_settings(
    session: AsyncSession, coach_id: int, update: ScheduleSettingsUpdate
) -> CoachSchedule:
    """Apply a partial update of the policy scalars, creating the schedule if needed.

    The merged schedule is revalidated, so raising the break can fail with
    ScheduleConflictError.
    """
    current = await get_schedule(session, coach_id) or WeeklySchedule()
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    merged = current.model_copy(update=changes)
    return await save_schedule(session, coach_id, merged)


async def get_booked_intervals(
    session: AsyncSession, coach_id: int, start: date, end: date
) -> list[BookedInterval]:
    """Bookings with ``start <= booking_date <= end`` as resolver intervals."""
    stmt = select(Booking).where(
        Booking.coach_id == coach_id,
        Booking.booking_date >= start,
        Booking.booking_date <= end,
    )
    result = await session.execute(stmt)
    return [
        BookedInterval(date=b.booking_date, start_time=b.start_time, end_time=b.end_time)
        for b in result.scalars().all()
    ]


async def get_override_dates(
    session: AsyncSession, coach_id: int, start: date, end: date
) -> set[date]:
    return {o.override_date for o in await list_overrides(session, coach_id, start, end)}


async def get_available_slots(
    session: AsyncSession,
    coach_id: int,
    window_start: date | None,
    window_days: int,
    now: datetime | None = None,
) -> list[BookableSlot]:
    """Resolve a coach's bookable slots from current stored state.

    ``window_start`` defaults to today in the coach's timezone. A coach with
    no schedule has no availability.
    """
    schedule = await get_schedule(session, coach_id)
    if schedule is None:
        return []

    now = now or datetime.now(pytz.utc)
    start = window_start or today_in(schedule.timezone, now)
    end = start + timedelta(days=max(window_days - 1, 0))

    bookings = await get_booked_intervals(session, coach_id, start, end)
    overrides = await get_override_dates(session, coach_id, start, end)
    return resolve_availability(
        schedule,
        start,
        window_days,
        existing_bookings=bookings,
        overrides=overrides,
        now=now,
    )


async def book_slot(
    session: AsyncSession,
    coach_id: int,
    booking: BookingCreate,
    now: datetime | None = None,
) -> Booking:
    """Commit a booking against a slot that is bookable right now.

    The slot is re-resolved from fresh data and must match the request
    exactly. The unique ``(coach, date, start_time)`` constraint rejects a
    booking that lost a race with a concurrent one. Either way the caller
    gets SlotUnavailableError and may pick another slot.
    """
    slots = await get_available_slots(session, coach_id, booking.booking_date, 1, now=now)
    if not any(
        s.start_time == booking.start_time and s.end_time == booking.end_time for s in slots
    ):
        logger.warning(
            "Rejected booking for coach %s on %s %s-%s: not bookable",
            coach_id,
            booking.booking_date,
            booking.start_time,
            booking.end_time,
        )
        raise SlotUnavailableError(
            f"No bookable slot {booking.start_time}-{booking.end_time} on {booking.booking_date}"
        )

    row = Booking(
        coach_id=coach_id,
        client_name=booking.client_name,
        client_email=booking.client_email,
        booking_date=booking.booking_date,
        start_time=booking.start_time,
        end_time=booking.end_time,
    )
    session.add(row)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning(
            "Booking race lost for coach %s on %s %s",
            coach_id,
            booking.booking_date,
            booking.start_time,
        )
        raise SlotUnavailableError(
            f"Slot {booking.start_time} on {booking.booking_date} was just booked"
        ) from None
    await session.refresh(row)
    logger.info(
        "Booked coach %s on %s %s-%s", coach_id, row.booking_date, row.start_time, row.end_time
    )
    return row


async def cancel_booking(session: AsyncSession, coach_id: int, booking_id: int) -> bool:
    """Delete a booking, freeing its slot. Returns False if it does not exist."""
    stmt = select(Booking).where(Booking.id == booking_id, Booking.coach_id == coach_id)
    row = (await session.execute(stmt)).scalar_one_or_none()
    if row is None:
        return False
    await session.delete(row)
    await session.commit()
    logger.info("Cancelled booking %s for coach %s", booking_id, coach_id)
    return True
