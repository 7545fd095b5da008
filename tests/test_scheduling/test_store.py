"""Tests for schedule persistence and booking commits."""

from datetime import date, datetime

import pytest
import pytz
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cricketcoach.models.booking import Booking
from cricketcoach.models.schedule import CoachSchedule, ScheduleTimeRange
from cricketcoach.scheduling.errors import ScheduleConflictError, SlotUnavailableError
from cricketcoach.scheduling.overrides import create_override
from cricketcoach.scheduling.store import (
    book_slot,
    cancel_booking,
    get_available_slots,
    get_schedule,
    save_schedule,
    update_schedule_settings,
)
from cricketcoach.schemas.booking import BookingCreate
from cricketcoach.schemas.schedule import ScheduleSettingsUpdate, WeeklySchedule

MONDAY = date(2024, 1, 8)
NOW = datetime(2024, 1, 1, tzinfo=pytz.utc)


def _schedule(**kwargs: object) -> WeeklySchedule:
    return WeeklySchedule(
        weekly_schedule={
            "monday": [
                {"start_time": "10:00", "end_time": "11:00"},
                {"start_time": "09:00", "end_time": "10:00"},
            ],
            "friday": [{"start_time": "17:00", "end_time": "18:00", "is_active": False}],
        },
        **kwargs,
    )


def _booking(start: str = "09:00", end: str = "10:00", day: date = MONDAY) -> BookingCreate:
    return BookingCreate(
        client_name="Ravi",
        client_email="ravi@example.com",
        booking_date=day,
        start_time=start,
        end_time=end,
    )


async def test_save_and_load_round_trip(session: AsyncSession, coach_id: int) -> None:
    await save_schedule(session, coach_id, _schedule(timezone="Europe/London"))

    loaded = await get_schedule(session, coach_id)
    assert loaded is not None
    assert loaded.timezone == "Europe/London"
    assert [r.start_time for r in loaded.ranges("monday")] == ["09:00", "10:00"]
    assert loaded.ranges("friday")[0].is_active is False
    assert loaded.ranges("sunday") == []


async def test_get_schedule_missing(session: AsyncSession, coach_id: int) -> None:
    assert await get_schedule(session, coach_id) is None


async def test_save_replaces_existing(session: AsyncSession, coach_id: int) -> None:
    await save_schedule(session, coach_id, _schedule())
    replacement = WeeklySchedule(
        weekly_schedule={"tuesday": [{"start_time": "07:00", "end_time": "08:00"}]}
    )
    await save_schedule(session, coach_id, replacement)

    schedules = (await session.execute(select(CoachSchedule))).scalars().all()
    assert len(schedules) == 1
    ranges = (await session.execute(select(ScheduleTimeRange))).scalars().all()
    assert [(r.day_of_week, r.start_time) for r in ranges] == [("tuesday", "07:00")]


async def test_conflicting_schedule_not_persisted(session: AsyncSession, coach_id: int) -> None:
    with pytest.raises(ScheduleConflictError):
        await save_schedule(session, coach_id, _schedule(break_between_slots=15))
    assert await get_schedule(session, coach_id) is None


async def test_conflicting_update_keeps_previous(session: AsyncSession, coach_id: int) -> None:
    await save_schedule(session, coach_id, _schedule())
    with pytest.raises(ScheduleConflictError):
        await update_schedule_settings(
            session, coach_id, ScheduleSettingsUpdate(break_between_slots=15)
        )
    await session.rollback()
    loaded = await get_schedule(session, coach_id)
    assert loaded is not None
    assert loaded.break_between_slots == 0
    assert len(loaded.ranges("monday")) == 2


async def test_update_settings_creates_schedule(session: AsyncSession, coach_id: int) -> None:
    await update_schedule_settings(
        session, coach_id, ScheduleSettingsUpdate(booking_cutoff_hours=24)
    )
    loaded = await get_schedule(session, coach_id)
    assert loaded is not None
    assert loaded.booking_cutoff_hours == 24
    assert loaded.default_duration == 60


async def test_available_slots_exclude_bookings_and_overrides(
    session: AsyncSession, coach_id: int
) -> None:
    await save_schedule(session, coach_id, _schedule())
    await book_slot(session, coach_id, _booking(), now=NOW)
    await create_override(session, coach_id, date(2024, 1, 15), "Tour")

    slots = await get_available_slots(session, coach_id, MONDAY, 14, now=NOW)
    assert [(s.date, s.start_time) for s in slots] == [(MONDAY, "10:00")]


async def test_available_slots_without_schedule(session: AsyncSession, coach_id: int) -> None:
    assert await get_available_slots(session, coach_id, MONDAY, 7, now=NOW) == []


async def test_available_slots_default_start(session: AsyncSession, coach_id: int) -> None:
    await save_schedule(session, coach_id, _schedule(booking_cutoff_hours=0))
    # 2024-01-01 is a Monday; its 09:00 slot is already in the past
    now = datetime(2024, 1, 1, 9, 30, tzinfo=pytz.utc)
    slots = await get_available_slots(session, coach_id, None, 1, now=now)
    assert [s.start_time for s in slots] == ["10:00"]


async def test_book_slot(session: AsyncSession, coach_id: int) -> None:
    await save_schedule(session, coach_id, _schedule())
    row = await book_slot(session, coach_id, _booking("9:00", "10:00"), now=NOW)
    assert row.id is not None
    assert row.start_time == "09:00"


async def test_book_slot_twice_rejected(session: AsyncSession, coach_id: int) -> None:
    await save_schedule(session, coach_id, _schedule())
    await book_slot(session, coach_id, _booking(), now=NOW)
    with pytest.raises(SlotUnavailableError):
        await book_slot(session, coach_id, _booking(), now=NOW)


async def test_book_slot_must_match_exactly(session: AsyncSession, coach_id: int) -> None:
    await save_schedule(session, coach_id, _schedule())
    with pytest.raises(SlotUnavailableError):
        await book_slot(session, coach_id, _booking("09:00", "09:30"), now=NOW)


async def test_book_slot_inside_cutoff_rejected(session: AsyncSession, coach_id: int) -> None:
    await save_schedule(session, coach_id, _schedule())
    now = datetime(2024, 1, 8, 0, 0, tzinfo=pytz.utc)
    with pytest.raises(SlotUnavailableError):
        await book_slot(session, coach_id, _booking("09:00", "10:00"), now=now)


async def test_book_slot_on_override_date_rejected(
    session: AsyncSession, coach_id: int
) -> None:
    await save_schedule(session, coach_id, _schedule())
    await create_override(session, coach_id, MONDAY, "Rain")
    with pytest.raises(SlotUnavailableError):
        await book_slot(session, coach_id, _booking(), now=NOW)


async def test_book_inactive_range_rejected(session: AsyncSession, coach_id: int) -> None:
    await save_schedule(session, coach_id, _schedule())
    with pytest.raises(SlotUnavailableError):
        await book_slot(session, coach_id, _booking("17:00", "18:00", date(2024, 1, 12)), now=NOW)


async def test_slot_key_is_unique(session: AsyncSession, coach_id: int) -> None:
    for name in ("A", "B"):
        session.add(
            Booking(
                coach_id=coach_id,
                client_name=name,
                client_email=f"{name.lower()}@example.com",
                booking_date=MONDAY,
                start_time="09:00",
                end_time="10:00",
            )
        )
    with pytest.raises(IntegrityError):
        await session.commit()


async def test_cancel_booking_frees_slot(session: AsyncSession, coach_id: int) -> None:
    await save_schedule(session, coach_id, _schedule())
    row = await book_slot(session, coach_id, _booking(), now=NOW)

    assert await cancel_booking(session, coach_id, row.id) is True
    assert await cancel_booking(session, coach_id, row.id) is False
    again = await book_slot(session, coach_id, _booking(), now=NOW)
    assert again.start_time == "09:00"
