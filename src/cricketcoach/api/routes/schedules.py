"""Schedule API routes: a coach's recurring weekly availability."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cricketcoach.api.deps import get_coach
from cricketcoach.database import get_db
from cricketcoach.models.coach import Coach
from cricketcoach.models.schedule import CoachSchedule
from cricketcoach.scheduling.errors import InvalidScheduleError, ScheduleConflictError
from cricketcoach.scheduling.store import (
    get_schedule_row,
    load_weekly_schedule,
    save_schedule,
    update_schedule_settings,
)
from cricketcoach.scheduling.timeutils import TIME_PATTERN, normalize_time
from cricketcoach.scheduling.validator import is_time_available
from cricketcoach.schemas.availability import TimeCheckRead
from cricketcoach.schemas.schedule import (
    ScheduleSettingsUpdate,
    WeeklySchedule,
    WeeklyScheduleRead,
)

router = APIRouter(prefix="/api/coaches/{coach_id}/schedule", tags=["schedules"])


async def _read(session: AsyncSession, row: CoachSchedule) -> WeeklyScheduleRead:
    schedule = await load_weekly_schedule(session, row)
    return WeeklyScheduleRead(
        **schedule.model_dump(), coach_id=row.coach_id, updated_at=row.updated_at
    )


@router.put("", response_model=WeeklyScheduleRead)
async def put_schedule(
    body: WeeklySchedule,
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
) -> WeeklyScheduleRead:
    """Create or replace the coach's weekly schedule.

    Returns 422 naming the weekday if ranges overlap or leave less than the
    required break.
    """
    try:
        row = await save_schedule(session, coach.id, body)
    except ScheduleConflictError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    return await _read(session, row)


@router.get("", response_model=WeeklyScheduleRead)
async def get_schedule(
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
) -> WeeklyScheduleRead:
    row = await get_schedule_row(session, coach.id)
    if row is None:
        raise HTTPException(status_code=404, detail="Coach has no schedule")
    return await _read(session, row)


@router.patch("/settings", response_model=WeeklyScheduleRead)
async def patch_settings(
    body: ScheduleSettingsUpdate,
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
) -> WeeklyScheduleRead:
    """Update timezone, default duration, cutoff or break (partial update)."""
    try:
        row = await update_schedule_settings(session, coach.id, body)
    except ScheduleConflictError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    return await _read(session, row)


@router.get("/check", response_model=TimeCheckRead)
async def check_time(
    day: str,
    start_time: str = Query(pattern=TIME_PATTERN),
    end_time: str = Query(pattern=TIME_PATTERN),
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
) -> TimeCheckRead:
    """Whether a new range would fit on ``day`` without touching an active one."""
    row = await get_schedule_row(session, coach.id)
    schedule = await load_weekly_schedule(session, row) if row else WeeklySchedule()
    start_time, end_time = normalize_time(start_time), normalize_time(end_time)
    if start_time >= end_time:
        raise HTTPException(status_code=422, detail="end_time must be after start_time")
    try:
        available = is_time_available(schedule, day, start_time, end_time)
    except InvalidScheduleError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    return TimeCheckRead(day=day, start_time=start_time, end_time=end_time, available=available)
