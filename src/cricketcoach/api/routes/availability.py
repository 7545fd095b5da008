"""Availability API routes: concrete bookable slots for clients."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cricketcoach.api.deps import get_coach
from cricketcoach.config import get_settings
from cricketcoach.database import get_db
from cricketcoach.models.coach import Coach
from cricketcoach.scheduling.store import get_available_slots
from cricketcoach.schemas.availability import BookableSlot

router = APIRouter(prefix="/api/coaches/{coach_id}/availability", tags=["availability"])

settings = get_settings()


@router.get("", response_model=list[BookableSlot])
async def get_availability(
    start: date | None = None,
    days: int = Query(default=settings.availability_window_days, ge=1, le=settings.max_window_days),
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
) -> list[BookableSlot]:
    """Bookable slots from ``start`` (default: today in the coach's timezone) for ``days`` days.

    An empty list means no availability; a coach without a schedule has none.
    """
    return await get_available_slots(session, coach.id, start, days)
