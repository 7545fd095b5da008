"""Booking API routes: reserve a resolved slot."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cricketcoach.api.deps import get_coach
from cricketcoach.database import get_db
from cricketcoach.models.booking import Booking
from cricketcoach.models.coach import Coach
from cricketcoach.scheduling.errors import SlotUnavailableError
from cricketcoach.scheduling.store import book_slot, cancel_booking
from cricketcoach.schemas.booking import BookingCreate, BookingRead

router = APIRouter(prefix="/api/coaches/{coach_id}/bookings", tags=["bookings"])


@router.post("", response_model=BookingRead, status_code=201)
async def create_booking(
    body: BookingCreate,
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
) -> Booking:
    """Book one slot. Returns 409 if it is no longer bookable."""
    try:
        return await book_slot(session, coach.id, body)
    except SlotUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None


@router.get("", response_model=list[BookingRead])
async def list_bookings(
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
) -> list[Booking]:
    stmt = (
        select(Booking)
        .where(Booking.coach_id == coach.id)
        .order_by(Booking.booking_date, Booking.start_time)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.delete("/{booking_id}", status_code=204)
async def delete_booking(
    booking_id: int,
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
) -> None:
    if not await cancel_booking(session, coach.id, booking_id):
        raise HTTPException(status_code=404, detail="Booking not found")
