"""Coach API routes: the owners of schedules, overrides and bookings."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cricketcoach.api.deps import get_coach
from cricketcoach.database import get_db
from cricketcoach.models.coach import Coach
from cricketcoach.schemas.coach import CoachCreate, CoachRead

router = APIRouter(prefix="/api/coaches", tags=["coaches"])


@router.post("", response_model=CoachRead, status_code=201)
async def create_coach(
    body: CoachCreate,
    session: AsyncSession = Depends(get_db),
) -> Coach:
    """Register a coach. Returns 409 if the email is already taken."""
    existing = await session.execute(select(Coach).where(Coach.email == body.email))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail=f"Coach with email '{body.email}' exists")

    row = Coach(name=body.name, email=body.email)
    session.add(row)
    await session.commit()
    await session.refresh(row)
    return row


@router.get("", response_model=list[CoachRead])
async def list_coaches(
    session: AsyncSession = Depends(get_db),
) -> list[Coach]:
    result = await session.execute(select(Coach).order_by(Coach.name))
    return list(result.scalars().all())


@router.get("/{coach_id}", response_model=CoachRead)
async def get_coach_profile(coach: Coach = Depends(get_coach)) -> Coach:
    return coach
