"""Emergency override API routes: cancel a coach's whole day."""

from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from cricketcoach.api.deps import get_coach, get_notifier
from cricketcoach.database import get_db
from cricketcoach.models.coach import Coach
from cricketcoach.models.override import EmergencyOverride
from cricketcoach.scheduling.errors import DuplicateOverrideError
from cricketcoach.scheduling.notifier import OverrideNotifier
from cricketcoach.scheduling.overrides import create_override, delete_override, list_overrides
from cricketcoach.schemas.override import EmergencyOverrideCreate, EmergencyOverrideRead

router = APIRouter(prefix="/api/coaches/{coach_id}/overrides", tags=["overrides"])


@router.post("", response_model=EmergencyOverrideRead, status_code=201)
async def post_override(
    body: EmergencyOverrideCreate,
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
    notifier: OverrideNotifier = Depends(get_notifier),
) -> EmergencyOverride:
    """Block a whole date. Returns 409 if the date is already overridden."""
    try:
        return await create_override(
            session,
            coach.id,
            body.override_date,
            body.reason,
            body.options,
            notifier=notifier,
        )
    except DuplicateOverrideError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None


@router.get("", response_model=list[EmergencyOverrideRead])
async def get_overrides(
    start: date | None = None,
    end: date | None = None,
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
) -> list[EmergencyOverride]:
    """Overrides between ``start`` and ``end`` inclusive (default: the coming year)."""
    start = start or date.today()
    end = end or start + timedelta(days=365)
    if end < start:
        raise HTTPException(status_code=422, detail="end must not be before start")
    return await list_overrides(session, coach.id, start, end)


@router.delete("/{override_date}", status_code=204)
async def remove_override(
    override_date: date,
    coach: Coach = Depends(get_coach),
    session: AsyncSession = Depends(get_db),
) -> None:
    if not await delete_override(session, coach.id, override_date):
        raise HTTPException(status_code=404, detail=f"No override on {override_date}")
