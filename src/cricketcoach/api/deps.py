from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from cricketcoach.database import get_db
from cricketcoach.models.coach import Coach
from cricketcoach.scheduling.notifier import LoggingOverrideNotifier, OverrideNotifier


async def get_coach(coach_id: int, session: AsyncSession = Depends(get_db)) -> Coach:
    """Resolve the ``coach_id`` path parameter, 404 if unknown."""
    coach = await session.get(Coach, coach_id)
    if coach is None:
        raise HTTPException(status_code=404, detail="Coach not found")
    return coach


def get_notifier() -> OverrideNotifier:
    return LoggingOverrideNotifier()
