"""Emergency overrides: whole-day cancellations for one coach on one date."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cricketcoach.models.booking import Booking
from cricketcoach.models.override import EmergencyOverride
from cricketcoach.scheduling.errors import DuplicateOverrideError
from cricketcoach.scheduling.notifier import OverrideNotifier
from cricketcoach.schemas.override import OverrideOptions

logger = logging.getLogger(__name__)


async def _find_override(
    session: AsyncSession, coach_id: int, override_date: date
) -> EmergencyOverride | None:
    stmt = select(EmergencyOverride).where(
        EmergencyOverride.coach_id == coach_id,
        EmergencyOverride.override_date == override_date,
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_override(
    session: AsyncSession,
    coach_id: int,
    override_date: date,
    reason: str,
    options: OverrideOptions | None = None,
    notifier: OverrideNotifier | None = None,
) -> EmergencyOverride:
    """Record a full-day override for ``(coach_id, override_date)``.

    Raises DuplicateOverrideError if one already exists, including when a
    concurrent request wins the race to the unique constraint. Once committed,
    ``notifier`` (if given) receives the override and the bookings on that date.
    """
    if await _find_override(session, coach_id, override_date) is not None:
        logger.warning("Duplicate override for coach %s on %s", coach_id, override_date)
        raise DuplicateOverrideError(coach_id, override_date)

    options = options or OverrideOptions()
    row = EmergencyOverride(
        coach_id=coach_id,
        override_date=override_date,
        reason=reason,
        refund=options.refund,
        reschedule=options.reschedule,
        cancel=options.cancel,
    )
    session.add(row)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        if await _find_override(session, coach_id, override_date) is None:
            raise
        raise DuplicateOverrideError(coach_id, override_date) from None
    await session.refresh(row)
    logger.info("Created emergency override for coach %s on %s", coach_id, override_date)

    if notifier is not None:
        stmt = (
            select(Booking)
            .where(Booking.coach_id == coach_id, Booking.booking_date == override_date)
            .order_by(Booking.start_time)
        )
        affected = list((await session.execute(stmt)).scalars().all())
        await notifier.override_created(row, affected)
    return row


async def list_overrides(
    session: AsyncSession, coach_id: int, start: date, end: date
) -> list[EmergencyOverride]:
    """Overrides for a coach with ``start <= override_date <= end``, by date."""
    stmt = (
        select(EmergencyOverride)
        .where(
            EmergencyOverride.coach_id == coach_id,
            EmergencyOverride.override_date >= start,
            EmergencyOverride.override_date <= end,
        )
        .order_by(EmergencyOverride.override_date)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def delete_override(session: AsyncSession, coach_id: int, override_date: date) -> bool:
    """Lift an override. Returns False if there was none."""
    row = await _find_override(session, coach_id, override_date)
    if row is None:
        return False
    await session.delete(row)
    await session.commit()
    logger.info("Removed emergency override for coach %s on %s", coach_id, override_date)
    return True
