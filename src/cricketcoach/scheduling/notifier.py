import logging
from abc import ABC, abstractmethod

from cricketcoach.models.booking import Booking
from cricketcoach.models.override import EmergencyOverride

logger = logging.getLogger(__name__)


class OverrideNotifier(ABC):
    """Collaborator told about a new emergency override.

    Implementations decide, from the advertised options, whether to refund,
    offer a reschedule, or cancel the affected bookings. The scheduling core
    never touches those bookings itself.
    """

    @abstractmethod
    async def override_created(
        self, override: EmergencyOverride, affected: list[Booking]
    ) -> None:
        ...


class LoggingOverrideNotifier(OverrideNotifier):
    """Default notifier: records what clients would be offered."""

    async def override_created(
        self, override: EmergencyOverride, affected: list[Booking]
    ) -> None:
        logger.info(
            "Override for coach %s on %s affects %d booking(s) "
            "(refund=%s, reschedule=%s, cancel=%s)",
            override.coach_id,
            override.override_date,
            len(affected),
            override.refund,
            override.reschedule,
            override.cancel,
        )
