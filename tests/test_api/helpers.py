from datetime import date, timedelta
from typing import Any

from cricketcoach.scheduling.timeutils import WEEKDAYS


def every_day(*ranges: tuple[str, str], **policy: Any) -> dict[str, Any]:
    """Schedule payload offering the same ranges on all seven days."""
    return {
        "weekly_schedule": {
            day: [{"start_time": s, "end_time": e} for s, e in ranges] for day in WEEKDAYS
        },
        **policy,
    }


def days_ahead(n: int) -> date:
    return date.today() + timedelta(days=n)
