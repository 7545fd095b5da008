"""Wall-clock helpers for weekly schedules.

Schedule times are ``HH:mm`` strings in the coach's timezone. Once normalized
to zero-padded form they order correctly as plain strings; arithmetic goes
through minutes since midnight.
"""

from collections.abc import Iterator
from datetime import date, datetime, time, timedelta

import pytz

# Index matches date.weekday() (0=Monday)
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"


def normalize_time(value: str) -> str:
    """Zero-pad an ``H:mm`` string to ``HH:mm``."""
    hours, minutes = value.split(":")
    return f"{int(hours):02d}:{minutes}"


def to_minutes(value: str) -> int:
    """Minutes since midnight for an ``HH:mm`` string."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def date_window(start: date, days: int) -> Iterator[date]:
    """Yield the ``days`` calendar dates of the half-open window starting at ``start``."""
    for offset in range(days):
        yield start + timedelta(days=offset)


def is_known_timezone(name: str) -> bool:
    try:
        pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        return False
    return True


def local_to_utc(day: date, wall_time: str, tz_name: str) -> datetime:
    """Attach ``tz_name`` to a wall-clock time on ``day`` and return the UTC instant."""
    hours, minutes = (int(part) for part in wall_time.split(":"))
    tz = pytz.timezone(tz_name)
    local = tz.localize(datetime.combine(day, time(hours, minutes)))
    return local.astimezone(pytz.utc)


def today_in(tz_name: str, now: datetime | None = None) -> date:
    """Calendar date in ``tz_name`` at ``now`` (default: current instant)."""
    now = now or datetime.now(pytz.utc)
    return now.astimezone(pytz.timezone(tz_name)).date()
