"""
Date/time helpers for the slot engine.

All engine arithmetic happens on UTC-aware datetimes. A "day" is the UTC
calendar day (UTC midnight to UTC midnight) and times of day such as a
driver's ``09:00`` are anchored to that UTC midnight.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Union

from ..core.constants import SLOT_GRID_MINUTES

TimeOfDay = Union[str, time, None]


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime, treating naive values as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_date_of(value: Union[date, datetime]) -> date:
    """Calendar date of ``value`` on the UTC clock."""
    if isinstance(value, datetime):
        return ensure_utc(value).date()
    return value


def start_of_utc_day(day: date) -> datetime:
    return datetime.combine(utc_date_of(day), time.min, tzinfo=timezone.utc)


def add_minutes(dt: datetime, minutes: float) -> datetime:
    return dt + timedelta(minutes=minutes)


def _parse_component(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        return 0


def parse_time_for_date(day: date, time_of_day: TimeOfDay) -> datetime:
    """
    Anchor a time of day (``"HH:MM"``, ``"HH:MM:SS"`` or ``time``) to ``day``.

    A missing value means midnight. Unparseable components count as zero and
    hours past 23 roll into the following day, so ``"24:00"`` is the end of
    ``day``.
    """
    base = start_of_utc_day(day)
    if time_of_day is None:
        return base
    if isinstance(time_of_day, time):
        return base + timedelta(hours=time_of_day.hour, minutes=time_of_day.minute)
    if not time_of_day.strip():
        return base
    parts = time_of_day.split(":")
    hours = _parse_component(parts[0])
    minutes = _parse_component(parts[1]) if len(parts) > 1 else 0
    return base + timedelta(hours=hours, minutes=minutes)


def round_up_to_grid(dt: datetime, grid_minutes: int = SLOT_GRID_MINUTES) -> datetime:
    """
    Round up to the next grid boundary (0/15/30/45 past the hour by default).

    Seconds and microseconds are always cleared; a minute already on the grid
    is kept as-is.
    """
    remainder = dt.minute % grid_minutes
    truncated = dt.replace(second=0, microsecond=0)
    if remainder == 0:
        return truncated
    return truncated + timedelta(minutes=grid_minutes - remainder)


def truncate_to_minute(dt: datetime) -> datetime:
    return dt.replace(second=0, microsecond=0)


def hours_between(earlier: datetime, later: datetime) -> float:
    return (ensure_utc(later) - ensure_utc(earlier)).total_seconds() / 3600.0

