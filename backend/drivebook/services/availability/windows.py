"""Derive a driver's open windows for one date from working hours and overrides."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List

from ...schemas.availability import AvailabilityOverride, AvailabilityType, DriverProfileSnapshot
from ...utils.intervals import Interval, IntervalSet
from ...utils.time_utils import parse_time_for_date, utc_date_of


def _override_interval(target_date: date, override: AvailabilityOverride) -> Interval[datetime]:
    return Interval(
        parse_time_for_date(target_date, override.start_time),
        parse_time_for_date(target_date, override.end_time),
    )


def _intervals_of_type(
    target_date: date, overrides: List[AvailabilityOverride], kind: AvailabilityType
) -> List[Interval[datetime]]:
    return [_override_interval(target_date, o) for o in overrides if o.type == kind]


def derive_open_windows(
    target_date: date,
    profile: DriverProfileSnapshot,
    overrides: Iterable[AvailabilityOverride] = (),
) -> IntervalSet[datetime]:
    """
    Compute the disjoint open intervals for ``target_date``.

    Date-specific ``working_hours`` records replace the driver's generic work
    day; ``override_open`` ranges are merged on top; ``override_closed``
    ranges are subtracted last and always win.
    """
    day = utc_date_of(target_date)
    same_day = [o for o in overrides if o.date == day]

    base = _intervals_of_type(day, same_day, AvailabilityType.WORKING_HOURS)
    if not base and profile.work_day_start and profile.work_day_end:
        base = [
            Interval(
                parse_time_for_date(day, profile.work_day_start),
                parse_time_for_date(day, profile.work_day_end),
            )
        ]

    opened = _intervals_of_type(day, same_day, AvailabilityType.OVERRIDE_OPEN)
    closed = _intervals_of_type(day, same_day, AvailabilityType.OVERRIDE_CLOSED)
    return IntervalSet(base).union(opened).subtract_all(closed)
