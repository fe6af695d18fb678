"""
Split open windows into gaps around the day's existing bookings.

Each window becomes ``[start marker, booking..., end marker]`` where the
markers sit at the service center with zero duration. A gap spans the end of
one event to the start of the next and carries the baseline travel between
them: what the driver already drives that day if nothing new is inserted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
import logging
from typing import Iterable, List, Sequence

from ...schemas.availability import ExistingBooking, Location
from ...utils.intervals import Interval
from ...utils.time_utils import utc_date_of
from ..travel.base import TravelCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Commitment:
    start_time: datetime
    end_time: datetime
    start_location: Location
    end_location: Location


@dataclass(frozen=True)
class Gap:
    gap_start: datetime
    gap_end: datetime
    start_location: Location
    end_location: Location
    baseline_travel_time: float
    baseline_travel_distance: float
    # Edges touching a window boundary are the driver's own commute and are
    # exempt from travel accounting on that side.
    first_in_window: bool
    last_in_window: bool

    @property
    def is_empty(self) -> bool:
        return self.gap_end <= self.gap_start


@dataclass(frozen=True)
class GapPlan:
    gaps: tuple[Gap, ...]
    baseline_time: float
    baseline_distance: float


def bookings_in_window(
    bookings: Iterable[ExistingBooking], window: Interval[datetime], target_date: date
) -> List[ExistingBooking]:
    """Bookings on ``target_date`` (UTC) starting inside ``window``, earliest first."""
    selected = [
        b
        for b in bookings
        if utc_date_of(b.start_time) == target_date and window.start <= b.start_time < window.end
    ]
    return sorted(selected, key=lambda b: b.start_time)


def window_events(
    window: Interval[datetime], service_center: Location, bookings: Sequence[ExistingBooking]
) -> List[Commitment]:
    opening = Commitment(window.start, window.start, service_center, service_center)
    closing = Commitment(window.end, window.end, service_center, service_center)
    return [
        opening,
        *(
            Commitment(b.start_time, b.end_time, b.pickup_location, b.dropoff_location)
            for b in bookings
        ),
        closing,
    ]


async def build_gaps(
    open_windows: Iterable[Interval[datetime]],
    service_center: Location,
    bookings: Sequence[ExistingBooking],
    travel: TravelCalculator,
    target_date: date,
) -> GapPlan:
    """
    Build every gap of every window plus the day's baseline travel totals.

    Back-to-back or overlapping commitments still contribute their baseline
    travel to the totals but yield no scannable gap.
    """
    day = utc_date_of(target_date)
    gaps: List[Gap] = []
    total_time = 0.0
    total_distance = 0.0

    for window in open_windows:
        events = window_events(window, service_center, bookings_in_window(bookings, window, day))
        last_index = len(events) - 2
        for index, (current, following) in enumerate(zip(events, events[1:])):
            baseline = await travel.travel(
                current.end_location, following.start_location, current.end_time
            )
            total_time += baseline.time_minutes
            total_distance += baseline.distance_km

            gap = Gap(
                gap_start=current.end_time,
                gap_end=following.start_time,
                start_location=current.end_location,
                end_location=following.start_location,
                baseline_travel_time=baseline.time_minutes,
                baseline_travel_distance=baseline.distance_km,
                first_in_window=index == 0,
                last_in_window=index == last_index,
            )
            if gap.is_empty:
                logger.debug(f"Skipping empty gap {gap.gap_start} -> {gap.gap_end}")
                continue
            gaps.append(gap)

    return GapPlan(gaps=tuple(gaps), baseline_time=total_time, baseline_distance=total_distance)
