"""
Walk each gap on the 15-minute grid and keep the start times that fit.

A candidate must leave the buffer plus the travel in from the previous
commitment before it, the lesson plus buffer plus travel out to the next
commitment after it, keep both legs under the per-segment caps, and keep the
day's total travel under the daily caps. Legs touching a window boundary are
exempt from all travel accounting.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import List

from ...core.constants import SLOT_GRID_MINUTES
from ...schemas.availability import Location, TravelEstimate
from ...utils.time_utils import add_minutes, round_up_to_grid
from ..travel.base import TravelCalculator
from .constraints import SlotConstraints
from .gaps import Gap, GapPlan


@dataclass(frozen=True)
class CandidateLegs:
    travel_in: TravelEstimate
    travel_out: TravelEstimate
    first_in_window: bool
    last_in_window: bool

    @property
    def effective_in_time(self) -> float:
        return 0.0 if self.first_in_window else self.travel_in.time_minutes

    @property
    def effective_out_time(self) -> float:
        return 0.0 if self.last_in_window else self.travel_out.time_minutes

    @property
    def effective_in_distance(self) -> float:
        return 0.0 if self.first_in_window else self.travel_in.distance_km

    @property
    def effective_out_distance(self) -> float:
        return 0.0 if self.last_in_window else self.travel_out.distance_km


def _within_segment_cap(leg: TravelEstimate, constraints: SlotConstraints) -> bool:
    return (
        leg.time_minutes <= constraints.max_segment_travel_time_min
        and leg.distance_km <= constraints.max_segment_travel_distance_km
    )


def is_candidate_feasible(
    candidate: datetime,
    gap: Gap,
    legs: CandidateLegs,
    plan: GapPlan,
    constraints: SlotConstraints,
) -> bool:
    buffer = constraints.buffer_minutes
    candidate_end = add_minutes(candidate, constraints.lesson_duration_minutes)

    if candidate < add_minutes(gap.gap_start, buffer + legs.effective_in_time):
        return False
    if add_minutes(candidate_end, buffer + legs.effective_out_time) > gap.gap_end:
        return False

    if not legs.first_in_window and not _within_segment_cap(legs.travel_in, constraints):
        return False
    if not legs.last_in_window and not _within_segment_cap(legs.travel_out, constraints):
        return False

    day_time = (
        plan.baseline_time
        - gap.baseline_travel_time
        + legs.effective_in_time
        + legs.effective_out_time
    )
    day_distance = (
        plan.baseline_distance
        - gap.baseline_travel_distance
        + legs.effective_in_distance
        + legs.effective_out_distance
    )
    if (
        constraints.daily_max_travel_time_min is not None
        and day_time > constraints.daily_max_travel_time_min
    ):
        return False
    if (
        constraints.daily_max_travel_distance_km is not None
        and day_distance > constraints.daily_max_travel_distance_km
    ):
        return False
    return True


async def scan_gap(
    gap: Gap,
    plan: GapPlan,
    constraints: SlotConstraints,
    pickup: Location,
    dropoff: Location,
    travel: TravelCalculator,
) -> List[datetime]:
    feasible: List[datetime] = []
    if gap.is_empty:
        return feasible

    candidate = round_up_to_grid(add_minutes(gap.gap_start, constraints.buffer_minutes))
    while candidate < gap.gap_end:
        candidate_end = add_minutes(candidate, constraints.lesson_duration_minutes)
        if add_minutes(candidate_end, constraints.buffer_minutes) > gap.gap_end:
            break

        # Both legs are looked up even when exempt; the pair is independent.
        travel_in, travel_out = await asyncio.gather(
            travel.travel(gap.start_location, pickup, candidate),
            travel.travel(dropoff, gap.end_location, candidate_end),
        )
        legs = CandidateLegs(
            travel_in=travel_in,
            travel_out=travel_out,
            first_in_window=gap.first_in_window,
            last_in_window=gap.last_in_window,
        )
        if is_candidate_feasible(candidate, gap, legs, plan, constraints):
            feasible.append(candidate)

        candidate = add_minutes(candidate, SLOT_GRID_MINUTES)
    return feasible


async def scan_gaps(
    plan: GapPlan,
    constraints: SlotConstraints,
    pickup: Location,
    dropoff: Location,
    travel: TravelCalculator,
) -> List[datetime]:
    """Feasible starts across all gaps, deduplicated and ascending."""
    feasible: List[datetime] = []
    for gap in plan.gaps:
        feasible.extend(await scan_gap(gap, plan, constraints, pickup, dropoff, travel))
    return sorted(set(feasible))
