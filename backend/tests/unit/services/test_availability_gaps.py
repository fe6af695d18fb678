from datetime import date, timedelta

import pytest

from drivebook.schemas.availability import Location
from drivebook.services.availability import build_gaps
from drivebook.utils.intervals import Interval, IntervalSet
from tests.helpers.slot_factories import BASE_LOCATION, RecordingTravelCalculator, at, make_booking

DAY = date(2024, 5, 1)
NORTH = Location(latitude=44.70, longitude=-63.57)
SOUTH = Location(latitude=44.60, longitude=-63.57)


def day_window(start_hour=9, end_hour=17):
    return IntervalSet([Interval(at(DAY, start_hour), at(DAY, end_hour))])


@pytest.mark.asyncio
async def test_empty_window_is_one_gap_exempt_on_both_sides():
    travel = RecordingTravelCalculator(lambda _o, _d, _t: (5.0, 1.5))

    plan = await build_gaps(day_window(), BASE_LOCATION, [], travel, DAY)

    assert len(plan.gaps) == 1
    gap = plan.gaps[0]
    assert (gap.gap_start, gap.gap_end) == (at(DAY, 9), at(DAY, 17))
    assert gap.first_in_window and gap.last_in_window
    assert plan.baseline_time == 5.0
    assert plan.baseline_distance == 1.5


@pytest.mark.asyncio
async def test_bookings_split_window_and_set_locations():
    travel = RecordingTravelCalculator(lambda _o, _d, _t: (10.0, 2.0))
    bookings = [
        make_booking(at(DAY, 13), at(DAY, 14), SOUTH, SOUTH),
        make_booking(at(DAY, 10), at(DAY, 11), NORTH, SOUTH),
    ]

    plan = await build_gaps(day_window(), BASE_LOCATION, bookings, travel, DAY)

    assert [(g.gap_start, g.gap_end) for g in plan.gaps] == [
        (at(DAY, 9), at(DAY, 10)),
        (at(DAY, 11), at(DAY, 13)),
        (at(DAY, 14), at(DAY, 17)),
    ]
    assert [(g.first_in_window, g.last_in_window) for g in plan.gaps] == [
        (True, False),
        (False, False),
        (False, True),
    ]
    assert plan.gaps[0].end_location == NORTH
    assert plan.gaps[1].start_location == SOUTH
    assert plan.gaps[2].end_location == BASE_LOCATION
    assert plan.baseline_time == 30.0
    assert plan.baseline_distance == 6.0
    assert travel.travel_calls == [
        (BASE_LOCATION, NORTH, at(DAY, 9)),
        (SOUTH, SOUTH, at(DAY, 11)),
        (SOUTH, BASE_LOCATION, at(DAY, 14)),
    ]


@pytest.mark.asyncio
async def test_back_to_back_bookings_count_baseline_but_yield_no_gap():
    travel = RecordingTravelCalculator(lambda _o, _d, _t: (4.0, 1.0))
    bookings = [
        make_booking(at(DAY, 9), at(DAY, 10)),
        make_booking(at(DAY, 10), at(DAY, 11)),
    ]

    plan = await build_gaps(day_window(), BASE_LOCATION, bookings, travel, DAY)

    assert [(g.gap_start, g.gap_end) for g in plan.gaps] == [(at(DAY, 11), at(DAY, 17))]
    assert plan.gaps[0].last_in_window
    assert not plan.gaps[0].first_in_window
    assert len(travel.travel_calls) == 3
    assert plan.baseline_time == 12.0


@pytest.mark.asyncio
async def test_overlapping_bookings_yield_no_negative_gap():
    bookings = [
        make_booking(at(DAY, 10), at(DAY, 12)),
        make_booking(at(DAY, 11), at(DAY, 13)),
    ]

    plan = await build_gaps(day_window(), BASE_LOCATION, bookings, RecordingTravelCalculator(), DAY)

    assert all(g.gap_end > g.gap_start for g in plan.gaps)
    assert [(g.gap_start, g.gap_end) for g in plan.gaps] == [
        (at(DAY, 9), at(DAY, 10)),
        (at(DAY, 13), at(DAY, 17)),
    ]


@pytest.mark.asyncio
async def test_bookings_outside_window_or_day_are_ignored():
    travel = RecordingTravelCalculator()
    bookings = [
        make_booking(at(DAY, 7), at(DAY, 8)),
        make_booking(at(DAY, 17), at(DAY, 18)),
        make_booking(at(DAY + timedelta(days=1), 10), at(DAY + timedelta(days=1), 11)),
    ]

    plan = await build_gaps(day_window(), BASE_LOCATION, bookings, travel, DAY)

    assert [(g.gap_start, g.gap_end) for g in plan.gaps] == [(at(DAY, 9), at(DAY, 17))]


@pytest.mark.asyncio
async def test_each_window_has_its_own_edges():
    windows = IntervalSet(
        [Interval(at(DAY, 9), at(DAY, 12)), Interval(at(DAY, 13), at(DAY, 17))]
    )

    plan = await build_gaps(windows, BASE_LOCATION, [], RecordingTravelCalculator(), DAY)

    assert len(plan.gaps) == 2
    assert all(g.first_in_window and g.last_in_window for g in plan.gaps)
