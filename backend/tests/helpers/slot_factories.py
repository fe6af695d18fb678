# backend/tests/helpers/slot_factories.py
"""Builders for slot-engine inputs so tests only spell out what they vary."""

from datetime import date, datetime, timezone
from typing import Any, Callable, List, Optional, Tuple

from drivebook.schemas.availability import (
    AvailabilityOverride,
    DriverProfileSnapshot,
    ExistingBooking,
    Location,
    SlotRequest,
    TravelEstimate,
)
from drivebook.services.travel.base import TravelCalculator

BASE_LOCATION = Location(latitude=44.64, longitude=-63.57)
FAR_LOCATION = Location(latitude=45.5, longitude=-62.0)


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)


def make_profile(**overrides: Any) -> DriverProfileSnapshot:
    data: dict[str, Any] = {
        "service_center_location": BASE_LOCATION,
        "work_day_start": "09:00",
        "work_day_end": "17:00",
        "lesson_duration_minutes": 60,
        "buffer_minutes_between_lessons": 0,
        "service_radius_km": "15",
        "max_segment_travel_time_min": 120,
        "max_segment_travel_distance_km": "50",
        "daily_max_travel_time_min": None,
        "daily_max_travel_distance_km": None,
    }
    data.update(overrides)
    return DriverProfileSnapshot(**data)


def make_booking(
    start: datetime,
    end: datetime,
    pickup: Location = BASE_LOCATION,
    dropoff: Location = BASE_LOCATION,
    booking_id: Optional[int] = None,
) -> ExistingBooking:
    return ExistingBooking(
        id=booking_id,
        start_time=start,
        end_time=end,
        pickup_location=pickup,
        dropoff_location=dropoff,
    )


def make_override(day: date, start: str, end: str, kind: str) -> AvailabilityOverride:
    return AvailabilityOverride(date=day, start_time=start, end_time=end, type=kind)


def make_request(
    day: date,
    profile: Optional[DriverProfileSnapshot] = None,
    bookings: Optional[List[ExistingBooking]] = None,
    pickup: Location = BASE_LOCATION,
    dropoff: Location = BASE_LOCATION,
    **extra: Any,
) -> SlotRequest:
    return SlotRequest(
        date=day,
        driver_profile=profile or make_profile(),
        bookings=bookings or [],
        pickup_location=pickup,
        dropoff_location=dropoff,
        **extra,
    )


TravelFn = Callable[[Location, Location, datetime], Tuple[float, float]]


class RecordingTravelCalculator(TravelCalculator):
    """
    Travel calculator driven by a plain function, recording every call.

    ``travel_fn`` returns ``(time_minutes, distance_km)``.
    """

    def __init__(self, travel_fn: Optional[TravelFn] = None, straight_line_km: float = 0.0):
        self.travel_fn = travel_fn or (lambda _o, _d, _t: (0.0, 0.0))
        self.straight_line_km = straight_line_km
        self.travel_calls: List[Tuple[Location, Location, datetime]] = []
        self.distance_calls: List[Tuple[Location, Location]] = []

    def distance_between(self, origin: Location, destination: Location) -> float:
        self.distance_calls.append((origin, destination))
        return self.straight_line_km

    async def travel(
        self, origin: Location, destination: Location, departure: datetime
    ) -> TravelEstimate:
        self.travel_calls.append((origin, destination, departure))
        time_minutes, distance_km = self.travel_fn(origin, destination, departure)
        return TravelEstimate(time_minutes=time_minutes, distance_km=distance_km)
