# backend/drivebook/schemas/availability.py
"""
Inputs and outputs of the driver slot-availability engine.

Numeric profile/settings fields pass through one coercion step here, at the
boundary between storage and the engine, so the engine only ever sees
floats, ints or None.
"""

import datetime
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import AfterValidator, BeforeValidator, Field, model_validator

from ..core.constants import BOOKING_STATUS_SCHEDULED
from ..utils.coercion import coerce_optional_float, coerce_optional_int
from ..utils.time_utils import ensure_utc, utc_date_of
from ._strict_base import SnapshotModel, StrictModel

# Type aliases for clarity
DateType = datetime.date
TimeType = datetime.time
DateTimeType = datetime.datetime


def _to_utc_date(value: Any) -> Any:
    if isinstance(value, (DateType, DateTimeType)):
        return utc_date_of(value)
    if isinstance(value, str) and "T" in value:
        return utc_date_of(DateTimeType.fromisoformat(value.replace("Z", "+00:00")))
    return value


def _time_of_day_to_str(value: Any) -> Any:
    if isinstance(value, TimeType):
        return value.strftime("%H:%M")
    return value


OptionalFloat = Annotated[Optional[float], BeforeValidator(coerce_optional_float)]
OptionalInt = Annotated[Optional[int], BeforeValidator(coerce_optional_int)]
UtcDateTime = Annotated[DateTimeType, AfterValidator(ensure_utc)]
UtcDate = Annotated[DateType, BeforeValidator(_to_utc_date)]
TimeOfDay = Annotated[str, BeforeValidator(_time_of_day_to_str)]


class Location(StrictModel):
    """A (latitude, longitude) pair in decimal degrees."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    @model_validator(mode="before")
    @classmethod
    def _accept_pairs_and_short_keys(cls, data: Any) -> Any:
        if isinstance(data, (tuple, list)) and len(data) == 2:
            return {"latitude": data[0], "longitude": data[1]}
        if isinstance(data, dict) and "lat" in data and "latitude" not in data:
            return {"latitude": data["lat"], "longitude": data.get("lng", data.get("lon"))}
        return data


class TravelEstimate(StrictModel):
    """Driving time and distance for one leg."""

    time_minutes: float
    distance_km: float


class AvailabilityType(str, Enum):
    WORKING_HOURS = "working_hours"
    OVERRIDE_OPEN = "override_open"
    OVERRIDE_CLOSED = "override_closed"


class AvailabilityOverride(SnapshotModel):
    """Date-specific working hours, extra open window, or closure for a driver."""

    date: UtcDate
    start_time: TimeOfDay
    end_time: TimeOfDay
    type: AvailabilityType
    notes: Optional[str] = None


class DriverProfileSnapshot(SnapshotModel):
    """Scheduling-relevant fields of a driver profile."""

    service_center_location: Optional[Location] = None
    work_day_start: Optional[TimeOfDay] = None
    work_day_end: Optional[TimeOfDay] = None
    lesson_duration_minutes: OptionalInt = None
    buffer_minutes_between_lessons: OptionalInt = None
    service_radius_km: OptionalFloat = None
    max_segment_travel_time_min: OptionalFloat = None
    max_segment_travel_distance_km: OptionalFloat = None
    daily_max_travel_time_min: OptionalFloat = None
    daily_max_travel_distance_km: OptionalFloat = None


class SchoolSettingsSnapshot(SnapshotModel):
    """School-wide defaults that apply when a driver profile leaves a field unset."""

    default_lesson_duration_minutes: OptionalInt = None
    default_buffer_minutes_between_lessons: OptionalInt = None
    default_service_radius_km: OptionalFloat = None
    default_max_segment_travel_time_min: OptionalFloat = None
    default_max_segment_travel_distance_km: OptionalFloat = None
    default_daily_max_travel_time_min: OptionalFloat = None
    default_daily_max_travel_distance_km: OptionalFloat = None
    min_booking_lead_time_hours: OptionalFloat = None
    daily_booking_cap_per_driver: OptionalInt = None


class BookingRecord(SnapshotModel):
    """A booking as read from storage, with locations joined in where resolvable."""

    id: Optional[int] = None
    start_time: UtcDateTime
    end_time: UtcDateTime
    status: str = BOOKING_STATUS_SCHEDULED
    pickup_location: Optional[Location] = None
    dropoff_location: Optional[Location] = None


class ExistingBooking(SnapshotModel):
    """A committed lesson occupying ``[start_time, end_time)``."""

    id: Optional[int] = None
    start_time: UtcDateTime
    end_time: UtcDateTime
    pickup_location: Location
    dropoff_location: Location
    status: str = BOOKING_STATUS_SCHEDULED


class SlotRequest(StrictModel):
    """Everything the engine needs for one driver on one date."""

    date: UtcDate
    driver_profile: DriverProfileSnapshot
    bookings: List[ExistingBooking] = Field(default_factory=list)
    pickup_location: Location
    dropoff_location: Location
    school_settings: Optional[SchoolSettingsSnapshot] = None
    availabilities: List[AvailabilityOverride] = Field(default_factory=list)


class ConfirmedSlot(StrictModel):
    """A validated lesson slot ready to be persisted."""

    start_time: UtcDateTime
    end_time: UtcDateTime
