"""Resolve a driver's scheduling limits from profile, school defaults and settings."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional

from ...core.config import Settings, settings as default_settings
from ...core.constants import DEFAULT_BUFFER_MINUTES
from ...schemas.availability import DriverProfileSnapshot, Location, SchoolSettingsSnapshot
from ...utils.coercion import first_defined
from ..travel.base import TravelCalculator


@dataclass(frozen=True)
class SlotConstraints:
    lesson_duration_minutes: int
    buffer_minutes: int
    service_radius_km: float = math.inf
    max_segment_travel_time_min: float = math.inf
    max_segment_travel_distance_km: float = math.inf
    # None means the day has no cap.
    daily_max_travel_time_min: Optional[float] = None
    daily_max_travel_distance_km: Optional[float] = None


@dataclass(frozen=True)
class RadiusCheck:
    pickup_km: float
    dropoff_km: float
    radius_km: float

    @property
    def within(self) -> bool:
        return self.pickup_km <= self.radius_km and self.dropoff_km <= self.radius_km


def _non_negative(value: Optional[float]) -> Optional[float]:
    # Negative limits are bad data and fall through to the next source.
    if value is None or value < 0:
        return None
    return value


def _positive(value: Optional[float]) -> Optional[float]:
    if value is None or value <= 0:
        return None
    return value


def resolve_constraints(
    profile: DriverProfileSnapshot,
    school_settings: Optional[SchoolSettingsSnapshot] = None,
    settings: Optional[Settings] = None,
) -> SlotConstraints:
    """
    Apply the precedence driver profile -> school default -> built-in default.

    Negative values (and a non-positive lesson duration) count as unset.
    Radius and per-segment caps default to unlimited, daily caps to none.
    """
    cfg = settings or default_settings
    school = school_settings or SchoolSettingsSnapshot()

    lesson_duration = first_defined(
        _positive(profile.lesson_duration_minutes),
        _positive(school.default_lesson_duration_minutes),
        cfg.default_lesson_duration_minutes,
    )
    buffer_minutes = first_defined(
        _non_negative(profile.buffer_minutes_between_lessons),
        _non_negative(school.default_buffer_minutes_between_lessons),
        DEFAULT_BUFFER_MINUTES,
    )
    return SlotConstraints(
        lesson_duration_minutes=int(lesson_duration),
        buffer_minutes=int(buffer_minutes),
        service_radius_km=first_defined(
            _non_negative(profile.service_radius_km),
            _non_negative(school.default_service_radius_km),
            math.inf,
        ),
        max_segment_travel_time_min=first_defined(
            _non_negative(profile.max_segment_travel_time_min),
            _non_negative(school.default_max_segment_travel_time_min),
            math.inf,
        ),
        max_segment_travel_distance_km=first_defined(
            _non_negative(profile.max_segment_travel_distance_km),
            _non_negative(school.default_max_segment_travel_distance_km),
            math.inf,
        ),
        daily_max_travel_time_min=first_defined(
            _non_negative(profile.daily_max_travel_time_min),
            _non_negative(school.default_daily_max_travel_time_min),
        ),
        daily_max_travel_distance_km=first_defined(
            _non_negative(profile.daily_max_travel_distance_km),
            _non_negative(school.default_daily_max_travel_distance_km),
        ),
    )


def check_service_radius(
    constraints: SlotConstraints,
    service_center: Location,
    pickup: Location,
    dropoff: Location,
    travel: TravelCalculator,
) -> RadiusCheck:
    """Straight-line distances from the service center; no travel lookups."""
    return RadiusCheck(
        pickup_km=travel.distance_between(service_center, pickup),
        dropoff_km=travel.distance_between(service_center, dropoff),
        radius_km=constraints.service_radius_km,
    )
