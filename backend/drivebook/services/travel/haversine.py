"""Great-circle distance and the constant-speed travel estimator."""

from __future__ import annotations

from datetime import datetime
import math

from ...core.constants import DEFAULT_AVERAGE_SPEED_KPH, EARTH_RADIUS_KM
from ...schemas.availability import Location, TravelEstimate
from .base import TravelCalculator


def haversine_km(origin: Location, destination: Location) -> float:
    """Great-circle distance in kilometres."""
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    d_lat = math.radians(destination.latitude - origin.latitude)
    d_lon = math.radians(destination.longitude - origin.longitude)

    a = math.sin(d_lat / 2) ** 2 + math.sin(d_lon / 2) ** 2 * math.cos(lat1) * math.cos(lat2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


class SimpleTravelCalculator(TravelCalculator):
    """Straight-line distance driven at a constant average speed; ignores departure time."""

    def __init__(self, average_speed_kph: float = DEFAULT_AVERAGE_SPEED_KPH) -> None:
        if average_speed_kph <= 0:
            raise ValueError("average_speed_kph must be positive")
        self.average_speed_kph = average_speed_kph

    def distance_between(self, origin: Location, destination: Location) -> float:
        return haversine_km(origin, destination)

    async def travel(
        self, origin: Location, destination: Location, departure: datetime
    ) -> TravelEstimate:
        return self.estimate(origin, destination)

    def estimate(self, origin: Location, destination: Location) -> TravelEstimate:
        distance_km = haversine_km(origin, destination)
        return TravelEstimate(
            time_minutes=(distance_km / self.average_speed_kph) * 60,
            distance_km=distance_km,
        )
