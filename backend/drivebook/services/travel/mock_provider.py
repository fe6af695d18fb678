"""Deterministic travel calculator for unit tests and local development (no network calls)."""

from datetime import datetime
from typing import Optional

from ...schemas.availability import Location, TravelEstimate
from .base import TravelCalculator
from .haversine import haversine_km


class FixedTravelCalculator(TravelCalculator):
    """
    Every leg costs the same time and distance.

    ``straight_line_km`` pins the radius-check distance as well; left unset,
    the real great-circle distance is used so service radii still apply.
    """

    def __init__(
        self,
        time_minutes: float = 0.0,
        distance_km: float = 0.0,
        straight_line_km: Optional[float] = None,
    ) -> None:
        self.estimate = TravelEstimate(time_minutes=time_minutes, distance_km=distance_km)
        self.straight_line_km = straight_line_km

    def distance_between(self, origin: Location, destination: Location) -> float:
        if self.straight_line_km is not None:
            return self.straight_line_km
        return haversine_km(origin, destination)

    async def travel(
        self, origin: Location, destination: Location, departure: datetime
    ) -> TravelEstimate:
        return self.estimate
