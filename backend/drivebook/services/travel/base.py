"""Provider-agnostic travel cost interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime

from ...schemas.availability import Location, TravelEstimate


class TravelProvider(ABC):
    """A source of driving-time estimates, possibly remote and fallible."""

    name: str = "provider"

    @abstractmethod
    async def travel(
        self, origin: Location, destination: Location, departure: datetime
    ) -> TravelEstimate:
        pass


class TravelCalculator(ABC):
    """
    What the slot engine consumes.

    ``distance_between`` is the straight-line distance used for service-radius
    checks and must be cheap and synchronous. ``travel`` is the driving
    estimate for one leg departing at ``departure`` and must not raise for
    provider outages.
    """

    @abstractmethod
    def distance_between(self, origin: Location, destination: Location) -> float:
        pass

    @abstractmethod
    async def travel(
        self, origin: Location, destination: Location, departure: datetime
    ) -> TravelEstimate:
        pass

    async def aclose(self) -> None:
        """Release any resources held by the calculator."""
        return None
