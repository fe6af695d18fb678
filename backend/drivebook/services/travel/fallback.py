"""Wraps a remote travel provider so failures degrade to the local estimator."""

from datetime import datetime
import logging
from typing import Optional

from ...core.metrics import TRAVEL_LOOKUPS_TOTAL, TRAVEL_PROVIDER_FALLBACKS_TOTAL
from ...schemas.availability import Location, TravelEstimate
from .base import TravelCalculator, TravelProvider
from .haversine import SimpleTravelCalculator

logger = logging.getLogger(__name__)


class FallbackTravelCalculator(TravelCalculator):
    """
    Ask the provider first; on any provider error answer from ``fallback``.

    Falling back is the whole retry policy: the same remote call is never
    repeated. Radius checks always use the fallback's great-circle distance.
    """

    def __init__(
        self, provider: TravelProvider, fallback: Optional[SimpleTravelCalculator] = None
    ) -> None:
        self.provider = provider
        self.fallback = fallback or SimpleTravelCalculator()

    def distance_between(self, origin: Location, destination: Location) -> float:
        return self.fallback.distance_between(origin, destination)

    async def aclose(self) -> None:
        """Release the provider's HTTP client, if it holds one."""
        aclose = getattr(self.provider, "aclose", None)
        if aclose is not None:
            await aclose()

    async def travel(
        self, origin: Location, destination: Location, departure: datetime
    ) -> TravelEstimate:
        try:
            estimate = await self.provider.travel(origin, destination, departure)
        except Exception as exc:
            logger.warning(
                f"Travel provider {self.provider.name} failed, falling back to simple calculator: {exc}"
            )
            TRAVEL_PROVIDER_FALLBACKS_TOTAL.labels(reason=type(exc).__name__).inc()
            TRAVEL_LOOKUPS_TOTAL.labels(source="fallback").inc()
            return await self.fallback.travel(origin, destination, departure)

        TRAVEL_LOOKUPS_TOTAL.labels(source="provider").inc()
        return estimate
