"""Factory for travel calculators."""

import logging
from typing import Optional

from ...core.config import Settings, settings as default_settings
from .base import TravelCalculator
from .fallback import FallbackTravelCalculator
from .google_provider import GoogleMapsTravelProvider
from .haversine import SimpleTravelCalculator
from .mock_provider import FixedTravelCalculator

logger = logging.getLogger(__name__)


def create_travel_calculator(
    settings: Optional[Settings] = None, provider_override: Optional[str] = None
) -> TravelCalculator:
    cfg = settings or default_settings
    name = (provider_override or cfg.travel_provider or "simple").lower()
    simple = SimpleTravelCalculator(cfg.average_speed_kph)

    if name == "mock":
        return FixedTravelCalculator()
    if name == "google":
        if not cfg.has_maps_api_key:
            logger.warning("Google travel provider selected without an API key; using simple estimator")
            return simple
        provider = GoogleMapsTravelProvider(
            api_key=cfg.maps_api_key.get_secret_value(),
            base_url=cfg.maps_base_url,
            timeout=cfg.travel_request_timeout_seconds,
        )
        return FallbackTravelCalculator(provider, simple)
    return simple
