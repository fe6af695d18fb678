from .base import TravelCalculator, TravelProvider
from .factory import create_travel_calculator
from .fallback import FallbackTravelCalculator
from .google_provider import GoogleMapsTravelProvider
from .haversine import SimpleTravelCalculator, haversine_km
from .mock_provider import FixedTravelCalculator

__all__ = [
    "FallbackTravelCalculator",
    "FixedTravelCalculator",
    "GoogleMapsTravelProvider",
    "SimpleTravelCalculator",
    "TravelCalculator",
    "TravelProvider",
    "create_travel_calculator",
    "haversine_km",
]
