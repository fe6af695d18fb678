# backend/drivebook/core/constants.py
"""Constants shared by the availability engine and travel calculators."""

from typing import Final

# Candidate lesson starts are aligned to this grid, anchored at midnight.
SLOT_GRID_MINUTES: Final = 15

DEFAULT_LESSON_DURATION_MINUTES: Final = 60
DEFAULT_BUFFER_MINUTES: Final = 0
DEFAULT_AVERAGE_SPEED_KPH: Final = 40.0

EARTH_RADIUS_KM: Final = 6371.0

BOOKING_STATUS_SCHEDULED: Final = "scheduled"

GOOGLE_MAPS_API_BASE_URL: Final = "https://maps.googleapis.com/maps/api"
