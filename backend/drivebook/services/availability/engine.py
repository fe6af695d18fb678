# backend/drivebook/services/availability/engine.py
"""
Driver slot-availability engine.

Given one driver's profile, the day's scheduled bookings and availability
overrides, and a requested pickup/dropoff pair, return every lesson start on
the 15-minute grid the driver can take on. The computation is pure apart from
travel lookups: no shared state, no retries, and "no availability" is an
empty list rather than an error.

Order of work:
1. Resolve limits (profile -> school defaults -> built-in defaults).
2. Short-circuit on a missing service center or an out-of-radius request.
3. Derive open windows, then gaps with their baseline travel.
4. Scan every gap and return the sorted, deduplicated starts.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ...core.config import Settings
from ...core.metrics import SLOT_COMPUTATIONS_TOTAL
from ...schemas.availability import SlotRequest
from ..travel.base import TravelCalculator
from .constraints import check_service_radius, resolve_constraints
from .gaps import build_gaps
from .scanner import scan_gaps
from .windows import derive_open_windows

logger = logging.getLogger(__name__)


async def compute_available_slots(
    request: SlotRequest,
    travel_calculator: TravelCalculator,
    settings: Optional[Settings] = None,
) -> List[datetime]:
    """
    Compute the feasible lesson start times for ``request.date``.

    Returns:
        UTC datetimes, strictly ascending, without duplicates.
    """
    profile = request.driver_profile
    service_center = profile.service_center_location
    if service_center is None:
        SLOT_COMPUTATIONS_TOTAL.labels(outcome="no_service_center").inc()
        logger.info(f"Driver has no service center location; no slots on {request.date}")
        return []

    constraints = resolve_constraints(profile, request.school_settings, settings)

    radius = check_service_radius(
        constraints,
        service_center,
        request.pickup_location,
        request.dropoff_location,
        travel_calculator,
    )
    if not radius.within:
        SLOT_COMPUTATIONS_TOTAL.labels(outcome="out_of_service_area").inc()
        logger.info(
            f"Request outside service radius ({radius.radius_km} km): "
            f"pickup {radius.pickup_km:.2f} km, dropoff {radius.dropoff_km:.2f} km"
        )
        return []

    open_windows = derive_open_windows(request.date, profile, request.availabilities)
    if not open_windows:
        SLOT_COMPUTATIONS_TOTAL.labels(outcome="no_open_windows").inc()
        return []

    plan = await build_gaps(
        open_windows, service_center, request.bookings, travel_calculator, request.date
    )
    slots = await scan_gaps(
        plan,
        constraints,
        request.pickup_location,
        request.dropoff_location,
        travel_calculator,
    )

    SLOT_COMPUTATIONS_TOTAL.labels(outcome="slots" if slots else "no_slots").inc()
    logger.debug(
        f"Computed {len(slots)} slots on {request.date} across {len(open_windows)} windows "
        f"and {len(plan.gaps)} gaps"
    )
    return slots
