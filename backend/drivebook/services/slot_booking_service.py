# backend/drivebook/services/slot_booking_service.py
"""
Slot Booking Service

Wraps the availability engine with the school-level rules applied around it:
- Assembling the day's scheduled bookings (and refusing incomplete ones)
- Daily booking cap per driver
- Minimum booking lead time
- Validating one requested start time before a booking is created
"""

from datetime import date, datetime, timedelta, timezone
import logging
from typing import Iterable, List, Optional

from ..core.config import Settings
from ..core.constants import BOOKING_STATUS_SCHEDULED
from ..core.exceptions import (
    DailyBookingCapException,
    InsufficientNoticeException,
    MissingBookingLocationException,
    MissingServiceCenterException,
    OutsideServiceAreaException,
    SlotUnavailableException,
)
from ..schemas.availability import BookingRecord, ConfirmedSlot, ExistingBooking, SlotRequest
from ..utils.time_utils import add_minutes, ensure_utc, hours_between, truncate_to_minute, utc_date_of
from .availability import check_service_radius, compute_available_slots, resolve_constraints
from .base import BaseService
from .travel.base import TravelCalculator

logger = logging.getLogger(__name__)


def select_day_bookings(records: Iterable[BookingRecord], target_date: date) -> List[ExistingBooking]:
    """
    Keep the scheduled bookings starting on ``target_date`` (UTC day).

    Raises:
        MissingBookingLocationException: a kept booking has no pickup or
            dropoff coordinates. Skipping it would hide a real commitment.
    """
    day = utc_date_of(target_date)
    selected: List[ExistingBooking] = []
    for record in records:
        if record.status != BOOKING_STATUS_SCHEDULED:
            continue
        if utc_date_of(record.start_time) != day:
            continue

        missing = [
            name
            for name, value in (
                ("pickup_location", record.pickup_location),
                ("dropoff_location", record.dropoff_location),
            )
            if value is None
        ]
        if missing:
            logger.error(f"Booking {record.id} on {day} is missing {', '.join(missing)}")
            raise MissingBookingLocationException(booking_id=record.id, missing=missing)

        selected.append(
            ExistingBooking(
                id=record.id,
                start_time=record.start_time,
                end_time=record.end_time,
                pickup_location=record.pickup_location,
                dropoff_location=record.dropoff_location,
                status=record.status,
            )
        )
    return selected


class SlotBookingService(BaseService):
    """Availability and slot validation for one driver-day request at a time."""

    def __init__(self, travel_calculator: TravelCalculator, settings: Optional[Settings] = None):
        super().__init__(settings)
        self.travel_calculator = travel_calculator

    @staticmethod
    def _now(now: Optional[datetime]) -> datetime:
        return ensure_utc(now) if now is not None else datetime.now(timezone.utc)

    @staticmethod
    def _booked_count(request: SlotRequest) -> int:
        """Scheduled bookings starting on the request's UTC day."""
        day = utc_date_of(request.date)
        return sum(
            1
            for b in request.bookings
            if b.status == BOOKING_STATUS_SCHEDULED and utc_date_of(b.start_time) == day
        )

    def _daily_cap_reached(self, request: SlotRequest) -> bool:
        school = request.school_settings
        if school is None or school.daily_booking_cap_per_driver is None:
            return False
        return self._booked_count(request) >= school.daily_booking_cap_per_driver

    @staticmethod
    def _lead_time_cutoff(request: SlotRequest, now: datetime) -> Optional[datetime]:
        school = request.school_settings
        if school is None or not school.min_booking_lead_time_hours:
            return None
        return now + timedelta(hours=school.min_booking_lead_time_hours)

    @BaseService.measure_operation("get_available_slots")
    async def get_available_slots(
        self, request: SlotRequest, now: Optional[datetime] = None
    ) -> List[datetime]:
        """
        Feasible start times for the request, after school-level rules.

        Returns an empty list when the daily booking cap is already reached;
        drops starts earlier than ``now`` plus the minimum lead time.
        """
        if self._daily_cap_reached(request):
            self.logger.info(f"Daily booking cap reached for {request.date}; no slots offered")
            return []

        slots = await compute_available_slots(request, self.travel_calculator, self.settings)

        cutoff = self._lead_time_cutoff(request, self._now(now))
        if cutoff is None:
            return slots
        return [slot for slot in slots if slot >= cutoff]

    @BaseService.measure_operation("validate_requested_slot")
    async def validate_requested_slot(
        self, request: SlotRequest, start_time: datetime, now: Optional[datetime] = None
    ) -> ConfirmedSlot:
        """
        Confirm that ``start_time`` can be booked, or say exactly why not.

        Seconds and microseconds of ``start_time`` are dropped first.

        Raises:
            MissingServiceCenterException
            OutsideServiceAreaException
            InsufficientNoticeException
            DailyBookingCapException
            SlotUnavailableException
        """
        profile = request.driver_profile
        requested = truncate_to_minute(ensure_utc(start_time))
        constraints = resolve_constraints(profile, request.school_settings, self.settings)

        if profile.service_center_location is None:
            raise MissingServiceCenterException()

        radius = check_service_radius(
            constraints,
            profile.service_center_location,
            request.pickup_location,
            request.dropoff_location,
            self.travel_calculator,
        )
        if not radius.within:
            raise OutsideServiceAreaException(
                radius.radius_km, radius.pickup_km, radius.dropoff_km
            )

        current = self._now(now)
        cutoff = self._lead_time_cutoff(request, current)
        if cutoff is not None and requested < cutoff:
            raise InsufficientNoticeException(
                required_hours=request.school_settings.min_booking_lead_time_hours,
                provided_hours=round(hours_between(current, requested), 2),
            )

        if self._daily_cap_reached(request):
            raise DailyBookingCapException(
                cap=request.school_settings.daily_booking_cap_per_driver,
                booked=self._booked_count(request),
            )

        slots = await compute_available_slots(request, self.travel_calculator, self.settings)
        if requested not in slots:
            raise SlotUnavailableException(requested.isoformat())

        return ConfirmedSlot(
            start_time=requested,
            end_time=add_minutes(requested, constraints.lesson_duration_minutes),
        )
