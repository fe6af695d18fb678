# backend/drivebook/core/exceptions.py
"""
Domain-specific exceptions for slot availability and booking validation.

"No availability" is never an exception: the engine returns an empty list.
These exceptions cover data-integrity failures and the explicit checks made
when a caller validates one requested slot. The API layer translates them
with ``to_http_exception``.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    status_code = HTTP_422_UNPROCESSABLE


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific business exceptions


class MissingBookingLocationException(ServiceException):
    """Raised when a scheduled booking has no resolvable pickup or dropoff."""

    def __init__(self, booking_id: Optional[int] = None, missing: Optional[list[str]] = None):
        super().__init__(
            message="Existing booking is missing location data",
            code="BOOKING_LOCATION_MISSING",
            details={"booking_id": booking_id, "missing": missing or []},
        )


class MissingServiceCenterException(ValidationException):
    """Raised when a driver has no service center location to schedule from."""

    def __init__(self) -> None:
        super().__init__(
            message="Driver is missing a service center location",
            code="SERVICE_CENTER_MISSING",
        )


class OutsideServiceAreaException(ValidationException):
    """Raised when pickup or dropoff lies beyond the driver's service radius."""

    def __init__(self, radius_km: float, pickup_km: float, dropoff_km: float):
        super().__init__(
            message="Pickup or dropoff is outside the driver service radius",
            code="OUTSIDE_SERVICE_AREA",
            details={
                "service_radius_km": radius_km,
                "pickup_distance_km": round(pickup_km, 3),
                "dropoff_distance_km": round(dropoff_km, 3),
            },
        )


class InsufficientNoticeException(BusinessRuleException):
    """Raised when booking doesn't meet minimum advance notice."""

    def __init__(self, required_hours: float, provided_hours: float):
        super().__init__(
            message=f"Bookings must be made at least {required_hours:g} hours in advance",
            code="INSUFFICIENT_NOTICE",
            details={
                "required_hours": required_hours,
                "provided_hours": provided_hours,
            },
        )


class DailyBookingCapException(ConflictException):
    """Raised when the driver already holds the school's daily booking cap."""

    def __init__(self, cap: int, booked: int):
        super().__init__(
            message="Driver daily booking cap reached",
            code="DAILY_BOOKING_CAP_REACHED",
            details={"cap": cap, "booked": booked},
        )


class SlotUnavailableException(ConflictException):
    """Raised when a requested start time is not a feasible slot."""

    def __init__(self, requested_start: str):
        super().__init__(
            message="Requested slot is not available for this driver",
            code="SLOT_UNAVAILABLE",
            details={"requested_start": requested_start},
        )


class TravelProviderError(Exception):
    """
    Raised by remote travel providers when an estimate cannot be produced.

    Never escapes the fallback calculator; callers of the engine only see it
    when they use a bare provider directly.
    """
