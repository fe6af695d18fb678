from fastapi import HTTPException

from drivebook.core.exceptions import (
    DailyBookingCapException,
    DomainException,
    InsufficientNoticeException,
    MissingBookingLocationException,
    MissingServiceCenterException,
    OutsideServiceAreaException,
    SlotUnavailableException,
)


def test_domain_exception_defaults():
    exc = DomainException("boom")
    assert exc.code == "DomainException"
    assert exc.details == {}
    http = exc.to_http_exception()
    assert isinstance(http, HTTPException)
    assert http.status_code == 500


def test_status_codes_by_category():
    assert MissingServiceCenterException().to_http_exception().status_code == 400
    assert OutsideServiceAreaException(15, 20, 3).to_http_exception().status_code == 400
    assert InsufficientNoticeException(24, 2.5).to_http_exception().status_code == 422
    assert DailyBookingCapException(4, 4).to_http_exception().status_code == 409
    assert SlotUnavailableException("2024-05-01T10:00:00+00:00").to_http_exception().status_code == 409
    assert MissingBookingLocationException(7, ["pickup_location"]).to_http_exception().status_code == 500


def test_http_detail_shape():
    detail = DailyBookingCapException(cap=3, booked=3).to_http_exception().detail
    assert detail == {
        "message": "Driver daily booking cap reached",
        "code": "DAILY_BOOKING_CAP_REACHED",
        "details": {"cap": 3, "booked": 3},
    }


def test_insufficient_notice_message():
    exc = InsufficientNoticeException(required_hours=24, provided_hours=3.0)
    assert exc.message == "Bookings must be made at least 24 hours in advance"
    assert exc.code == "INSUFFICIENT_NOTICE"


def test_missing_location_details():
    exc = MissingBookingLocationException(booking_id=12, missing=["dropoff_location"])
    assert exc.code == "BOOKING_LOCATION_MISSING"
    assert exc.details == {"booking_id": 12, "missing": ["dropoff_location"]}
