import pytest
from pydantic import ValidationError

from servicehub.directory.errors import RemoteServiceError
from servicehub.models import AuthSession, SessionUser
from servicehub.views.booking import BookingForm

from conftest import make_response

SESSION = AuthSession(is_authenticated=True, user=SessionUser(username="dana", role="ROLE_CUSTOMER", token="tok"))


@pytest.mark.asyncio
async def test_submit_books_and_reports_success(http, directory):
    http.add("POST", "/customer/book-service", make_response(201, {"id": 9}))
    booked = []
    form = BookingForm("alice", lambda: booked.append(True), directory, SESSION, service_id="S-7")

    await form.submit("2026-11-01", " 12 Road ", "")

    assert booked == [True]
    body = http.calls[0]["json"]
    assert body == {"providerUsername": "alice", "serviceId": "S-7", "bookingDate": "2026-11-01",
                    "address": "12 Road", "notes": None}
    assert http.calls[0]["headers"]["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_failed_booking_does_not_report_success(http, directory):
    http.add("POST", "/customer/book-service", make_response(409, {"message": "Provider is fully booked"}))
    booked = []
    form = BookingForm("alice", lambda: booked.append(True), directory, SESSION)

    with pytest.raises(RemoteServiceError, match="fully booked"):
        await form.submit("2026-11-01", "12 Road")
    assert booked == []


@pytest.mark.asyncio
async def test_blank_address_is_rejected_before_sending(http, directory):
    form = BookingForm("alice", lambda: None, directory, SESSION)

    with pytest.raises(ValidationError):
        await form.submit("2026-11-01", "   ")
    assert http.calls == []
