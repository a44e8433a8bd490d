import logging
from typing import Callable, Optional

from fastapi.concurrency import run_in_threadpool

from ..directory.client import DirectoryClient
from ..models import AuthSession, BookingRequest

logger = logging.getLogger(__name__)


class BookingForm:
    """Books a provider and reports back through ``on_service_booked``.

    Client errors propagate so the page can keep the form open and show them.
    """

    def __init__(self, initial_provider_id: str, on_service_booked: Callable[[], None],
                 client: DirectoryClient, session: AuthSession, service_id: Optional[str] = None):
        self.initial_provider_id = initial_provider_id
        self.on_service_booked = on_service_booked
        self.client = client
        self.session = session
        self.service_id = service_id

    async def submit(self, booking_date: str, address: str, notes: str = "") -> None:
        booking = BookingRequest(
            provider_username=self.initial_provider_id,
            service_id=self.service_id,
            booking_date=booking_date.strip(),
            address=address.strip(),
            notes=notes.strip() or None,
        )
        token = self.session.user.token if self.session.user else None
        await run_in_threadpool(self.client.book_service, booking, token)
        logger.info(f"Booked {self.initial_provider_id} on {booking.booking_date}")
        self.on_service_booked()
