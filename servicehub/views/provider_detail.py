"""
Provider detail page: fetch one profile, track its lifecycle, gate the booking flow.

The view holds exactly one state at a time:

    Idle -> Loading -> Failed | NotFound | Loaded (booking_open on/off)

Each fetch is tagged with the username it was issued for. A completion whose
tag no longer matches the current username is dropped, so an out-of-order
response can never replace the profile of the username now on screen.
"""

import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Optional, Union

from fastapi.concurrency import run_in_threadpool

from .. import config
from ..directory.client import DirectoryClient
from ..directory.errors import DirectoryError, ProfileNotFound, RemoteServiceError
from ..models import AuthSession, ProviderProfile
from .capabilities import Navigator, Notifier

logger = logging.getLogger(__name__)

MISSING_USERNAME_MESSAGE = "Provider username not found in the navigation context. Please go back and select a provider."
GENERIC_FAILURE_MESSAGE = "Could not load provider details. Please try again."
LOGIN_REQUIRED_MESSAGE = "Please log in as a customer to book a service."
BOOKING_SENT_MESSAGE = "Booking request sent successfully!"

ProfileFetcher = Callable[[str], Awaitable[ProviderProfile]]


@dataclass(frozen=True)
class Idle:
    kind = "idle"


@dataclass(frozen=True)
class Loading:
    username: str
    kind = "loading"


@dataclass(frozen=True)
class Failed:
    message: str
    kind = "error"


@dataclass(frozen=True)
class NotFound:
    username: str
    kind = "not_found"

    @property
    def message(self) -> str:
        return f'Provider with username "{self.username}" not found.'


@dataclass(frozen=True)
class Loaded:
    profile: ProviderProfile
    booking_open: bool = False
    kind = "loaded"


DetailState = Union[Idle, Loading, Failed, NotFound, Loaded]


def threadpool_fetcher(client: DirectoryClient) -> ProfileFetcher:
    """Run the blocking client call off the event loop."""
    async def fetch(username: str) -> ProviderProfile:
        return await run_in_threadpool(client.get_profile, username)
    return fetch


def describe_failure(username: str, error: DirectoryError) -> DetailState:
    if isinstance(error, ProfileNotFound):
        return NotFound(username)
    if isinstance(error, RemoteServiceError):
        return Failed(f"Could not load provider details: {error.message}.")
    return Failed(GENERIC_FAILURE_MESSAGE)


class ProviderDetailView:
    def __init__(self, fetch_profile: ProfileFetcher, session: AuthSession,
                 notifier: Notifier, navigator: Navigator):
        self.fetch_profile = fetch_profile
        self.session = session
        self.notifier = notifier
        self.navigator = navigator
        self.username: Optional[str] = None
        self.state: DetailState = Idle()

    @property
    def profile(self) -> Optional[ProviderProfile]:
        return self.state.profile if isinstance(self.state, Loaded) else None

    async def set_username(self, username: Optional[str]) -> None:
        """React to a (possibly) new username from the route."""
        self.username = username
        if not username:
            logger.warning("Username is missing, not fetching provider details")
            self.state = Failed(MISSING_USERNAME_MESSAGE)
            return

        self.state = Loading(username)
        try:
            profile = await self.fetch_profile(username)
            outcome: DetailState = Loaded(profile)
        except DirectoryError as e:
            logger.error(f"Error fetching provider details for {username}: {e}")
            outcome = describe_failure(username, e)

        if self.username != username:
            logger.debug(f"Dropping stale profile response for {username}, now showing {self.username}")
            return
        self.state = outcome

    def open_booking(self) -> bool:
        if not isinstance(self.state, Loaded):
            return False
        user = self.session.user
        if not self.session.is_authenticated or user is None or user.role != config.CUSTOMER_ROLE:
            self.notifier.notify(LOGIN_REQUIRED_MESSAGE)
            return False
        self.state = replace(self.state, booking_open=True)
        return True

    def cancel_booking(self) -> None:
        if isinstance(self.state, Loaded):
            self.state = replace(self.state, booking_open=False)

    def handle_booking_success(self) -> None:
        """Callback handed to the booking form."""
        self.notifier.notify(BOOKING_SENT_MESSAGE)
        self.cancel_booking()
        self.navigator.navigate(config.CUSTOMER_DASHBOARD_PATH)

    def context(self) -> dict:
        state = self.state
        return {
            "view_state": state.kind,
            "username": self.username,
            "profile": self.profile,
            "booking_open": isinstance(state, Loaded) and state.booking_open,
            "error": getattr(state, "message", None),
            "back_url": config.SERVICES_PATH,
        }
