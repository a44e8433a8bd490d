"""
Client for the marketplace REST API.

Endpoints (relative to SERVICEHUB_API_BASE):
  - Profile: GET  /auth/get-profile/{username}
  - Search:  GET  /services/search?location=...&service=...
  - Login:   POST /auth/login            {username, password}
  - Booking: POST /customer/book-service {providerUsername, serviceId, bookingDate, address, notes}

Every failure is raised as a DirectoryError subclass; callers decide how to show it.
"""

import logging
from typing import Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from .. import config
from ..models import BookingRequest, ProviderProfile, SessionUser
from .errors import DirectoryUnavailable, ProfileNotFound, RemoteServiceError

logger = logging.getLogger(__name__)

PROFILE_PATH = "/auth/get-profile/{username}"
SEARCH_PATH = "/services/search"
LOGIN_PATH = "/auth/login"
BOOKING_PATH = "/customer/book-service"

HEADERS = {
    "User-Agent": "servicehub-web/0.1",
    "Accept": "application/json",
}


def _error_message(resp: requests.Response) -> Optional[str]:
    """Pull the ``message`` field out of an error body, if there is one."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class DirectoryClient:
    def __init__(self, base_url: str = config.API_BASE_URL, timeout: float = config.API_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            return self.session.request(method, url, headers={**HEADERS, **kwargs.pop("headers", {})},
                                        timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise DirectoryUnavailable(str(e)) from e

    def _check(self, resp: requests.Response) -> None:
        if resp.status_code < 400:
            return
        message = _error_message(resp)
        if message:
            raise RemoteServiceError(message, status_code=resp.status_code)
        raise DirectoryUnavailable(f"HTTP {resp.status_code}")

    def get_profile(self, username: str) -> ProviderProfile:
        """Fetch one provider profile by username."""
        resp = self._request("GET", PROFILE_PATH.format(username=quote(username, safe="")))
        if resp.status_code == 404:
            raise ProfileNotFound(username)
        self._check(resp)
        try:
            return ProviderProfile.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Malformed profile for {username}: {e}")
            raise DirectoryUnavailable("malformed profile payload") from e

    def search_providers(self, location: str, service: str) -> list[ProviderProfile]:
        resp = self._request("GET", SEARCH_PATH, params={"location": location, "service": service})
        self._check(resp)
        try:
            body = resp.json()
            # Some deployments wrap results as {"success": ..., "data": [...]}
            rows = body.get("data", []) if isinstance(body, dict) else body
            return [ProviderProfile.model_validate(row) for row in rows]
        except (ValueError, ValidationError, AttributeError, TypeError) as e:
            logger.error(f"Malformed search results: {e}")
            raise DirectoryUnavailable("malformed search payload") from e

    def login(self, username: str, password: str) -> SessionUser:
        resp = self._request("POST", LOGIN_PATH, json={"username": username, "password": password})
        self._check(resp)
        try:
            body = resp.json()
            return SessionUser(username=body.get("username") or username, role=body["role"],
                               token=body.get("token"))
        except (ValueError, KeyError, AttributeError, TypeError, ValidationError) as e:
            logger.error(f"Malformed login response: {e}")
            raise DirectoryUnavailable("malformed login payload") from e

    def book_service(self, booking: BookingRequest, token: Optional[str] = None) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        resp = self._request("POST", BOOKING_PATH, json=booking.model_dump(by_alias=True),
                             headers=headers)
        self._check(resp)
        logger.info(f"Booking submitted for provider {booking.provider_username}")
