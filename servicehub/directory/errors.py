"""Errors raised by the marketplace API client."""

from typing import Optional


class DirectoryError(Exception):
    """Base class for failures talking to the marketplace API."""


class ProfileNotFound(DirectoryError):
    def __init__(self, username: str):
        super().__init__(f"Provider {username!r} not found")
        self.username = username


class RemoteServiceError(DirectoryError):
    """The API answered with an error status and a ``message`` in the body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DirectoryUnavailable(DirectoryError):
    """Network failure, unparseable body, or an error without a message."""
