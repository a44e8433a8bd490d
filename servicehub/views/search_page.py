import logging
from typing import Optional

from ..directory.client import DirectoryClient
from ..directory.errors import DirectoryError, RemoteServiceError
from ..models import ProviderProfile

logger = logging.getLogger(__name__)

START_MESSAGE = "Start by searching for a service or a location."
SEARCH_FAILED_MESSAGE = "Could not load search results. Please try again."


class SearchResultsPage:
    """Receives the search bar's callback and holds what the results area shows."""

    def __init__(self, client: DirectoryClient):
        self.client = client
        self.results: list[ProviderProfile] = []
        self.error: Optional[str] = None
        self.searched = False

    def on_search(self, location: str, service: str) -> None:
        self.error = None
        if not location and not service:
            self.results = []
            self.searched = False
            return

        self.searched = True
        try:
            self.results = self.client.search_providers(location, service)
        except RemoteServiceError as e:
            self.results = []
            self.error = f"Could not load search results: {e.message}."
        except DirectoryError as e:
            logger.error(f"Search failed for service={service!r} location={location!r}: {e}")
            self.results = []
            self.error = SEARCH_FAILED_MESSAGE

    def context(self) -> dict:
        return {
            "results": self.results,
            "search_error": self.error,
            "searched": self.searched,
            "start_message": START_MESSAGE,
        }
