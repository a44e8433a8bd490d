import logging
from typing import Callable, Optional

from .capabilities import FilterStore

logger = logging.getLogger(__name__)

SearchHandler = Callable[[str, str], None]


class SearchBar:
    """Service + location inputs backed by a shared filter store."""

    def __init__(self, store: FilterStore, on_search: SearchHandler):
        self.store = store
        self.on_search = on_search

    def update_filter(self, key: str, value: str) -> None:
        self.store.update_filter(key, value)

    def submit(self, location: Optional[str] = None, service: Optional[str] = None) -> None:
        if location is not None:
            self.store.update_filter("location", location)
        if service is not None:
            self.store.update_filter("search", service)

        filters = self.store.filters
        if filters.location.strip() or filters.search.strip():
            self.on_search(filters.location, filters.search)
        else:
            # ("", "") tells the page to clear results and show the empty state
            logger.info("Search submitted with empty fields, clearing results")
            self.on_search("", "")
