"""Capabilities the views are handed instead of reaching for globals."""

from typing import Optional, Protocol

from ..models import SearchFilters


class FilterStore(Protocol):
    filters: SearchFilters

    def update_filter(self, key: str, value: str) -> None: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class Navigator(Protocol):
    def navigate(self, path: str) -> None: ...


class MemoryFilterStore:
    """Filter store held for the lifetime of one request (or one test)."""

    def __init__(self, filters: Optional[SearchFilters] = None):
        self.filters = filters or SearchFilters()

    def update_filter(self, key: str, value: str) -> None:
        if key not in SearchFilters.model_fields:
            raise KeyError(key)
        self.filters = self.filters.model_copy(update={key: value})


class FlashNotifier:
    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class RedirectNavigator:
    """Remembers where the view asked to go; the route turns it into a redirect."""

    def __init__(self):
        self.location: Optional[str] = None

    def navigate(self, path: str) -> None:
        self.location = path
