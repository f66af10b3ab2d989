"""In-memory ResourceStore.

Holds entries in insertion order. add() never rejects a duplicate natural
key, which lets tests and fixtures model a store that fails to enforce
uniqueness; save() replaces existing rows the way an upsert would.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator

from localepages.store.base import ResourceEntry
from localepages.types import CultureName, PageName, ResourceKey

__all__ = ["InMemoryResourceStore"]


class InMemoryResourceStore:
    """Thread-safe list of ResourceEntry satisfying the ResourceStore protocol.

    Example:
        >>> store = InMemoryResourceStore([
        ...     ResourceEntry("page1", "en", "greeting", "Hello"),
        ...     ResourceEntry("page1", "fr", "greeting", "Bonjour"),
        ... ])
        >>> [e.value for e in store.fetch_one("page1", "fr", "greeting")]
        ['Bonjour']
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self, entries: Iterable[ResourceEntry] = ()) -> None:
        self._lock = threading.Lock()
        self._entries: list[ResourceEntry] = list(entries)

    def add(self, entry: ResourceEntry) -> None:
        """Append an entry, even if its natural key already exists."""
        with self._lock:
            self._entries.append(entry)

    def extend(self, entries: Iterable[ResourceEntry]) -> None:
        """Append several entries."""
        new_entries = list(entries)
        with self._lock:
            self._entries.extend(new_entries)

    def save(self, entry: ResourceEntry) -> None:
        """Insert or replace: afterwards exactly one row holds entry's natural key."""
        natural_key = entry.natural_key
        with self._lock:
            self._entries = [e for e in self._entries if e.natural_key != natural_key]
            self._entries.append(entry)

    def fetch_one(
        self, page: PageName, culture: CultureName, key: ResourceKey
    ) -> list[ResourceEntry]:
        wanted = (page, culture, key)
        with self._lock:
            return [e for e in self._entries if e.natural_key == wanted]

    def fetch_all_for_culture(self, page: PageName, culture: CultureName) -> list[ResourceEntry]:
        with self._lock:
            return [e for e in self._entries if e.page == page and e.culture == culture]

    def fetch_all_for_page(self, page: PageName) -> list[ResourceEntry]:
        with self._lock:
            return [e for e in self._entries if e.page == page]

    def fetch_all(self) -> list[ResourceEntry]:
        """Every entry in the store, in insertion order."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[ResourceEntry]:
        return iter(self.fetch_all())

    def __repr__(self) -> str:
        return f"InMemoryResourceStore(entries={len(self)})"
