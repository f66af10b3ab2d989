"""Resource store protocol and the entry record it returns.

The resolver depends only on the three read operations declared by
ResourceStore. Any object with these methods works (structural typing),
so a SQL-backed store, an HTTP client or a test fake can be plugged in.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from localepages.types import CultureName, PageName, ResourceKey, ResourceValue

__all__ = ["ResourceEntry", "ResourceStore"]


@dataclass(frozen=True, slots=True)
class ResourceEntry:
    """One persisted localized string.

    (page, culture, key) is the natural key. Stores are expected to hold at
    most one entry per natural key, but the resolver does not rely on it.

    Attributes:
        page: Resource page namespace
        culture: Culture name as stored
        key: Resource key inside the page
        value: Localized text; may be empty, never None
    """

    page: PageName
    culture: CultureName
    key: ResourceKey
    value: ResourceValue

    def __post_init__(self) -> None:
        """Reject non-string fields.

        Raises:
            TypeError: If any field is not a str
        """
        for name in ("page", "culture", "key", "value"):
            field_value = getattr(self, name)
            if not isinstance(field_value, str):
                msg = f"ResourceEntry.{name} must be str, got {type(field_value).__name__}"
                raise TypeError(msg)

    @property
    def natural_key(self) -> tuple[PageName, CultureName, ResourceKey]:
        """(page, culture, key) identifying this entry."""
        return (self.page, self.culture, self.key)


class ResourceStore(Protocol):
    """Read access to persisted (page, culture, key) -> value triples.

    All operations are synchronous and read-only. Implementations signal
    infrastructure failures with localepages.errors.StoreUnavailableError;
    the resolver passes that exception through unchanged.

    Example:
        >>> class DictStore:
        ...     def __init__(self, rows): self.rows = rows
        ...     def fetch_one(self, page, culture, key):
        ...         return [r for r in self.rows if r.natural_key == (page, culture, key)]
        ...     def fetch_all_for_culture(self, page, culture):
        ...         return [r for r in self.rows if (r.page, r.culture) == (page, culture)]
        ...     def fetch_all_for_page(self, page):
        ...         return [r for r in self.rows if r.page == page]
    """

    def fetch_one(
        self, page: PageName, culture: CultureName, key: ResourceKey
    ) -> Sequence[ResourceEntry]:
        """Return every entry matching the exact (page, culture, key).

        The resolver relies on the cardinality: zero rows means "try the
        parent culture", more than one row is a data integrity failure.

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        ...

    def fetch_all_for_culture(
        self, page: PageName, culture: CultureName
    ) -> Sequence[ResourceEntry]:
        """Return every entry of one page for one culture, in store order.

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        ...

    def fetch_all_for_page(self, page: PageName) -> Sequence[ResourceEntry]:
        """Return every entry of one page across all cultures.

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        ...
