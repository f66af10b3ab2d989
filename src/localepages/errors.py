"""Exception hierarchy for resource resolution.

Caller-facing outcomes of a lookup. Data integrity failures (duplicate
rows, a fallback walk that does not terminate) live in
localepages.integrity because they signal corruption or bugs rather than
an expected lookup outcome.

Hierarchy:
    LocalizationError
    ├─ InvalidArgumentError (also ValueError)
    ├─ ResourceNotFoundError (also LookupError)
    ├─ StoreUnavailableError
    └─ ResourceClosedError (also RuntimeError)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

__all__ = [
    "InvalidArgumentError",
    "LocalizationError",
    "ResourceClosedError",
    "ResourceNotFoundError",
    "StoreUnavailableError",
]


class LocalizationError(Exception):
    """Base exception for all resource resolution errors.

    Attributes:
        page: Resource page involved, if known
        culture: Culture name involved, if known
        key: Resource key involved, if known
    """

    def __init__(
        self,
        message: str,
        *,
        page: str | None = None,
        culture: str | None = None,
        key: str | None = None,
    ) -> None:
        """Initialize LocalizationError.

        Args:
            message: Human-readable error description
            page: Resource page involved (optional)
            culture: Culture name involved (optional)
            key: Resource key involved (optional)
        """
        super().__init__(message)
        self.page = page
        self.culture = culture
        self.key = key


class InvalidArgumentError(LocalizationError, ValueError):
    """Caller passed an empty key, a missing culture or a malformed culture name.

    Raised before any store access is attempted. Never retried.
    """


class ResourceNotFoundError(LocalizationError, LookupError):
    """No culture in the fallback chain, default included, defines the key.

    An expected outcome: the caller decides what to display instead.

    Attributes:
        tried: Culture names queried, most specific first
    """

    def __init__(
        self,
        message: str,
        *,
        page: str | None = None,
        culture: str | None = None,
        key: str | None = None,
        tried: tuple[str, ...] = (),
    ) -> None:
        """Initialize ResourceNotFoundError.

        Args:
            message: Human-readable error description
            page: Resource page searched
            culture: Originally requested culture
            key: Resource key that was not found
            tried: Culture names queried, most specific first
        """
        super().__init__(message, page=page, culture=culture, key=key)
        self.tried = tuple(tried)


class StoreUnavailableError(LocalizationError):
    """The backing store could not answer a query.

    Raised by store implementations. The resolver passes it through
    unmodified and never retries; retry policy belongs to the store or the
    caller.
    """


class ResourceClosedError(LocalizationError, RuntimeError):
    """A provider or reader was used after close()."""
