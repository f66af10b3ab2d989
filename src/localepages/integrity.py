"""Data integrity exceptions.

These exceptions indicate SYSTEM FAILURES, not expected lookup outcomes.
Operators should be able to tell them apart from ResourceNotFoundError so
that duplicate rows get fixed instead of one of several values being
served at random.

Design:
    - NOT subclasses of LocalizationError (different error domain)
    - Carry diagnostic context for post-mortem analysis
    - Immutable after construction

Hierarchy:
    DataIntegrityError (base - system failures)
    ├─ AmbiguousResourceError (more than one row for a natural key)
    │  └─ DuplicateResourceError (duplicate key in a bulk culture listing)
    ├─ FallbackDepthExceededError (fallback walk failed to terminate)
    └─ ImmutabilityViolationError (mutation attempt on an integrity error)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

__all__ = [
    "AmbiguousResourceError",
    "DataIntegrityError",
    "DuplicateResourceError",
    "FallbackDepthExceededError",
    "ImmutabilityViolationError",
    "IntegrityContext",
]


@dataclass(frozen=True, slots=True)
class IntegrityContext:
    """Context for integrity error diagnosis.

    Attributes:
        component: Component where the error occurred (resolver, cache, store)
        operation: Operation being performed (resolve, resolve_all)
        key: Identifier involved, usually "page/culture/key" (optional)
        expected: Expected value or cardinality (optional)
        actual: Actual value or cardinality found (optional)
        timestamp: Time of detection (time.monotonic())
    """

    component: str
    operation: str
    key: str | None = None
    expected: str | None = None
    actual: str | None = None
    timestamp: float | None = None


class DataIntegrityError(Exception):
    """Base exception for all data integrity failures.

    Immutable after construction so error evidence cannot be altered while
    the exception propagates.

    Attributes:
        context: Structured diagnostic context for post-mortem analysis
    """

    __slots__ = ("_context", "_frozen")

    _context: IntegrityContext | None
    _frozen: bool

    def __init__(
        self,
        message: str,
        context: IntegrityContext | None = None,
    ) -> None:
        """Initialize DataIntegrityError.

        Args:
            message: Human-readable error description
            context: Structured diagnostic context (optional)
        """
        super().__init__(message)
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_frozen", True)

    # Set by the interpreter while an exception propagates.
    _PYTHON_EXCEPTION_ATTRS: frozenset[str] = frozenset(
        ("__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__")
    )

    def __setattr__(self, name: str, value: object) -> None:
        """Reject attribute mutations after initialization.

        Raises:
            ImmutabilityViolationError: If attempting to modify after construction
        """
        if name in self._PYTHON_EXCEPTION_ATTRS:
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_frozen", False):
            msg = f"Cannot modify integrity error attribute: {name}"
            raise ImmutabilityViolationError(msg)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        """Reject all attribute deletions.

        Raises:
            ImmutabilityViolationError: Always
        """
        msg = f"Cannot delete integrity error attribute: {name}"
        raise ImmutabilityViolationError(msg)

    @property
    def context(self) -> IntegrityContext | None:
        """Structured diagnostic context."""
        return self._context

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, context={self._context!r})"


@final
class ImmutabilityViolationError(DataIntegrityError):
    """Attempt to mutate or delete an attribute of an integrity error."""


class AmbiguousResourceError(DataIntegrityError):
    """The store returned more than one row for one (page, culture, key).

    Never retried automatically: the rows must be deduplicated upstream.

    Attributes:
        page: Resource page
        culture: Culture whose rows collided
        key: Duplicated resource key
        row_count: Number of rows returned
    """

    __slots__ = ("_culture", "_key", "_page", "_row_count")

    _page: str
    _culture: str
    _key: str
    _row_count: int

    def __init__(
        self,
        message: str,
        context: IntegrityContext | None = None,
        *,
        page: str = "",
        culture: str = "",
        key: str = "",
        row_count: int = 0,
    ) -> None:
        """Initialize AmbiguousResourceError.

        Args:
            message: Human-readable error description
            context: Structured diagnostic context (optional)
            page: Resource page
            culture: Culture whose rows collided
            key: Duplicated resource key
            row_count: Number of rows returned for the key
        """
        # Set before super().__init__ freezes the instance
        object.__setattr__(self, "_page", page)
        object.__setattr__(self, "_culture", culture)
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_row_count", row_count)
        super().__init__(message, context)

    @property
    def page(self) -> str:
        """Resource page."""
        return self._page

    @property
    def culture(self) -> str:
        """Culture whose rows collided."""
        return self._culture

    @property
    def key(self) -> str:
        """Duplicated resource key."""
        return self._key

    @property
    def row_count(self) -> int:
        """Number of rows returned for the key."""
        return self._row_count

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"page={self._page!r}, culture={self._culture!r}, "
            f"key={self._key!r}, row_count={self._row_count})"
        )


@final
class DuplicateResourceError(AmbiguousResourceError):
    """resolve_all() met the same key twice under DuplicatePolicy.REJECT."""


@final
class FallbackDepthExceededError(DataIntegrityError):
    """A fallback walk visited more cultures than the configured maximum.

    Culture parents strictly decrease specificity, so a legitimate walk
    ends at the default culture within a handful of steps. Reaching the
    limit is a bug in parent computation, not a lookup outcome.

    Attributes:
        max_depth: Limit that was exceeded
    """

    __slots__ = ("_max_depth",)

    _max_depth: int

    def __init__(
        self,
        message: str,
        context: IntegrityContext | None = None,
        *,
        max_depth: int = 0,
    ) -> None:
        object.__setattr__(self, "_max_depth", max_depth)
        super().__init__(message, context)

    @property
    def max_depth(self) -> int:
        """Limit that was exceeded."""
        return self._max_depth
