"""Enumerations for localepages configuration.

Uses StrEnum so members compare equal to their string values and log
readably without __str__ boilerplate.

Python 3.13+.
"""

from enum import StrEnum

__all__ = [
    "CachePolicy",
    "DuplicatePolicy",
]


class CachePolicy(StrEnum):
    """Lifetime policy for values cached by a ResourceResolver.

    StrEnum provides automatic string conversion: str(CachePolicy.DISABLED) == "disabled"
    """

    NEVER_EXPIRE = "never_expire"
    """Read-through cache, entries live as long as the resolver.

    Correct only while the backing store is immutable for the resolver's
    lifetime. Discard the resolver (see ResolverRegistry.discard) after
    the store changes.
    """

    DISABLED = "disabled"
    """Every resolve() call queries the store."""


class DuplicatePolicy(StrEnum):
    """How resolve_all() treats two store rows carrying the same key."""

    LAST_WINS = "last_wins"
    """Keep the last row seen and log a warning for the duplicated key."""

    REJECT = "reject"
    """Raise DuplicateResourceError."""
