"""Registry of per-page resolvers.

Each resource page gets one ResourceResolver, created on first use and
kept until the caller discards it. The registry is an explicit object
owned by the application, so resolver lifetime (and therefore cache
lifetime) is under the caller's control instead of tied to hidden
module-level singletons.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from localepages.config import ResolverConfig
from localepages.errors import InvalidArgumentError
from localepages.resolver import FallbackInfo, ResourceResolver
from localepages.rwlock import RWLock
from localepages.store.base import ResourceStore
from localepages.types import PageName

__all__ = ["ResolverRegistry"]

logger = logging.getLogger(__name__)


class ResolverRegistry:
    """Create and hold one ResourceResolver per page over a shared store.

    Thread-safe via double-checked locking: a read lock for the common
    already-created case, the write lock only when a new resolver must be
    built.

    Example:
        >>> registry = ResolverRegistry(store, config=ResolverConfig(default_culture="en"))
        >>> registry.get("Checkout").resolve("fr-CA", "title")
        'Paiement'
        >>> registry.get("Checkout") is registry.get("Checkout")
        True
    """

    __slots__ = ("_config", "_lock", "_on_fallback", "_resolvers", "_store")

    def __init__(
        self,
        store: ResourceStore,
        *,
        config: ResolverConfig | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize an empty registry.

        Args:
            store: Store shared by every resolver
            config: Configuration applied to every resolver created
            on_fallback: Callback passed to every resolver created
        """
        self._store = store
        self._config = config if config is not None else ResolverConfig()
        self._on_fallback = on_fallback
        self._resolvers: dict[PageName, ResourceResolver] = {}
        self._lock = RWLock()

    @property
    def config(self) -> ResolverConfig:
        """Configuration applied to every resolver (read-only)."""
        return self._config

    def get(self, page: PageName) -> ResourceResolver:
        """Return the resolver for page, creating it on first use.

        Raises:
            InvalidArgumentError: If page is empty or not a str
        """
        if not isinstance(page, str) or not page:
            msg = "Resource page must be a non-empty string"
            raise InvalidArgumentError(msg)

        with self._lock.read():
            resolver = self._resolvers.get(page)
        if resolver is not None:
            return resolver

        with self._lock.write():
            resolver = self._resolvers.get(page)
            if resolver is None:
                resolver = ResourceResolver(
                    page,
                    self._store,
                    config=self._config,
                    on_fallback=self._on_fallback,
                )
                self._resolvers[page] = resolver
                logger.debug("Created resolver for page %s", page)
            return resolver

    def discard(self, page: PageName) -> bool:
        """Drop the resolver for page and its cache.

        The next get() builds a fresh resolver. Use after the store content
        for the page has changed.

        Returns:
            True if a resolver was registered for page
        """
        with self._lock.write():
            removed = self._resolvers.pop(page, None)
        if removed is not None:
            logger.debug("Discarded resolver for page %s", page)
        return removed is not None

    def clear(self) -> None:
        """Drop every resolver."""
        with self._lock.write():
            self._resolvers.clear()

    @property
    def pages(self) -> tuple[PageName, ...]:
        """Pages with a live resolver, sorted."""
        with self._lock.read():
            return tuple(sorted(self._resolvers))

    def __contains__(self, page: object) -> bool:
        with self._lock.read():
            return page in self._resolvers

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._resolvers)

    def __iter__(self) -> Iterator[ResourceResolver]:
        with self._lock.read():
            resolvers = list(self._resolvers.values())
        return iter(resolvers)

    def __repr__(self) -> str:
        return f"ResolverRegistry(pages={len(self)}, default_culture={self._config.default_culture!r})"
