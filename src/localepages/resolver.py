"""Culture-fallback resolution of localized strings for one resource page.

ResourceResolver owns the fallback walk and the per-page cache:

    resolve("fr-CA", "greeting")
        cache("fr-CA")  -> miss
        store("fr-CA")  -> 0 rows
        cache("fr")     -> miss
        store("fr")     -> 1 row "Bonjour"
        cache["fr-CA"]["greeting"] = "Bonjour"

The value is cached under the culture the caller asked for, not the
culture it was found at, so the next "fr-CA" lookup is a single cache hit.
The "fr" bucket is untouched.

resolve_all() is a separate read path: it lists exactly what the store
holds for one literal culture, with no fallback and no caching.

Thread Safety:
    resolve() and resolve_all() may be called concurrently from any number
    of threads. The cache is the only shared mutable state (see
    localepages.cache). Store calls happen outside any lock.

Python 3.13+.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from localepages.cache import CultureCache
from localepages.config import ResolverConfig
from localepages.culture import Culture
from localepages.depth_guard import DepthGuard
from localepages.enums import DuplicatePolicy
from localepages.errors import InvalidArgumentError, ResourceNotFoundError
from localepages.integrity import (
    AmbiguousResourceError,
    DuplicateResourceError,
    IntegrityContext,
)
from localepages.store.base import ResourceEntry, ResourceStore
from localepages.types import CultureName, PageName, ResourceKey, ResourceValue

__all__ = ["FallbackInfo", "ResourceResolver"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a culture fallback event.

    Passed to the on_fallback callback when resolve() finds a value at an
    ancestor of the requested culture.

    Attributes:
        page: Resource page
        requested_culture: Culture the caller asked for
        resolved_culture: Culture that actually held the value
        key: Resource key that was resolved
    """

    page: PageName
    requested_culture: CultureName
    resolved_culture: CultureName
    key: ResourceKey


class ResourceResolver:
    """Resolve localized strings of one page with culture fallback and caching.

    Example:
        >>> store = InMemoryResourceStore([
        ...     ResourceEntry("page1", "en", "greeting", "Hello"),
        ...     ResourceEntry("page1", "fr", "greeting", "Bonjour"),
        ... ])
        >>> resolver = ResourceResolver("page1", store)
        >>> resolver.resolve("fr-CA", "greeting")
        'Bonjour'
        >>> resolver.resolve("de", "greeting")
        'Hello'

    Attributes:
        page: Resource page served by this resolver
        config: Immutable resolver configuration
    """

    __slots__ = ("_cache", "_config", "_default", "_on_fallback", "_page", "_store")

    def __init__(
        self,
        page: PageName,
        store: ResourceStore,
        *,
        config: ResolverConfig | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize a resolver with an empty cache.

        Args:
            page: Resource page (non-empty, case-sensitive)
            store: Backing store satisfying the ResourceStore protocol
            config: Resolver configuration (default: ResolverConfig())
            on_fallback: Optional callback invoked when a value is found at
                an ancestor culture instead of the requested one. Useful for
                spotting missing translations.

        Raises:
            InvalidArgumentError: If page is empty or not a str
        """
        if not isinstance(page, str) or not page:
            msg = "Resource page must be a non-empty string"
            raise InvalidArgumentError(msg)

        self._page = page
        self._store = store
        self._config = config if config is not None else ResolverConfig()
        self._default = self._config.default
        self._on_fallback = on_fallback
        self._cache = CultureCache(enabled=self._config.cache_enabled)

    @property
    def page(self) -> PageName:
        """Resource page served by this resolver."""
        return self._page

    @property
    def config(self) -> ResolverConfig:
        """Resolver configuration (read-only)."""
        return self._config

    @property
    def default_culture(self) -> Culture:
        """Culture every fallback chain ends at."""
        return self._default

    @property
    def cache_enabled(self) -> bool:
        """Whether resolved values are cached."""
        return self._cache.enabled

    def __repr__(self) -> str:
        return (
            f"ResourceResolver(page={self._page!r}, "
            f"default_culture={self._default.name!r}, cached={len(self._cache)})"
        )

    # ------------------------------------------------------------------
    # Single-key lookup
    # ------------------------------------------------------------------

    def resolve(self, culture: str | Culture, key: ResourceKey) -> ResourceValue:
        """Resolve key for culture, walking the fallback chain on a miss.

        Args:
            culture: Requested culture. Required: the layer calling
                resolve() substitutes the ambient UI culture beforehand
                (see ResourceProvider).
            key: Resource key (non-empty)

        Returns:
            Localized text, possibly empty

        Raises:
            InvalidArgumentError: If culture is missing or malformed, or key
                is empty. Raised before any store access.
            ResourceNotFoundError: If no culture in the chain, default
                included, defines the key.
            AmbiguousResourceError: If the store holds more than one row for
                the key at the culture where the walk stopped.
            StoreUnavailableError: Passed through from the store unchanged.
            FallbackDepthExceededError: If the walk fails to terminate within
                config.max_fallback_depth cultures.
        """
        self._check_key(key)
        if culture is None or culture == "":
            msg = "Culture is required; substitute the ambient UI culture before resolving"
            raise InvalidArgumentError(msg, page=self._page, key=key)
        requested = Culture.parse(culture)

        cached = self._cache.get(requested.name, key)
        if cached is not None:
            return cached

        tried: list[str] = []
        guard = DepthGuard(max_depth=self._config.max_fallback_depth, operation="resolve")
        value, resolved_at = self._walk(requested, key, guard, tried)

        # Cached under the requested culture only; the culture the value was
        # found at keeps its own bucket untouched.
        self._cache.put(requested.name, key, value)

        if resolved_at != requested:
            logger.debug(
                "Resolved %s/%s for %s from fallback culture %s",
                self._page,
                key,
                requested.name,
                resolved_at.name,
            )
            if self._on_fallback is not None:
                self._on_fallback(
                    FallbackInfo(
                        page=self._page,
                        requested_culture=requested.name,
                        resolved_culture=resolved_at.name,
                        key=key,
                    )
                )
        return value

    def _walk(
        self,
        culture: Culture,
        key: ResourceKey,
        guard: DepthGuard,
        tried: list[str],
    ) -> tuple[ResourceValue, Culture]:
        """Resolve key at culture or one of its ancestors.

        Returns:
            (value, culture the value was found at)
        """
        with guard:
            if tried:
                # The requested culture was checked by resolve() already
                cached = self._cache.get(culture.name, key)
                if cached is not None:
                    return cached, culture

            tried.append(culture.name)
            rows = self._store.fetch_one(self._page, culture.name, key)

            match len(rows):
                case 0:
                    parent = culture.parent(self._default)
                    if parent is None:
                        msg = (
                            f"Resource '{key}' not found in page '{self._page}' "
                            f"(tried {', '.join(tried)})"
                        )
                        raise ResourceNotFoundError(
                            msg,
                            page=self._page,
                            culture=tried[0],
                            key=key,
                            tried=tuple(tried),
                        )
                    logger.debug(
                        "No %s/%s for %s, falling back to %s",
                        self._page,
                        key,
                        culture.name,
                        parent.name,
                    )
                    return self._walk(parent, key, guard, tried)
                case 1:
                    return rows[0].value, culture
                case count:
                    raise self._ambiguous(AmbiguousResourceError, "resolve", culture, key, count)

    def _ambiguous[E: AmbiguousResourceError](
        self,
        error_type: type[E],
        operation: str,
        culture: Culture,
        key: ResourceKey,
        count: int,
    ) -> E:
        natural_key = f"{self._page}/{culture.name}/{key}"
        context = IntegrityContext(
            component="resolver",
            operation=operation,
            key=natural_key,
            expected="1 row",
            actual=f"{count} rows",
            timestamp=time.monotonic(),
        )
        msg = f"Duplicate resource '{natural_key}': store returned {count} rows"
        logger.error("%s", msg)
        return error_type(
            msg, context, page=self._page, culture=culture.name, key=key, row_count=count
        )

    def _check_key(self, key: object) -> None:
        if not isinstance(key, str) or not key:
            msg = "Resource key must be a non-empty string"
            raise InvalidArgumentError(msg, page=self._page)

    # ------------------------------------------------------------------
    # Bulk lookup
    # ------------------------------------------------------------------

    def resolve_all(self, culture: str | Culture | None = None) -> dict[ResourceKey, ResourceValue]:
        """Return every key the store defines for this page and one culture.

        No fallback: the result holds exactly what is stored for the
        literal culture, even if its ancestors define more keys. The result
        is not cached and does not read or populate the per-key cache.

        Args:
            culture: Culture to list; None or "" means the default culture

        Returns:
            Mapping of key to value in store order

        Raises:
            InvalidArgumentError: If culture is malformed
            DuplicateResourceError: If a key repeats and the duplicate policy
                is REJECT. Under LAST_WINS the last row is kept and a warning
                is logged.
            StoreUnavailableError: Passed through from the store unchanged.
        """
        target = self._default if culture is None or culture == "" else Culture.parse(culture)
        rows = self._store.fetch_all_for_culture(self._page, target.name)
        return self._build_mapping(target, rows)

    def _build_mapping(
        self, culture: Culture, rows: Sequence[ResourceEntry]
    ) -> dict[ResourceKey, ResourceValue]:
        mapping: dict[ResourceKey, ResourceValue] = {}
        counts: dict[ResourceKey, int] = {}
        for row in rows:
            counts[row.key] = counts.get(row.key, 0) + 1
            mapping[row.key] = row.value

        duplicated = {k: n for k, n in counts.items() if n > 1}
        if duplicated:
            if self._config.duplicate_policy is DuplicatePolicy.REJECT:
                key, count = next(iter(duplicated.items()))
                raise self._ambiguous(DuplicateResourceError, "resolve_all", culture, key, count)
            for key, count in duplicated.items():
                logger.warning(
                    "Duplicate resource %s/%s/%s (%d rows); keeping the last value",
                    self._page,
                    culture.name,
                    key,
                    count,
                )
        return mapping

    def available_cultures(self) -> tuple[CultureName, ...]:
        """Sorted culture names that hold at least one entry for this page.

        Raises:
            StoreUnavailableError: Passed through from the store unchanged.
        """
        rows = self._store.fetch_all_for_page(self._page)
        return tuple(sorted({row.culture for row in rows}))

    # ------------------------------------------------------------------
    # Cache introspection
    # ------------------------------------------------------------------

    def is_cached(self, culture: str | Culture, key: ResourceKey) -> bool:
        """Check whether (culture, key) is cached, without counting a lookup."""
        return (Culture.parse(culture).name, key) in self._cache

    def cached_cultures(self) -> tuple[CultureName, ...]:
        """Cultures that own a cache bucket, sorted."""
        return self._cache.cultures()

    def cache_stats(self) -> dict[str, int | float | bool]:
        """Cache statistics; see CultureCache.get_stats()."""
        return self._cache.get_stats()
