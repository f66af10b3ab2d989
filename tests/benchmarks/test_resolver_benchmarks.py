"""Performance benchmarks for ResourceResolver.

Measures cache hits against store round trips so a regression in the
cache locking shows up before it reaches production.

Python 3.13+.
"""

from __future__ import annotations

from typing import Any

import pytest

from localepages import CachePolicy, ResolverConfig, ResourceResolver
from localepages.store import InMemoryResourceStore, ResourceEntry


@pytest.fixture
def store() -> InMemoryResourceStore:
    """Store with one page, 200 keys in English and a partial French set."""
    rows = [ResourceEntry("Catalog", "en", f"item-{i}", f"Item {i}") for i in range(200)]
    rows += [ResourceEntry("Catalog", "fr", f"item-{i}", f"Article {i}") for i in range(0, 200, 2)]
    return InMemoryResourceStore(rows)


class TestResolverBenchmarks:
    """Benchmark resolve() on its hot and cold paths."""

    def test_cache_hit(self, benchmark: Any, store: InMemoryResourceStore) -> None:
        """Benchmark resolving an already cached value."""
        resolver = ResourceResolver("Catalog", store)
        resolver.resolve("fr-CA", "item-1")

        result = benchmark(resolver.resolve, "fr-CA", "item-1")

        assert result == "Item 1"

    def test_uncached_fallback_walk(self, benchmark: Any, store: InMemoryResourceStore) -> None:
        """Benchmark a three-level walk with the cache disabled."""
        resolver = ResourceResolver(
            "Catalog", store, config=ResolverConfig(cache_policy=CachePolicy.DISABLED)
        )

        result = benchmark(resolver.resolve, "fr-CA", "item-1")

        assert result == "Item 1"

    def test_resolve_all(self, benchmark: Any, store: InMemoryResourceStore) -> None:
        """Benchmark listing one culture of the page."""
        resolver = ResourceResolver("Catalog", store)

        result = benchmark(resolver.resolve_all, "fr")

        assert len(result) == 100
