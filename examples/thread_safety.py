"""Thread Safety Example - Sharing Resolvers Between Request Threads.

Thread Safety:
    ResourceResolver and ResolverRegistry are thread-safe. The per-page
    cache uses readers-writer locks, so concurrent cache hits never block
    each other. Store queries run outside any lock.

    The ambient UI culture is a context variable: each thread (and each
    asyncio task) sees its own value.

Demonstrates:
1. Concurrent reads through one shared resolver
2. A thread pool serving requests in different cultures
3. Lazy resolver creation under contention

Python 3.13+.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from localepages import (
    InMemoryResourceStore,
    ResolverRegistry,
    ResourceEntry,
    ResourceProvider,
    ResourceResolver,
    ui_culture,
)

STORE = InMemoryResourceStore(
    [
        ResourceEntry("Home", "en", "greeting", "Hello"),
        ResourceEntry("Home", "fr", "greeting", "Bonjour"),
        ResourceEntry("Home", "de", "greeting", "Hallo"),
        ResourceEntry("Home", "pt-BR", "greeting", "Olá"),
    ]
)


def example_1_shared_resolver() -> None:
    """Example 1: Many threads resolving through one resolver."""
    print("=" * 60)
    print("Example 1: Shared Resolver")
    print("=" * 60)

    resolver = ResourceResolver("Home", STORE)
    results: list[str] = []
    results_lock = threading.Lock()

    def worker(culture: str) -> None:
        value = resolver.resolve(culture, "greeting")
        with results_lock:
            results.append(f"{culture}={value}")

    threads = [
        threading.Thread(target=worker, args=(culture,))
        for culture in ("fr-CA", "fr-BE", "de-CH", "pt-BR", "es") * 4
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    print(f"  Resolved {len(results)} lookups")
    print(f"  Cache stats: {resolver.cache_stats()}")


def example_2_request_pool() -> None:
    """Example 2: Each pooled request sets its own ambient culture."""
    print("\n" + "=" * 60)
    print("Example 2: Request Thread Pool")
    print("=" * 60)

    provider = ResourceProvider(ResourceResolver("Home", STORE))

    def handle_request(request_id: int, culture: str) -> str:
        with ui_culture(culture):
            return f"request {request_id} [{culture}]: {provider.get_object('greeting')}"

    requests = enumerate(["fr-CA", "de-AT", "pt-BR", "it"])
    with ThreadPoolExecutor(max_workers=4) as executor:
        futures = [executor.submit(handle_request, i, c) for i, c in requests]
        for future in as_completed(futures):
            print(f"  {future.result()}")


def example_3_registry_contention() -> None:
    """Example 3: Concurrent get() calls build exactly one resolver per page."""
    print("\n" + "=" * 60)
    print("Example 3: Registry Under Contention")
    print("=" * 60)

    registry = ResolverRegistry(STORE)
    with ThreadPoolExecutor(max_workers=8) as executor:
        resolvers = list(executor.map(lambda _: registry.get("Home"), range(32)))

    print(f"  Distinct resolvers: {len({id(r) for r in resolvers})}")
    print(f"  {registry!r}")


# Main execution
if __name__ == "__main__":
    example_1_shared_resolver()
    example_2_request_pool()
    example_3_registry_contention()

    print("\n" + "=" * 60)
    print("[SUCCESS] All examples complete!")
    print("=" * 60)
