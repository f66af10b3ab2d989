"""ResourceResolver Example - Culture Fallback Chains.

Demonstrates how page resources resolve through the culture hierarchy
when a translation is incomplete.

Scenarios covered:
1. Basic fallback (fr-CA -> fr -> en)
2. Spotting missing translations with on_fallback
3. SQLite-backed resources shared through a ResolverRegistry
4. Ambient UI culture with ResourceProvider
5. Listing one culture with resolve_all()

Note on Error Handling:
    ResourceNotFoundError is an expected outcome; catch it, or use
    ResourceProvider.get_string(..., default=...). AmbiguousResourceError
    and StoreUnavailableError signal broken data or infrastructure and
    should reach your error reporting.

Python 3.13+.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from localepages import (
    FallbackInfo,
    InMemoryResourceStore,
    ResolverConfig,
    ResolverRegistry,
    ResourceEntry,
    ResourceNotFoundError,
    ResourceProvider,
    ResourceResolver,
    SqliteResourceStore,
    ui_culture,
)

CHECKOUT = [
    ResourceEntry("Checkout", "en", "title", "Checkout"),
    ResourceEntry("Checkout", "en", "pay", "Pay now"),
    ResourceEntry("Checkout", "en", "shipping", "Shipping"),
    ResourceEntry("Checkout", "fr", "title", "Paiement"),
    ResourceEntry("Checkout", "fr", "pay", "Payer"),
    ResourceEntry("Checkout", "fr-CA", "pay", "Payer maintenant"),
]


def example_1_basic_fallback() -> None:
    """Example 1: Basic fallback (fr-CA -> fr -> en)."""
    print("=" * 60)
    print("Example 1: Basic Fallback (fr-CA -> fr -> en)")
    print("=" * 60)

    resolver = ResourceResolver("Checkout", InMemoryResourceStore(CHECKOUT))

    for key in ("pay", "title", "shipping"):
        print(f"  {key}: {resolver.resolve('fr-CA', key)}")

    try:
        resolver.resolve("fr-CA", "coupon")
    except ResourceNotFoundError as e:
        print(f"\n  coupon: not found (tried {', '.join(e.tried)})")

    print(f"\n  Cached cultures: {resolver.cached_cultures()}")
    print(f"  Cache stats: {resolver.cache_stats()}")


def example_2_missing_translation_report() -> None:
    """Example 2: Collect fallback events to find untranslated keys."""
    print("\n" + "=" * 60)
    print("Example 2: Missing Translation Report")
    print("=" * 60)

    missing: list[FallbackInfo] = []
    resolver = ResourceResolver(
        "Checkout", InMemoryResourceStore(CHECKOUT), on_fallback=missing.append
    )
    for key in ("title", "pay", "shipping"):
        resolver.resolve("fr-CA", key)

    for info in missing:
        print(
            f"  [{info.page}] '{info.key}' requested in {info.requested_culture}, "
            f"served from {info.resolved_culture}"
        )


def example_3_sqlite_registry(tmp_path: Path) -> None:
    """Example 3: SQLite store shared by every page through a registry."""
    print("\n" + "=" * 60)
    print("Example 3: SQLite Store + ResolverRegistry")
    print("=" * 60)

    with SqliteResourceStore(tmp_path / "resources.db") as store:
        store.create_schema()
        store.save_many(CHECKOUT)
        store.save(ResourceEntry("Home", "en", "title", "Welcome"))
        store.save(ResourceEntry("Home", "de", "title", "Willkommen"))

        registry = ResolverRegistry(store, config=ResolverConfig(default_culture="en"))
        print(f"  Checkout/fr-CA/title: {registry.get('Checkout').resolve('fr-CA', 'title')}")
        print(f"  Home/de-AT/title: {registry.get('Home').resolve('de-AT', 'title')}")
        print(f"  Home cultures: {registry.get('Home').available_cultures()}")

        # Store content changed: drop the page's cache
        store.save(ResourceEntry("Home", "de", "title", "Hallo"))
        registry.discard("Home")
        print(f"  Home/de-AT/title after update: {registry.get('Home').resolve('de-AT', 'title')}")
        print(f"  {registry!r}")


def example_4_ambient_culture() -> None:
    """Example 4: ResourceProvider reads the culture of the current request."""
    print("\n" + "=" * 60)
    print("Example 4: Ambient UI Culture")
    print("=" * 60)

    provider = ResourceProvider(ResourceResolver("Checkout", InMemoryResourceStore(CHECKOUT)))

    for request_culture in ("fr-CA", "fr", "ja"):
        with ui_culture(request_culture) as culture:
            pay = provider.get_object("pay")
            coupon = provider.get_string("coupon", default="")
            print(f"  {culture.display_name}: pay={pay!r} coupon={coupon!r}")


def example_5_listing() -> None:
    """Example 5: resolve_all() lists one culture with no fallback."""
    print("\n" + "=" * 60)
    print("Example 5: Listing One Culture")
    print("=" * 60)

    resolver = ResourceResolver("Checkout", InMemoryResourceStore(CHECKOUT))
    print(f"  fr-CA: {resolver.resolve_all('fr-CA')}")
    print(f"  fr:    {resolver.resolve_all('fr')}")

    with ResourceProvider(resolver) as provider, provider.resource_reader() as reader:
        print(f"  default ({reader.culture}): {dict(reader)}")


# Main execution
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    example_1_basic_fallback()
    example_2_missing_translation_report()

    with tempfile.TemporaryDirectory() as tmp_dir_main:
        example_3_sqlite_registry(Path(tmp_dir_main))

    example_4_ambient_culture()
    example_5_listing()

    print("\n" + "=" * 60)
    print("[SUCCESS] All examples complete!")
    print("=" * 60)
