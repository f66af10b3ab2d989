"""Tests for ResourceProvider and ResourceReader."""

from __future__ import annotations

import pytest

from localepages import (
    AmbiguousResourceError,
    Culture,
    InvalidArgumentError,
    ResolverConfig,
    ResourceClosedError,
    ResourceEntry,
    ResourceNotFoundError,
    ResourceProvider,
    ResourceReader,
    ResourceResolver,
    StoreUnavailableError,
    ui_culture,
)
from tests.helpers.stores import CountingStore, FailingStore


@pytest.fixture
def provider(counting_store: CountingStore) -> ResourceProvider:
    return ResourceProvider(ResourceResolver("Checkout", counting_store))


class TestGetObject:
    def test_explicit_culture(self, provider: ResourceProvider) -> None:
        assert provider.get_object("pay", "fr-CA") == "Payer maintenant"
        assert provider.get_object("title", Culture("fr-CA")) == "Paiement"

    def test_ambient_culture_used_when_none(self, provider: ResourceProvider) -> None:
        with ui_culture("fr-CA"):
            assert provider.get_object("title") == "Paiement"
            assert provider.get_object("title", "") == "Paiement"
        with ui_culture("de"):
            assert provider.get_object("title") == "Kasse"

    def test_explicit_culture_beats_ambient(self, provider: ResourceProvider) -> None:
        with ui_culture("de"):
            assert provider.get_object("title", "fr") == "Paiement"

    def test_missing_key_raises(self, provider: ResourceProvider) -> None:
        with ui_culture("fr"), pytest.raises(ResourceNotFoundError):
            provider.get_object("no-such-key")

    def test_invalid_key(self, provider: ResourceProvider) -> None:
        with pytest.raises(InvalidArgumentError):
            provider.get_object("", "en")


class TestGetString:
    def test_default_only_for_missing(self, provider: ResourceProvider) -> None:
        assert provider.get_string("no-such-key", "fr", default="?") == "?"
        assert provider.get_string("title", "fr", default="?") == "Paiement"

    def test_empty_default(self, provider: ResourceProvider) -> None:
        assert provider.get_string("no-such-key", "en", default="") == ""

    def test_no_default_raises(self, provider: ResourceProvider) -> None:
        with pytest.raises(ResourceNotFoundError):
            provider.get_string("no-such-key", "en")

    def test_non_str_default_rejected(self, provider: ResourceProvider) -> None:
        with pytest.raises(TypeError, match="default must be str"):
            provider.get_string("title", "en", default=None)

    def test_integrity_errors_not_masked(self, counting_store: CountingStore) -> None:
        counting_store.add(ResourceEntry("Checkout", "en", "title", "Checkout again"))
        provider = ResourceProvider(ResourceResolver("Checkout", counting_store))

        with pytest.raises(AmbiguousResourceError):
            provider.get_string("title", "en", default="?")

    def test_store_errors_not_masked(self) -> None:
        store = FailingStore()
        provider = ResourceProvider(ResourceResolver("Checkout", store))

        with pytest.raises(StoreUnavailableError) as exc_info:
            provider.get_string("title", "en", default="?")
        assert exc_info.value is store.error


class TestResourceReader:
    def test_lists_default_culture(self, provider: ResourceProvider) -> None:
        with provider.resource_reader() as reader:
            assert reader.culture == "en"
            assert dict(reader) == {
                "title": "Checkout",
                "pay": "Pay now",
                "cancel": "Cancel",
                "empty": "",
            }
            assert reader["pay"] == "Pay now"
            assert len(reader) == 4

    def test_reader_uses_configured_default(self, counting_store: CountingStore) -> None:
        resolver = ResourceResolver(
            "Checkout", counting_store, config=ResolverConfig(default_culture="fr")
        )
        reader = ResourceProvider(resolver).resource_reader()
        assert reader.culture == "fr"
        assert dict(reader) == {"title": "Paiement", "pay": "Payer"}

    def test_closed_reader_rejects_access(self) -> None:
        reader = ResourceReader({"title": "Checkout"}, "en")
        reader.close()
        reader.close()

        assert reader.closed
        with pytest.raises(ResourceClosedError):
            reader["title"]
        with pytest.raises(ResourceClosedError):
            len(reader)
        with pytest.raises(ResourceClosedError):
            list(reader)
        assert "closed" in repr(reader)

    def test_reader_is_a_snapshot(self) -> None:
        source = {"title": "Checkout"}
        reader = ResourceReader(source, "en")
        source["title"] = "Changed"
        assert reader["title"] == "Checkout"


class TestProviderLifecycle:
    def test_context_manager_closes(self, provider: ResourceProvider) -> None:
        with provider as entered:
            assert entered is provider
            assert repr(provider) == "ResourceProvider(page='Checkout', open)"
        assert provider.closed

    def test_closed_provider_rejects_calls(self, provider: ResourceProvider) -> None:
        provider.close()

        with pytest.raises(ResourceClosedError):
            provider.get_object("title", "en")
        with pytest.raises(ResourceClosedError):
            provider.get_string("title", "en", default="?")
        with pytest.raises(ResourceClosedError):
            provider.resource_reader()
        with pytest.raises(ResourceClosedError), provider:
            pass

    def test_closed_error_is_runtime_error(self, provider: ResourceProvider) -> None:
        provider.close()
        with pytest.raises(RuntimeError):
            provider.get_object("title", "en")
