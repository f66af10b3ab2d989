"""Tests for the data integrity exception family."""

from __future__ import annotations

import pytest

from localepages import LocalizationError
from localepages.integrity import (
    AmbiguousResourceError,
    DataIntegrityError,
    DuplicateResourceError,
    FallbackDepthExceededError,
    ImmutabilityViolationError,
    IntegrityContext,
)


def _ambiguous() -> AmbiguousResourceError:
    context = IntegrityContext(
        component="resolver",
        operation="resolve",
        key="Checkout/fr/title",
        expected="<= 1 row",
        actual="2 rows",
    )
    return AmbiguousResourceError(
        "Ambiguous resource",
        context,
        page="Checkout",
        culture="fr",
        key="title",
        row_count=2,
    )


class TestHierarchy:
    def test_integrity_errors_are_not_lookup_errors(self) -> None:
        for cls in (
            AmbiguousResourceError,
            DuplicateResourceError,
            FallbackDepthExceededError,
            ImmutabilityViolationError,
        ):
            assert issubclass(cls, DataIntegrityError)
            assert not issubclass(cls, LocalizationError)

    def test_duplicate_is_ambiguous(self) -> None:
        assert issubclass(DuplicateResourceError, AmbiguousResourceError)


class TestAmbiguousResourceError:
    def test_attributes(self) -> None:
        error = _ambiguous()

        assert error.page == "Checkout"
        assert error.culture == "fr"
        assert error.key == "title"
        assert error.row_count == 2
        assert error.context is not None
        assert error.context.key == "Checkout/fr/title"
        assert str(error) == "Ambiguous resource"

    def test_repr_includes_natural_key(self) -> None:
        text = repr(_ambiguous())
        assert "page='Checkout'" in text
        assert "row_count=2" in text

    def test_defaults_without_context(self) -> None:
        error = DuplicateResourceError("dup")
        assert error.context is None
        assert error.row_count == 0


class TestImmutability:
    def test_setattr_rejected(self) -> None:
        error = _ambiguous()
        with pytest.raises(ImmutabilityViolationError, match="_page"):
            error._page = "Home"

    def test_new_attribute_rejected(self) -> None:
        error = DataIntegrityError("boom")
        with pytest.raises((ImmutabilityViolationError, AttributeError)):
            error.extra = 1  # type: ignore[attr-defined]

    def test_delattr_rejected(self) -> None:
        error = _ambiguous()
        with pytest.raises(ImmutabilityViolationError):
            del error._key

    def test_traceback_attributes_still_assignable(self) -> None:
        try:
            raise _ambiguous()
        except AmbiguousResourceError as error:
            assert error.__traceback__ is not None
            error.add_note("seen in test")
            assert error.__notes__ == ["seen in test"]

    def test_can_be_raised_from_another_error(self) -> None:
        with pytest.raises(DataIntegrityError) as exc_info:
            try:
                raise KeyError("inner")
            except KeyError as inner:
                raise DataIntegrityError("outer") from inner
        assert isinstance(exc_info.value.__cause__, KeyError)


class TestFallbackDepthExceededError:
    def test_max_depth(self) -> None:
        error = FallbackDepthExceededError("too deep", max_depth=8)
        assert error.max_depth == 8
        assert "too deep" in repr(error)
