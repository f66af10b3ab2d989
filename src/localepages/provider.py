"""Consumer-facing facade over a ResourceResolver.

ResourceProvider is what a request pipeline talks to. It fills in the
ambient UI culture when the caller does not name one, and lets the caller
opt into a default for missing resources. ResourceReader exposes the
default culture's full listing as a closable read-only mapping.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Self

from localepages.culture import Culture, current_ui_culture
from localepages.errors import ResourceClosedError, ResourceNotFoundError

if TYPE_CHECKING:
    from localepages.resolver import ResourceResolver
    from localepages.types import ResourceKey, ResourceValue

__all__ = ["ResourceProvider", "ResourceReader"]

_MISSING = object()


class _Closable:
    """Shared close() / context manager behaviour."""

    __slots__ = ("_closed",)

    def __init__(self) -> None:
        self._closed = False

    @property
    def closed(self) -> bool:
        """True after close()."""
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            msg = f"{type(self).__name__} is already closed"
            raise ResourceClosedError(msg)

    def close(self) -> None:
        """Release the object. Idempotent."""
        self._closed = True

    def __enter__(self) -> Self:
        self._check_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()


class ResourceReader(_Closable, Mapping[str, str]):
    """Read-only key -> value listing of one page and culture.

    Every access after close() raises ResourceClosedError.
    """

    __slots__ = ("_culture", "_entries")

    def __init__(self, entries: Mapping[str, str], culture: str) -> None:
        super().__init__()
        self._entries = dict(entries)
        self._culture = culture

    @property
    def culture(self) -> str:
        """Culture the listing was taken for."""
        return self._culture

    def __getitem__(self, key: str) -> str:
        self._check_open()
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        self._check_open()
        return iter(self._entries)

    def __len__(self) -> int:
        self._check_open()
        return len(self._entries)

    def close(self) -> None:
        super().close()
        self._entries = {}

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"entries={len(self._entries)}"
        return f"ResourceReader(culture={self._culture!r}, {state})"


class ResourceProvider(_Closable):
    """Ambient-culture aware access to one page's resources.

    Example:
        >>> provider = ResourceProvider(registry.get("Checkout"))
        >>> with ui_culture("fr-CA"):
        ...     provider.get_object("title")
        'Paiement'
        >>> provider.get_string("no-such-key", default="")
        ''
    """

    __slots__ = ("_resolver",)

    def __init__(self, resolver: ResourceResolver) -> None:
        super().__init__()
        self._resolver = resolver

    @property
    def resolver(self) -> ResourceResolver:
        """Resolver this provider reads through."""
        return self._resolver

    @staticmethod
    def _effective_culture(culture: str | Culture | None) -> Culture:
        if culture is None or culture == "":
            return current_ui_culture()
        return Culture.parse(culture)

    def get_object(
        self, key: ResourceKey, culture: str | Culture | None = None
    ) -> ResourceValue:
        """Resolve key, substituting the ambient UI culture when none is given.

        Raises:
            ResourceClosedError: If the provider was closed
            InvalidArgumentError: If key is empty or culture malformed
            ResourceNotFoundError: If no culture in the chain defines key
            AmbiguousResourceError: If the store holds duplicate rows
            StoreUnavailableError: Passed through from the store
        """
        self._check_open()
        return self._resolver.resolve(self._effective_culture(culture), key)

    def get_string(
        self,
        key: ResourceKey,
        culture: str | Culture | None = None,
        *,
        default: object = _MISSING,
    ) -> ResourceValue:
        """Like get_object(), with an explicit opt-in default for missing keys.

        Only ResourceNotFoundError is replaced by ``default``; integrity and
        store errors always propagate.

        Args:
            key: Resource key
            culture: Requested culture; None means the ambient UI culture
            default: Returned instead of raising ResourceNotFoundError.
                Must be a str when given.

        Raises:
            TypeError: If default is given and is not a str
            ResourceNotFoundError: If the key is missing and no default given
        """
        if default is not _MISSING and not isinstance(default, str):
            msg = f"default must be str, got {type(default).__name__}"
            raise TypeError(msg)
        try:
            return self.get_object(key, culture)
        except ResourceNotFoundError:
            if default is _MISSING:
                raise
            return default  # type: ignore[return-value]

    def resource_reader(self) -> ResourceReader:
        """Listing of every key defined for the default culture.

        Raises:
            ResourceClosedError: If the provider was closed
        """
        self._check_open()
        entries = self._resolver.resolve_all(None)
        return ResourceReader(entries, self._resolver.default_culture.name)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"ResourceProvider(page={self._resolver.page!r}, {state})"
