"""Culture identifiers and the fallback hierarchy.

A culture is a locale name with a parent: a specific culture ("fr-CA")
falls back to its neutral culture ("fr"), a neutral culture falls back to
the configured default, and the default has no parent.

Names are normalized once at the boundary (Culture.parse) and the
canonical hyphenated form is used for cache keys and store lookups.
Babel performs the parsing; conversion to Babel's underscore form happens
only when a babel.Locale is needed.

Python 3.13+.
"""

from __future__ import annotations

import functools
import locale as locale_module
import os
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError, parse_locale

from localepages.constants import CULTURE_SEPARATOR, SYSTEM_FALLBACK_CULTURE
from localepages.errors import InvalidArgumentError

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "Culture",
    "current_ui_culture",
    "get_babel_locale",
    "get_system_culture",
    "normalize_culture_name",
    "ui_culture",
]


@functools.lru_cache(maxsize=256)
def normalize_culture_name(name: str) -> str:
    """Return the canonical hyphenated form of a culture name.

    Accepts BCP-47 ("fr-CA") and POSIX ("fr_CA") separators. POSIX encoding
    suffixes and modifiers ("fr_FR.UTF-8", "sr@latin") are rejected.
    Language is lower-cased, script title-cased and territory upper-cased
    by Babel.

    Args:
        name: Culture name in BCP-47 or POSIX form

    Returns:
        Canonical culture name

    Raises:
        InvalidArgumentError: If the name is empty, padded with whitespace,
            carries an encoding or modifier, or is not a well-formed locale
            identifier

    Example:
        >>> normalize_culture_name("fr_ca")
        'fr-CA'
        >>> normalize_culture_name("zh-hans-cn")
        'zh-Hans-CN'
    """
    if not name:
        msg = "Culture name cannot be empty"
        raise InvalidArgumentError(msg)
    if name.strip() != name:
        msg = f"Culture name contains leading/trailing whitespace: {name!r}"
        raise InvalidArgumentError(msg, culture=name)
    # parse_locale strips a POSIX encoding and @modifier, which would fold
    # "sr@latin" into "sr"
    if "." in name or "@" in name:
        msg = f"Culture name must not carry an encoding or modifier: {name!r}"
        raise InvalidArgumentError(msg, culture=name)

    try:
        parts = parse_locale(name.replace("-", "_"))
    except ValueError as e:
        msg = f"Malformed culture name {name!r}: {e}"
        raise InvalidArgumentError(msg, culture=name) from e

    language, territory, script, variant = parts[:4]
    return CULTURE_SEPARATOR.join(
        part for part in (language, script, territory, variant) if part
    )


@functools.lru_cache(maxsize=128)
def get_babel_locale(culture_name: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        culture_name: Culture name (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If CLDR has no data for the locale
        ValueError: If the name is malformed
    """
    # Lazy import: Babel loads CLDR data on Locale construction
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(culture_name.replace("-", "_"))


@dataclass(frozen=True, slots=True)
class Culture:
    """Normalized culture identifier.

    The name is normalized at construction, so Culture("fr_ca") and
    Culture.parse("fr-CA") are equal; equality and hashing are by
    canonical name.

    Example:
        >>> default = Culture.parse("en")
        >>> [c.name for c in Culture.parse("fr_ca").fallback_chain(default)]
        ['fr-CA', 'fr', 'en']

    Attributes:
        name: Canonical hyphenated culture name
    """

    name: str

    def __post_init__(self) -> None:
        """Normalize name to its canonical form.

        Raises:
            InvalidArgumentError: If name is not a well-formed culture name
        """
        if not isinstance(self.name, str):
            msg = f"Culture must be str or Culture, got {type(self.name).__name__}"
            raise InvalidArgumentError(msg)
        object.__setattr__(self, "name", normalize_culture_name(self.name))

    @classmethod
    def parse(cls, value: str | Culture) -> Culture:
        """Build a Culture from a name, or return an existing Culture unchanged.

        Raises:
            InvalidArgumentError: If value is not a well-formed culture name
        """
        if isinstance(value, Culture):
            return value
        return cls(value)

    @property
    def subtags(self) -> tuple[str, ...]:
        """Name split into subtags ("zh-Hans-CN" -> ("zh", "Hans", "CN"))."""
        return tuple(self.name.split(CULTURE_SEPARATOR))

    @property
    def language(self) -> str:
        """Language subtag."""
        return self.subtags[0]

    @property
    def is_neutral(self) -> bool:
        """True for a language-only culture such as "fr"."""
        return len(self.subtags) == 1

    def parent(self, default: Culture) -> Culture | None:
        """Return the next culture to try, or None at the default culture.

        A specific culture drops its last subtag. A neutral culture, or any
        culture without a parent, falls back to ``default``.
        """
        if self == default:
            return None
        subtags = self.subtags
        if len(subtags) > 1:
            return Culture(CULTURE_SEPARATOR.join(subtags[:-1]))
        return default

    def fallback_chain(self, default: Culture) -> tuple[Culture, ...]:
        """Cultures tried for a lookup, most specific first, ending at default."""
        chain: list[Culture] = []
        current: Culture | None = self
        while current is not None:
            chain.append(current)
            current = current.parent(default)
        return tuple(chain)

    def to_babel(self) -> Locale:
        """Return the matching babel.Locale.

        Raises:
            babel.core.UnknownLocaleError: If CLDR has no data for the culture
        """
        return get_babel_locale(self.name)

    @property
    def display_name(self) -> str:
        """Human-readable culture name from CLDR, or the raw name if unknown."""
        try:
            display = self.to_babel().display_name
        except UnknownLocaleError:
            return self.name
        return display or self.name

    def __str__(self) -> str:
        return self.name


# Ambient UI culture for the current thread or task. The layer that calls
# resolve() substitutes it for an unspecified culture.
_ui_culture: ContextVar[Culture | None] = ContextVar("localepages_ui_culture", default=None)


@contextmanager
def ui_culture(culture: str | Culture) -> Generator[Culture]:
    """Set the ambient UI culture for the duration of the block.

    Scoped through contextvars, so concurrent threads and asyncio tasks
    each see their own value.

    Example:
        >>> with ui_culture("fr-CA"):
        ...     current_ui_culture().name
        'fr-CA'
    """
    parsed = Culture.parse(culture)
    token = _ui_culture.set(parsed)
    try:
        yield parsed
    finally:
        _ui_culture.reset(token)


def current_ui_culture() -> Culture:
    """Return the ambient UI culture.

    Detection order:
    1. Culture set with ui_culture() in the current context
    2. System locale (get_system_culture)
    """
    culture = _ui_culture.get()
    if culture is not None:
        return culture
    return Culture.parse(get_system_culture())


def get_system_culture(*, raise_on_failure: bool = False) -> str:
    """Detect the system culture from the OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out the "C" and "POSIX" pseudo-locales and strips encoding
    suffixes ("de_DE.UTF-8" -> "de-DE").

    Args:
        raise_on_failure: If True, raise RuntimeError when no culture can be
            determined. If False (default), return SYSTEM_FALLBACK_CULTURE.

    Returns:
        Canonical culture name

    Raises:
        RuntimeError: If raise_on_failure is True and no culture is found.
    """
    candidates: list[str] = []
    try:
        system_locale, _ = locale_module.getlocale()
    except (ValueError, AttributeError):
        system_locale = None
    if system_locale:
        candidates.append(system_locale)
    candidates.extend(os.environ.get(var, "") for var in ("LC_ALL", "LC_MESSAGES", "LANG"))

    for candidate in candidates:
        code = candidate.split(".")[0]
        if not code or code in ("C", "POSIX"):
            continue
        try:
            return normalize_culture_name(code)
        except InvalidArgumentError:
            continue

    if raise_on_failure:
        msg = (
            "Could not determine system culture. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return SYSTEM_FALLBACK_CULTURE
