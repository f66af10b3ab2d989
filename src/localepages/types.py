"""Type aliases for the resource domain.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "CultureName",
    "PageName",
    "ResourceKey",
    "ResourceValue",
]

type PageName = str
"""Resource page namespace (e.g., 'Checkout.aspx', 'GlobalStrings')."""

type CultureName = str
"""Canonical culture name (e.g., 'en', 'fr-CA', 'zh-Hans-CN')."""

type ResourceKey = str
"""Key of one localized string inside a page (e.g., 'greeting')."""

type ResourceValue = str
"""Localized text. May be empty, never None."""
