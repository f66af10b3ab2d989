"""Shared constants for localepages.

Placing constants here avoids circular imports between the culture,
cache and resolver modules and gives one place to tune them.

Constants are grouped by domain:
- Culture defaults: the culture every fallback chain terminates at
- Depth limits: guard against a fallback walk that fails to terminate

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Culture defaults
    "DEFAULT_CULTURE",
    "SYSTEM_FALLBACK_CULTURE",
    "CULTURE_SEPARATOR",
    # Depth limits
    "MAX_FALLBACK_DEPTH",
]

# ============================================================================
# CULTURE DEFAULTS
# ============================================================================

# Culture at which every fallback walk terminates unless configured otherwise.
DEFAULT_CULTURE: str = "en"

# Returned by get_system_culture() when the environment names no locale.
SYSTEM_FALLBACK_CULTURE: str = "en-US"

# Canonical culture names join subtags with a hyphen ("fr-CA", "zh-Hans-CN").
# Babel works with underscores; conversion happens at the Babel boundary only.
CULTURE_SEPARATOR: str = "-"

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum number of cultures visited by one fallback walk.
# A real chain is language-script-territory -> language-script -> language
# -> default, so legitimate walks stay at 4 or below. Reaching the limit means
# the parent computation stopped decreasing specificity.
MAX_FALLBACK_DEPTH: int = 8
