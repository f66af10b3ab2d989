"""Resolver configuration.

One frozen dataclass holds every tunable of a ResourceResolver so that a
ResolverRegistry can hand the same settings to each page it creates.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from localepages.constants import DEFAULT_CULTURE, MAX_FALLBACK_DEPTH
from localepages.culture import Culture
from localepages.enums import CachePolicy, DuplicatePolicy

__all__ = ["ResolverConfig"]


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Immutable configuration for ResourceResolver.

    Constructing ``ResolverConfig()`` with no arguments produces a usable
    configuration.

    Attributes:
        default_culture: Culture every fallback chain ends at (default: "en").
            Normalized at construction, so "en_us" is stored as "en-US".
        cache_policy: Lifetime of cached values (default: NEVER_EXPIRE).
            The never-expire cache is correct only while the store does not
            change during the resolver's lifetime.
        duplicate_policy: Handling of duplicate keys in resolve_all()
            (default: LAST_WINS).
        max_fallback_depth: Maximum cultures visited by one lookup
            (default: 8). Exceeding it raises FallbackDepthExceededError.

    Example:
        >>> config = ResolverConfig(default_culture="en_us", duplicate_policy=DuplicatePolicy.REJECT)
        >>> config.default_culture
        'en-US'
    """

    default_culture: str = DEFAULT_CULTURE
    cache_policy: CachePolicy = CachePolicy.NEVER_EXPIRE
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS
    max_fallback_depth: int = MAX_FALLBACK_DEPTH

    def __post_init__(self) -> None:
        """Validate and normalize configuration values at construction time.

        Raises:
            InvalidArgumentError: If default_culture is malformed.
            ValueError: If max_fallback_depth is not positive or a policy
                value is unknown.
        """
        object.__setattr__(
            self, "default_culture", Culture.parse(self.default_culture).name
        )
        object.__setattr__(self, "cache_policy", CachePolicy(self.cache_policy))
        object.__setattr__(self, "duplicate_policy", DuplicatePolicy(self.duplicate_policy))
        if self.max_fallback_depth <= 0:
            msg = "max_fallback_depth must be positive"
            raise ValueError(msg)

    @property
    def default(self) -> Culture:
        """Default culture as a Culture instance."""
        return Culture(self.default_culture)

    @property
    def cache_enabled(self) -> bool:
        """True unless the cache policy is DISABLED."""
        return self.cache_policy is not CachePolicy.DISABLED
