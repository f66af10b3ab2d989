"""localepages - localized text resources with culture fallback.

Resolves localized strings by (page, culture, key) against a backing
store, walking the culture hierarchy (fr-CA -> fr -> default) when a
culture has no value, and caches resolved values per page in a
concurrent read-through cache.

Public API:
    ResourceResolver - Fallback lookup and cache for one resource page
    ResolverRegistry - One resolver per page, caller-managed lifetime
    ResourceProvider - Ambient-culture facade with opt-in defaults
    ResolverConfig - Immutable resolver configuration
    Culture - Normalized culture identifier with parent chain
    ResourceEntry - Persisted (page, culture, key, value) record
    InMemoryResourceStore, SqliteResourceStore - Reference stores

Exceptions:
    LocalizationError - Base class of lookup errors
    InvalidArgumentError - Empty key, missing or malformed culture
    ResourceNotFoundError - No culture in the chain defines the key
    StoreUnavailableError - Backing store failure (passed through)
    AmbiguousResourceError - Duplicate rows for one natural key

Submodules:
    localepages.culture - Culture parsing and ambient UI culture
    localepages.cache - CultureCache
    localepages.integrity - Data integrity error family
    localepages.store - Store protocol and implementations
"""

from .config import ResolverConfig
from .culture import Culture, current_ui_culture, ui_culture
from .enums import CachePolicy, DuplicatePolicy
from .errors import (
    InvalidArgumentError,
    LocalizationError,
    ResourceClosedError,
    ResourceNotFoundError,
    StoreUnavailableError,
)
from .integrity import AmbiguousResourceError, DataIntegrityError, DuplicateResourceError
from .provider import ResourceProvider, ResourceReader
from .registry import ResolverRegistry
from .resolver import FallbackInfo, ResourceResolver
from .store import InMemoryResourceStore, ResourceEntry, ResourceStore, SqliteResourceStore

# Version information - populated from package metadata
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("localepages")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AmbiguousResourceError",
    "CachePolicy",
    "Culture",
    "DataIntegrityError",
    "DuplicatePolicy",
    "DuplicateResourceError",
    "FallbackInfo",
    "InMemoryResourceStore",
    "InvalidArgumentError",
    "LocalizationError",
    "ResolverConfig",
    "ResolverRegistry",
    "ResourceClosedError",
    "ResourceEntry",
    "ResourceNotFoundError",
    "ResourceProvider",
    "ResourceReader",
    "ResourceResolver",
    "ResourceStore",
    "SqliteResourceStore",
    "StoreUnavailableError",
    "__version__",
    "current_ui_culture",
    "ui_culture",
]
