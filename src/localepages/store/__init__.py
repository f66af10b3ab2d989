"""Backing stores for localized resources.

Submodules:
    base   - ResourceEntry record and the ResourceStore protocol
    memory - InMemoryResourceStore (fixtures, tests, small deployments)
    sqlite - SqliteResourceStore (stdlib sqlite3)

Python 3.13+.
"""

from localepages.store.base import ResourceEntry, ResourceStore
from localepages.store.memory import InMemoryResourceStore
from localepages.store.sqlite import SqliteResourceStore

__all__ = [
    "InMemoryResourceStore",
    "ResourceEntry",
    "ResourceStore",
    "SqliteResourceStore",
]
