"""SQLite-backed ResourceStore.

Uses the standard library sqlite3 driver. The table deliberately carries
no uniqueness constraint on (page, culture, key): uniqueness is enforced
by save() and checked again by the resolver, which reports duplicate rows
instead of serving one of them.

A single connection is shared between threads and serialized by a lock.
Driver errors surface as StoreUnavailableError with the sqlite3 exception
chained as __cause__.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Self

from localepages.errors import StoreUnavailableError
from localepages.store.base import ResourceEntry
from localepages.types import CultureName, PageName, ResourceKey

if TYPE_CHECKING:
    from collections.abc import Generator, Iterable
    from os import PathLike

__all__ = ["SqliteResourceStore"]

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS resources (
    page TEXT NOT NULL,
    culture TEXT NOT NULL,
    resource_key TEXT NOT NULL,
    resource_value TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS ix_resources_natural_key
    ON resources (page, culture, resource_key);
"""

_COLUMNS = "page, culture, resource_key, resource_value"


class SqliteResourceStore:
    """ResourceStore over a SQLite database.

    Example:
        >>> with SqliteResourceStore(":memory:") as store:
        ...     store.create_schema()
        ...     store.save(ResourceEntry("page1", "en", "greeting", "Hello"))
        ...     [e.value for e in store.fetch_one("page1", "en", "greeting")]
        ['Hello']

    Attributes:
        database: Path or SQLite URI passed to sqlite3.connect
    """

    __slots__ = ("_connection", "_lock", "database")

    def __init__(self, database: str | PathLike[str], *, timeout: float = 5.0) -> None:
        """Open the database.

        Args:
            database: File path, or ":memory:" for a private in-memory database
            timeout: Seconds sqlite3 waits on a locked database file

        Raises:
            StoreUnavailableError: If the database cannot be opened
        """
        self.database = database
        self._lock = threading.Lock()
        try:
            self._connection: sqlite3.Connection | None = sqlite3.connect(
                database, timeout=timeout, check_same_thread=False
            )
        except sqlite3.Error as e:
            msg = f"Cannot open resource database {database!s}: {e}"
            raise StoreUnavailableError(msg) from e

    @contextmanager
    def _cursor(self, operation: str) -> Generator[sqlite3.Cursor]:
        """Serialize access to the connection and translate driver errors."""
        with self._lock:
            if self._connection is None:
                msg = f"Resource database {self.database!s} is closed ({operation})"
                raise StoreUnavailableError(msg)
            try:
                with self._connection:
                    yield self._connection.cursor()
            except sqlite3.Error as e:
                msg = f"Resource database {operation} failed: {e}"
                raise StoreUnavailableError(msg) from e

    def create_schema(self) -> None:
        """Create the resources table and index if they do not exist."""
        with self._cursor("create_schema") as cursor:
            cursor.executescript(_SCHEMA)
        logger.debug("Resource schema ready in %s", self.database)

    def add(self, entry: ResourceEntry) -> None:
        """Insert a row without checking for an existing natural key."""
        with self._cursor("add") as cursor:
            cursor.execute(
                f"INSERT INTO resources ({_COLUMNS}) VALUES (?, ?, ?, ?)",  # noqa: S608
                (entry.page, entry.culture, entry.key, entry.value),
            )

    @staticmethod
    def _upsert(cursor: sqlite3.Cursor, entry: ResourceEntry) -> None:
        cursor.execute(
            "DELETE FROM resources WHERE page = ? AND culture = ? AND resource_key = ?",
            entry.natural_key,
        )
        cursor.execute(
            f"INSERT INTO resources ({_COLUMNS}) VALUES (?, ?, ?, ?)",  # noqa: S608
            (entry.page, entry.culture, entry.key, entry.value),
        )

    def save(self, entry: ResourceEntry) -> None:
        """Insert or replace: afterwards exactly one row holds entry's natural key."""
        with self._cursor("save") as cursor:
            self._upsert(cursor, entry)

    def save_many(self, entries: Iterable[ResourceEntry]) -> int:
        """Save several entries in one transaction; returns the number saved.

        Either every entry is saved or, if any statement fails, none is.

        Raises:
            StoreUnavailableError: If the transaction fails; it is rolled back
        """
        count = 0
        with self._cursor("save_many") as cursor:
            for entry in entries:
                self._upsert(cursor, entry)
                count += 1
        if count:
            logger.debug("Saved %d resources to %s", count, self.database)
        return count

    def _select(self, operation: str, where: str, params: tuple[str, ...]) -> list[ResourceEntry]:
        query = f"SELECT {_COLUMNS} FROM resources {where} ORDER BY rowid"  # noqa: S608
        with self._cursor(operation) as cursor:
            rows = cursor.execute(query, params).fetchall()
        return [ResourceEntry(page, culture, key, value) for page, culture, key, value in rows]

    def fetch_one(
        self, page: PageName, culture: CultureName, key: ResourceKey
    ) -> list[ResourceEntry]:
        return self._select(
            "fetch_one",
            "WHERE page = ? AND culture = ? AND resource_key = ?",
            (page, culture, key),
        )

    def fetch_all_for_culture(self, page: PageName, culture: CultureName) -> list[ResourceEntry]:
        return self._select(
            "fetch_all_for_culture", "WHERE page = ? AND culture = ?", (page, culture)
        )

    def fetch_all_for_page(self, page: PageName) -> list[ResourceEntry]:
        return self._select("fetch_all_for_page", "WHERE page = ?", (page,))

    def fetch_all(self) -> list[ResourceEntry]:
        """Every row in the database, in insertion order."""
        return self._select("fetch_all", "", ())

    def close(self) -> None:
        """Close the connection. Later queries raise StoreUnavailableError."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SqliteResourceStore(database={self.database!r})"
