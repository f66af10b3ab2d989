"""Readers-writer lock for the resolver cache and registry.

Allows any number of concurrent readers or one exclusive writer. Writers
waiting for the lock block new readers so that a steady stream of cache
hits cannot starve a bucket insert.

The lock is not reentrant in either mode. Cache and registry code never
nests acquisitions of the same lock: the bucket directory lock is released
before a bucket lock is taken.

Python 3.13+.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass  # shared with other readers
        >>> with lock.write():
        ...     pass  # exclusive
    """

    __slots__ = ("_active_readers", "_active_writer", "_condition", "_waiting_writers")

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._active_readers: int = 0
        # Thread ID of the writer, used to reject nested acquisition
        self._active_writer: int | None = None
        self._waiting_writers: int = 0

    @contextmanager
    def read(self) -> Generator[None]:
        """Acquire the lock in shared mode for the duration of the block.

        Raises:
            RuntimeError: If the calling thread holds the write lock.
        """
        self._acquire_read()
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self) -> Generator[None]:
        """Acquire the lock in exclusive mode for the duration of the block.

        Raises:
            RuntimeError: If the calling thread already holds the write lock.
        """
        self._acquire_write()
        try:
            yield
        finally:
            self._release_write()

    def _acquire_read(self) -> None:
        with self._condition:
            if self._active_writer == threading.get_ident():
                msg = "Cannot acquire read lock while holding write lock"
                raise RuntimeError(msg)
            while self._active_writer is not None or self._waiting_writers > 0:
                self._condition.wait()
            self._active_readers += 1

    def _release_read(self) -> None:
        with self._condition:
            if self._active_readers == 0:
                msg = "Read lock released more times than acquired"
                raise RuntimeError(msg)
            self._active_readers -= 1
            if self._active_readers == 0:
                self._condition.notify_all()

    def _acquire_write(self) -> None:
        current_thread_id = threading.get_ident()
        with self._condition:
            if self._active_writer == current_thread_id:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)
            self._waiting_writers += 1
            try:
                while self._active_readers > 0 or self._active_writer is not None:
                    self._condition.wait()
                self._active_writer = current_thread_id
            finally:
                # Readers spin on _waiting_writers; wake them if this writer gave up
                self._waiting_writers -= 1
                self._condition.notify_all()

    def _release_write(self) -> None:
        with self._condition:
            if self._active_writer != threading.get_ident():
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._active_writer = None
            # Wakes blocked readers and the next writer alike
            self._condition.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of readers currently holding the lock."""
        with self._condition:
            return self._active_readers

    @property
    def writer_active(self) -> bool:
        """True if any thread currently holds the write lock."""
        with self._condition:
            return self._active_writer is not None

    @property
    def writers_waiting(self) -> int:
        """Number of threads blocked waiting for the write lock."""
        with self._condition:
            return self._waiting_writers
