"""Tests for RWLock readers-writer lock.

Tests verify:
- Multiple concurrent readers
- Exclusive writer access
- Writer preference (waiting writers block new readers)
- Rejection of nested write and write-to-read acquisition
- Monitoring properties
"""

from __future__ import annotations

import threading
import time

import pytest

from localepages.rwlock import RWLock


class TestRWLockBasics:
    def test_single_reader(self) -> None:
        lock = RWLock()
        with lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_single_writer(self) -> None:
        lock = RWLock()
        with lock.write():
            assert lock.writer_active
        assert not lock.writer_active

    def test_readers_share_the_lock(self) -> None:
        lock = RWLock()
        reader_count = 5
        all_inside = threading.Barrier(reader_count, timeout=5)
        peak: list[int] = []

        def reader() -> None:
            with lock.read():
                all_inside.wait()
                peak.append(lock.reader_count)

        threads = [threading.Thread(target=reader) for _ in range(reader_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert max(peak) == reader_count

    def test_writer_excludes_readers(self) -> None:
        lock = RWLock()
        writer_inside = threading.Event()
        order: list[str] = []

        def writer() -> None:
            with lock.write():
                writer_inside.set()
                time.sleep(0.05)
                order.append("writer-done")

        def reader() -> None:
            writer_inside.wait(timeout=5)
            with lock.read():
                order.append("reader")

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert order == ["writer-done", "reader"]

    def test_writer_waits_for_readers(self) -> None:
        lock = RWLock()
        reader_inside = threading.Event()
        order: list[str] = []

        def reader() -> None:
            with lock.read():
                reader_inside.set()
                time.sleep(0.05)
                order.append("reader-done")

        def writer() -> None:
            reader_inside.wait(timeout=5)
            with lock.write():
                order.append("writer")

        threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert order == ["reader-done", "writer"]


class TestWriterPreference:
    def test_waiting_writer_blocks_new_readers(self) -> None:
        lock = RWLock()
        first_reader_inside = threading.Event()
        release_first_reader = threading.Event()
        order: list[str] = []

        def first_reader() -> None:
            with lock.read():
                first_reader_inside.set()
                release_first_reader.wait(timeout=5)

        def writer() -> None:
            with lock.write():
                order.append("writer")

        def late_reader() -> None:
            with lock.read():
                order.append("late-reader")

        t_first = threading.Thread(target=first_reader)
        t_first.start()
        first_reader_inside.wait(timeout=5)

        t_writer = threading.Thread(target=writer)
        t_writer.start()
        deadline = time.monotonic() + 5
        while lock.writers_waiting == 0 and time.monotonic() < deadline:
            time.sleep(0.001)
        assert lock.writers_waiting == 1

        t_late = threading.Thread(target=late_reader)
        t_late.start()
        time.sleep(0.02)
        release_first_reader.set()

        for thread in (t_first, t_writer, t_late):
            thread.join()

        assert order == ["writer", "late-reader"]


class TestRWLockMisuse:
    def test_nested_write_rejected(self) -> None:
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="already holding write lock"):
            with lock.write():
                pass
        assert not lock.writer_active

    def test_read_inside_write_rejected(self) -> None:
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="while holding write lock"):
            with lock.read():
                pass

    def test_release_unheld_read(self) -> None:
        lock = RWLock()
        with pytest.raises(RuntimeError):
            lock._release_read()

    def test_release_unheld_write(self) -> None:
        lock = RWLock()
        with pytest.raises(RuntimeError):
            lock._release_write()

    def test_lock_released_on_exception(self) -> None:
        lock = RWLock()
        with pytest.raises(KeyError), lock.write():
            raise KeyError("boom")

        assert not lock.writer_active
        with lock.read():
            assert lock.reader_count == 1
