"""Two-level concurrent cache for resolved resource values.

Structure:
    culture name -> (resource key -> value)

Each culture owns a bucket with its own readers-writer lock. An insert
locks only its own bucket, so populating "fr-CA" never waits on "de".

The bucket directory is copy-on-write: a new culture publishes a fresh
directory dict under a creation mutex, and readers look buckets up in
whichever directory is current without taking any lock. A pending bucket
creation therefore never delays lookups in existing cultures.

Hit and miss counters are kept per thread and summed on demand, so the
read path shares no mutex between threads.

Lifetime:
    Entries are never invalidated or evicted. The cache grows monotonically
    with the number of distinct (culture, key) pairs resolved and is
    discarded with its resolver. Two concurrent misses for the same pair
    may both insert; the last write wins, which is harmless because both
    values come from the same immutable store.

Python 3.13+.
"""

from __future__ import annotations

import threading

from localepages.rwlock import RWLock

__all__ = ["CultureCache"]


class _Bucket:
    """Key -> value map for one culture, guarded by its own lock."""

    __slots__ = ("entries", "lock")

    def __init__(self) -> None:
        self.entries: dict[str, str] = {}
        self.lock = RWLock()


class _ThreadCounts:
    """Hit/miss counters written only by their owning thread."""

    __slots__ = ("hits", "misses")

    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0


class _LookupCounter:
    """Per-thread hit/miss counters, summed when read.

    Each thread registers its counters once, on its first lookup. Counters
    of finished threads stay registered so totals never go backwards.
    """

    __slots__ = ("_local", "_register_lock", "_registered")

    def __init__(self) -> None:
        self._local = threading.local()
        self._register_lock = threading.Lock()
        self._registered: list[_ThreadCounts] = []

    def _counts(self) -> _ThreadCounts:
        counts: _ThreadCounts | None = getattr(self._local, "counts", None)
        if counts is None:
            counts = _ThreadCounts()
            with self._register_lock:
                self._registered.append(counts)
            self._local.counts = counts
        return counts

    def record(self, *, hit: bool) -> None:
        counts = self._counts()
        if hit:
            counts.hits += 1
        else:
            counts.misses += 1

    def totals(self) -> tuple[int, int]:
        """(hits, misses) across all threads."""
        with self._register_lock:
            registered = list(self._registered)
        return (
            sum(counts.hits for counts in registered),
            sum(counts.misses for counts in registered),
        )


class CultureCache:
    """Read-through, never-expiring cache keyed by (culture, key).

    Returns None on a miss; cached values are always str.

    Attributes:
        enabled: False turns every get() into a miss and put() into a no-op
        hits: Number of lookups that found a value
        misses: Number of lookups that found nothing
    """

    __slots__ = ("_buckets", "_create_lock", "_enabled", "_lookups")

    def __init__(self, *, enabled: bool = True) -> None:
        """Initialize an empty cache.

        Args:
            enabled: Whether values are retained (default: True)
        """
        self._enabled = enabled
        # Replaced wholesale, never mutated after publication
        self._buckets: dict[str, _Bucket] = {}
        self._create_lock = threading.Lock()
        self._lookups = _LookupCounter()

    @property
    def enabled(self) -> bool:
        """Whether values are retained."""
        return self._enabled

    def _find_bucket(self, culture: str) -> _Bucket | None:
        return self._buckets.get(culture)

    def _get_or_create_bucket(self, culture: str) -> _Bucket:
        bucket = self._find_bucket(culture)
        if bucket is not None:
            return bucket
        with self._create_lock:
            # Double-checked: another thread may have published the bucket
            # while this one waited for the creation mutex.
            bucket = self._buckets.get(culture)
            if bucket is None:
                bucket = _Bucket()
                self._buckets = {**self._buckets, culture: bucket}
            return bucket

    def get(self, culture: str, key: str) -> str | None:
        """Return the cached value for (culture, key), or None on a miss.

        Thread-safe. Concurrent get() calls never block each other, and a
        get() waits only on a put() into the same culture.
        """
        value: str | None = None
        if self._enabled:
            bucket = self._find_bucket(culture)
            if bucket is not None:
                with bucket.lock.read():
                    value = bucket.entries.get(key)

        self._lookups.record(hit=value is not None)
        return value

    def put(self, culture: str, key: str, value: str) -> None:
        """Store value under (culture, key). Last write wins.

        Thread-safe. Only the culture's own bucket is locked exclusively.
        """
        if not self._enabled:
            return
        bucket = self._get_or_create_bucket(culture)
        with bucket.lock.write():
            bucket.entries[key] = value

    def __contains__(self, item: tuple[str, str]) -> bool:
        """Check for (culture, key) without touching hit/miss counters."""
        culture, key = item
        bucket = self._find_bucket(culture)
        if bucket is None:
            return False
        with bucket.lock.read():
            return key in bucket.entries

    def cultures(self) -> tuple[str, ...]:
        """Cultures that own a bucket, sorted."""
        return tuple(sorted(self._buckets))

    def snapshot(self, culture: str) -> dict[str, str]:
        """Copy of one culture's bucket (empty dict if it has none)."""
        bucket = self._find_bucket(culture)
        if bucket is None:
            return {}
        with bucket.lock.read():
            return dict(bucket.entries)

    def __len__(self) -> int:
        """Total number of cached entries across all cultures."""
        total = 0
        for bucket in self._buckets.values():
            with bucket.lock.read():
                total += len(bucket.entries)
        return total

    def get_stats(self) -> dict[str, int | float | bool]:
        """Get cache statistics.

        Thread-safe point-in-time snapshot.

        Returns:
            Dict with keys:
            - enabled (bool): Whether values are retained
            - cultures (int): Number of culture buckets
            - size (int): Total cached entries
            - hits (int): Lookups that found a value
            - misses (int): Lookups that found nothing, one per culture
              level visited by a fallback walk
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
        """
        size = len(self)
        bucket_count = len(self.cultures())
        hits, misses = self._lookups.totals()
        total = hits + misses
        hit_rate = (hits / total * 100) if total > 0 else 0.0
        return {
            "enabled": self._enabled,
            "cultures": bucket_count,
            "size": size,
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hit_rate, 2),
        }

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        return self._lookups.totals()[0]

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        return self._lookups.totals()[1]

    def __repr__(self) -> str:
        return f"CultureCache(cultures={len(self.cultures())}, size={len(self)})"
