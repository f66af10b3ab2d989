"""Performance benchmarks for localepages.

Benchmarks use pytest-benchmark to track the cost of cache hits and
fallback walks, the two paths every page render goes through.

Python 3.13+.
"""

from __future__ import annotations

__all__: list[str] = []
