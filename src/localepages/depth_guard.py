"""Depth limiting for the culture fallback walk.

The walk recurses once per culture level. DepthGuard turns a walk that
fails to terminate into a FallbackDepthExceededError instead of a
RecursionError deep inside the store.

Thread-safe: uses explicit state, one guard per resolve() call.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field

from localepages.constants import MAX_FALLBACK_DEPTH
from localepages.integrity import FallbackDepthExceededError, IntegrityContext

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage:
        guard = DepthGuard(max_depth=config.max_fallback_depth)
        with guard:
            value = self._walk(parent, key, guard)

    Mutability Note:
        Intentionally mutable; current_depth is incremented on __enter__ and
        decremented on __exit__.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_FALLBACK_DEPTH)
        current_depth: Current recursion depth
        operation: Operation name reported in the error context
    """

    max_depth: int = MAX_FALLBACK_DEPTH
    operation: str = "resolve"
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Checks before incrementing: __exit__ does not run when __enter__
        raises, so incrementing first would leave the guard permanently
        elevated.
        """
        self.check()
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """Check if depth limit has been reached."""
        return self.current_depth >= self.max_depth

    def check(self) -> None:
        """Raise if the depth limit has been reached.

        Raises:
            FallbackDepthExceededError: If depth limit reached
        """
        if self.current_depth >= self.max_depth:
            context = IntegrityContext(
                component="resolver",
                operation=self.operation,
                expected=f"<= {self.max_depth} cultures",
                actual=f"> {self.current_depth} cultures",
                timestamp=time.monotonic(),
            )
            msg = f"Culture fallback exceeded maximum depth of {self.max_depth}"
            raise FallbackDepthExceededError(msg, context, max_depth=self.max_depth)


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary
    """
    max_safe_depth = sys.getrecursionlimit() - reserve_frames
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
