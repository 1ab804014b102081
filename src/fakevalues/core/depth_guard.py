"""Unified depth limiting for recursion protection.

Provides reusable depth tracking to prevent stack overflow from:
- Cyclic directive references in locale data
- Deep directive nesting inside directive arguments
- Operations that re-enter the service while it is expanding

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from fakevalues.constants import MAX_DEPTH
from fakevalues.diagnostics import ErrorTemplate, ExpansionDepthError

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage in expansion:
        guard = DepthGuard()
        with guard:
            # Recursive operation
            result = self._expand(nested_template, ...)

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol. The current_depth field is
        incremented/decremented on __enter__/__exit__.

    Thread Safety:
        Uses explicit instance state, fully reentrant.
        Each call stack maintains its own DepthGuard instance.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Validates depth limit BEFORE incrementing. __exit__ is not called when
        __enter__ raises, so incrementing first would leave current_depth
        permanently elevated.
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
        """Explicitly check depth and raise if exceeded.

        Raises:
            ExpansionDepthError: If depth limit exceeded
        """
        if self.current_depth >= self.max_depth:
            raise ExpansionDepthError(ErrorTemplate.expansion_depth_exceeded(self.max_depth))


def depth_clamp(
    requested_depth: int, reserve_frames: int = 50, frames_per_level: int = 1
) -> int:
    """Clamp requested depth against Python recursion limit.

    A depth level may cost several Python frames (expanding one data key
    passes through the template walk, directive dispatch and key lookup),
    so the usable depth is the free stack divided by the per-level cost.
    Logs a warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)
        frames_per_level: Stack frames consumed by one depth level (default: 1)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(200)
        >>> depth_clamp(100)
        100
        >>> depth_clamp(500)
        150
        >>> depth_clamp(100, frames_per_level=6)
        25
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // frames_per_level)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
