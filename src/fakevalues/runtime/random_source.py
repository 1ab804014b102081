"""Injectable source of uniformly distributed integers.

Every random choice the engine makes (list alternative, digit, letter,
character class member, repetition count) goes through ``next_int`` so that
tests can substitute a fixed-sequence double.

Thread Safety:
    DefaultRandomSource wraps a private ``random.Random`` instance. Callers
    sharing one source across threads get valid values but no reproducible
    ordering; use one source per thread when determinism matters.

Python 3.13+.
"""

from __future__ import annotations

import random
from typing import Protocol, runtime_checkable

__all__ = ["DefaultRandomSource", "RandomSource"]


@runtime_checkable
class RandomSource(Protocol):
    """Protocol for uniform integer generators.

    Example:
        >>> class AlwaysZero:
        ...     def next_int(self, bound: int) -> int:
        ...         return 0
        >>> isinstance(AlwaysZero(), RandomSource)
        True
    """

    def next_int(self, bound: int) -> int:
        """Return an integer in ``[0, bound)``."""
        ...  # pragma: no cover  # Protocol stub - not executable


class DefaultRandomSource:
    """RandomSource backed by the Mersenne Twister from the standard library.

    Args:
        seed: Optional seed for reproducible sequences
    """

    __slots__ = ("_random", "_seed")

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._random = random.Random(seed)

    def next_int(self, bound: int) -> int:
        """Return an integer in ``[0, bound)``.

        Raises:
            ValueError: If bound is not positive
        """
        if bound <= 0:
            msg = f"bound must be positive, got {bound}"
            raise ValueError(msg)
        return self._random.randrange(bound)

    def __repr__(self) -> str:
        return f"DefaultRandomSource(seed={self._seed!r})"
