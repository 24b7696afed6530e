r"""Thread-safe source of randomness for jittered policies.

This module provides a ``random.Random`` wrapper whose draws are
serialized behind a lock, and a process-wide instance used by default
when a jitter policy is created without an explicit source.
"""

from __future__ import annotations

__all__ = ["GLOBAL_RANDOM", "LockedRandom", "RandomSource"]

import random
import threading
import time
from typing import Protocol


class RandomSource(Protocol):
    """Anything that produces uniform floats in [0, 1)."""

    def random(self) -> float: ...


class LockedRandom:
    """Uniform random generator that is safe for concurrent use.

    A single instance can be shared by any number of threads; each draw
    holds an internal lock so concurrent calls never corrupt the
    generator state.

    Args:
        seed: Optional seed for the underlying generator. If None, the
            generator is seeded from the current time.

    Example:
        ```pycon
        >>> from aretry.utils.rand import LockedRandom
        >>> rand = LockedRandom(seed=42)
        >>> 0.0 <= rand.random() < 1.0
        True

        ```
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = time.time_ns()
        self._rand = random.Random(seed)  # noqa: S311
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def random(self) -> float:
        """Return the next uniform float in [0, 1)."""
        with self._lock:
            return self._rand.random()

    def seed(self, seed: int) -> None:
        """Reseed the underlying generator."""
        with self._lock:
            self._rand.seed(seed)


# Process-wide source shared by jitter policies that are not given one.
GLOBAL_RANDOM = LockedRandom()
