r"""Shared test helpers for retry policy and loop tests."""

from __future__ import annotations

__all__ = ["FakeClock", "FixedRandom"]


class FakeClock:
    """Manually advanced clock returning float seconds."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FixedRandom:
    """Random source replaying a fixed sequence of values."""

    def __init__(self, *values: float) -> None:
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value
