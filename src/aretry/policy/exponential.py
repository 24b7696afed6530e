r"""Exponential backoff policy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff", "default_exponential_backoff", "exponential_backoff"]

import math

from aretry.core.config import (
    DEFAULT_GROWTH_FACTOR,
    DEFAULT_MAX_BACKOFF,
    DEFAULT_MIN_BACKOFF,
)
from aretry.policy.base import BasePolicy, Decision


class ExponentialBackoff(BasePolicy):
    """Exponential backoff policy.

    Calculates the backoff as: min_backoff * (factor ** (attempt - 1)),
    capped at max_backoff. The first failure waits exactly
    ``min_backoff``.

    Out-of-range arguments fall back to the defaults instead of raising:
    a non-positive ``min_backoff`` becomes 0.15s, a non-positive
    ``max_backoff`` becomes 15s and a ``factor`` that is not greater
    than 1 becomes 1.5.

    Args:
        min_backoff: The backoff in seconds for the first attempt.
        max_backoff: The maximum backoff in seconds.
        factor: The growth factor applied for each successive attempt.

    Example:
        ```pycon
        >>> from aretry.policy import ExponentialBackoff
        >>> policy = ExponentialBackoff(min_backoff=1.0, max_backoff=5.0, factor=2.0)
        >>> policy.next(None, start=0.0, now=0.0, attempt=1)
        Decision(backoff=1.0, retry=True)
        >>> policy.next(None, start=0.0, now=0.0, attempt=3)
        Decision(backoff=4.0, retry=True)
        >>> policy.next(None, start=0.0, now=0.0, attempt=10)  # capped
        Decision(backoff=5.0, retry=True)

        ```
    """

    def __init__(
        self,
        min_backoff: float = DEFAULT_MIN_BACKOFF,
        max_backoff: float = DEFAULT_MAX_BACKOFF,
        factor: float = DEFAULT_GROWTH_FACTOR,
    ) -> None:
        if not min_backoff > 0:
            min_backoff = DEFAULT_MIN_BACKOFF
        if not max_backoff > 0:
            max_backoff = DEFAULT_MAX_BACKOFF
        if not factor > 1:
            factor = DEFAULT_GROWTH_FACTOR

        self.min_backoff = float(min_backoff)
        self.max_backoff = float(max_backoff)
        self.factor = float(factor)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(min_backoff={self.min_backoff}, "
            f"max_backoff={self.max_backoff}, factor={self.factor})"
        )

    def next(
        self,
        error: Exception | None,  # noqa: ARG002
        start: float,  # noqa: ARG002
        now: float,  # noqa: ARG002
        attempt: int,
    ) -> Decision:
        try:
            backoff = self.min_backoff * math.pow(self.factor, attempt - 1)
        except OverflowError:
            backoff = self.max_backoff
        return Decision(min(backoff, self.max_backoff), True)


def exponential_backoff(
    min_backoff: float, max_backoff: float, factor: float
) -> ExponentialBackoff:
    """Return a policy in which the backoff grows exponentially.

    The backoff starts at ``min_backoff`` and is scaled by ``factor`` for
    each successive attempt until it is capped at ``max_backoff``.
    """
    return ExponentialBackoff(min_backoff=min_backoff, max_backoff=max_backoff, factor=factor)


def default_exponential_backoff() -> ExponentialBackoff:
    r"""Return an exponential backoff with min 150ms, max 15s and factor 1.5.

    This results in the following behavior:

    ```
    Attempt     Backoff      Total
          1      0.150s      0.150s
          2      0.225s      0.375s
          3      0.338s      0.713s
          4      0.506s      1.219s
          5      0.759s      1.978s
          6      1.139s      3.117s
          7      1.709s      4.826s
          8      2.563s      7.389s
          9      3.844s     11.233s
         10      5.767s     17.000s
         11      8.650s     25.649s
         12     12.975s     38.624s
         13     15.000s     53.624s
         14     15.000s     68.624s
        ...         ...         ...
    ```
    """
    return ExponentialBackoff(DEFAULT_MIN_BACKOFF, DEFAULT_MAX_BACKOFF, DEFAULT_GROWTH_FACTOR)
