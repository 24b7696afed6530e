r"""Random jitter policy decorator."""

from __future__ import annotations

__all__ = ["RandomJitter", "with_default_random_jitter", "with_random_jitter"]

from typing import TYPE_CHECKING

from aretry.core.config import DEFAULT_JITTER_FACTOR
from aretry.policy.base import BasePolicy, Decision
from aretry.utils.rand import GLOBAL_RANDOM

if TYPE_CHECKING:
    from aretry.utils.rand import RandomSource


class RandomJitter(BasePolicy):
    """Policy that adds random jitter to the backoff of its parent.

    The jitter is a plus or minus factor of the parent backoff. For
    example, with a factor of 0.5 and a parent backoff of 10s, the
    jittered backoff is uniformly distributed in [5s, 15s). A veto from
    the parent passes through unchanged and consumes no randomness.

    Args:
        parent: The policy whose backoff is jittered.
        factor: The jitter factor in (0, 1]. Out-of-range values fall
            back to 0.5.
        rand: The source of randomness. Defaults to the shared,
            thread-safe ``GLOBAL_RANDOM``.

    Example:
        ```pycon
        >>> from aretry.policy import ConstantBackoff, RandomJitter
        >>> policy = RandomJitter(ConstantBackoff(10.0), factor=0.5)
        >>> backoff, retry = policy.next(None, start=0.0, now=0.0, attempt=1)
        >>> 5.0 <= backoff < 15.0
        True

        ```
    """

    def __init__(
        self,
        parent: BasePolicy,
        factor: float = DEFAULT_JITTER_FACTOR,
        rand: RandomSource | None = None,
    ) -> None:
        if not 0 < factor <= 1:
            factor = DEFAULT_JITTER_FACTOR

        self.parent = parent
        self.factor = float(factor)
        self.rand = rand if rand is not None else GLOBAL_RANDOM

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(parent={self.parent!r}, factor={self.factor})"

    def next(
        self,
        error: Exception | None,
        start: float,
        now: float,
        attempt: int,
    ) -> Decision:
        decision = self.parent.next(error, start, now, attempt)
        if not decision.retry:
            return decision
        # 2r - 1 lies in [-1, 1) so the result lies in [b - j*b, b + j*b)
        r = self.rand.random()
        return Decision(decision.backoff * (1 + self.factor * (2 * r - 1)), True)


def with_random_jitter(
    parent: BasePolicy,
    factor: float,
    rand: RandomSource | None = None,
) -> RandomJitter:
    """Wrap ``parent`` with random jitter of ``factor``."""
    return RandomJitter(parent, factor=factor, rand=rand)


def with_default_random_jitter(parent: BasePolicy) -> RandomJitter:
    """Wrap ``parent`` with 50% jitter drawn from the shared random source."""
    return RandomJitter(parent, factor=DEFAULT_JITTER_FACTOR, rand=GLOBAL_RANDOM)
