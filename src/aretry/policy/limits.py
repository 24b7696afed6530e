r"""Policy decorators that bound a retry sequence.

This module provides decorators limiting the number of retries and the
total elapsed time in which retries are allowed.
"""

from __future__ import annotations

__all__ = [
    "MaxElapsedDuration",
    "MaxRetries",
    "with_max_elapsed_duration",
    "with_max_retries",
]

from aretry.policy.base import STOP, BasePolicy, Decision


class MaxRetries(BasePolicy):
    """Policy that limits the total number of retry attempts.

    Vetoes once ``attempt`` exceeds ``limit`` and otherwise delegates to
    the parent. With ``limit=0`` no retry is ever allowed and the parent
    is never consulted, so it may be None.

    Args:
        parent: The policy consulted while retries remain.
        limit: The maximum number of retries.

    Example:
        ```pycon
        >>> from aretry.policy import ConstantBackoff, MaxRetries
        >>> policy = MaxRetries(ConstantBackoff(1.0), limit=2)
        >>> policy.next(None, start=0.0, now=0.0, attempt=2)
        Decision(backoff=1.0, retry=True)
        >>> policy.next(None, start=0.0, now=0.0, attempt=3)
        Decision(backoff=0.0, retry=False)

        ```
    """

    def __init__(self, parent: BasePolicy | None, limit: int) -> None:
        self.parent = parent
        self.limit = limit

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(parent={self.parent!r}, limit={self.limit})"

    def next(
        self,
        error: Exception | None,
        start: float,
        now: float,
        attempt: int,
    ) -> Decision:
        if attempt > self.limit or self.parent is None:
            return STOP
        return self.parent.next(error, start, now, attempt)


class MaxElapsedDuration(BasePolicy):
    """Policy that limits the total elapsed time of a retry sequence.

    The parent decision is vetoed when waiting out its backoff would end
    after ``start + limit``. A veto from the parent passes through
    unchanged.

    Args:
        parent: The policy whose decision is bounded.
        limit: The maximum elapsed duration in seconds.

    Example:
        ```pycon
        >>> from aretry.policy import ConstantBackoff, MaxElapsedDuration
        >>> policy = MaxElapsedDuration(ConstantBackoff(1.0), limit=10.0)
        >>> policy.next(None, start=0.0, now=8.0, attempt=1)
        Decision(backoff=1.0, retry=True)
        >>> policy.next(None, start=0.0, now=9.5, attempt=2)
        Decision(backoff=0.0, retry=False)

        ```
    """

    def __init__(self, parent: BasePolicy, limit: float) -> None:
        self.parent = parent
        self.limit = float(limit)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(parent={self.parent!r}, limit={self.limit})"

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
        if now + decision.backoff > start + self.limit:
            return STOP
        return decision


def with_max_retries(parent: BasePolicy | None, limit: int) -> MaxRetries:
    """Wrap ``parent`` so that at most ``limit`` retries are allowed."""
    return MaxRetries(parent, limit)


def with_max_elapsed_duration(parent: BasePolicy, limit: float) -> MaxElapsedDuration:
    """Wrap ``parent`` so that retries stop once ``limit`` seconds would elapse."""
    return MaxElapsedDuration(parent, limit)
