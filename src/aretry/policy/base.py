r"""Abstract base class for retry policies."""

from __future__ import annotations

__all__ = ["BasePolicy", "Decision"]

from abc import ABC, abstractmethod
from typing import NamedTuple


class Decision(NamedTuple):
    """Outcome of a policy consultation.

    The backoff is only meaningful when ``retry`` is ``True``.

    Attributes:
        backoff: The delay in seconds to wait before the next attempt.
        retry: Whether another attempt is allowed.
    """

    backoff: float
    retry: bool


# Shared veto returned by decorators that stop a retry sequence.
STOP = Decision(0.0, False)


class BasePolicy(ABC):
    """Abstract base class for retry policies.

    A policy decides, after each failed attempt, whether to retry and how
    long to wait first. Policies hold no per-call state so a single instance
    can be shared by any number of concurrent retry sequences. Decorator
    policies wrap a parent policy and modify or veto its decision.
    """

    @abstractmethod
    def next(
        self,
        error: Exception | None,
        start: float,
        now: float,
        attempt: int,
    ) -> Decision:
        """Compute the decision for the next attempt.

        Args:
            error: The exception raised by the last attempt.
            start: The clock time at which the retry sequence started.
            now: The current clock time.
            attempt: The number of failed attempts so far (1-indexed).
                For example, attempt=1 is the first failure.

        Returns:
            The backoff to wait and whether a retry is allowed.
        """
