r"""Constant backoff policy."""

from __future__ import annotations

__all__ = ["ConstantBackoff", "constant_backoff"]

from aretry.policy.base import BasePolicy, Decision


class ConstantBackoff(BasePolicy):
    """Constant/fixed backoff policy.

    Returns the same backoff for every attempt and always allows a retry.
    Combine it with ``with_max_retries`` or ``with_max_elapsed_duration``
    to bound the number of attempts.

    Args:
        backoff: The fixed delay in seconds. Negative and NaN values
            are clamped to 0.

    Example:
        ```pycon
        >>> from aretry.policy import ConstantBackoff
        >>> policy = ConstantBackoff(2.5)
        >>> policy.next(None, start=0.0, now=0.0, attempt=1)
        Decision(backoff=2.5, retry=True)
        >>> policy.next(None, start=0.0, now=10.0, attempt=10)
        Decision(backoff=2.5, retry=True)

        ```
    """

    def __init__(self, backoff: float) -> None:
        backoff = float(backoff)
        self.backoff = backoff if backoff > 0 else 0.0

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(backoff={self.backoff})"

    def next(
        self,
        error: Exception | None,  # noqa: ARG002
        start: float,  # noqa: ARG002
        now: float,  # noqa: ARG002
        attempt: int,  # noqa: ARG002
    ) -> Decision:
        return Decision(self.backoff, True)


def constant_backoff(backoff: float) -> ConstantBackoff:
    """Return a policy that always waits ``backoff`` seconds."""
    return ConstantBackoff(backoff)
