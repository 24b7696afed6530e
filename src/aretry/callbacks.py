r"""Callback types for observing a retry sequence.

The ``on_retry`` hook is invoked right before the retry loop waits out a
backoff, which makes it a convenient place for logging or metrics.

Example:
    ```pycon
    >>> from aretry import do, immediately, with_max_retries
    >>> from aretry.callbacks import RetryInfo
    >>> def log_retry(retry_info: RetryInfo):
    ...     print(f"Retry {retry_info.attempt} in {retry_info.wait_time}s")
    ...
    >>> do(lambda: "ok", with_max_retries(immediately(), 3), on_retry=log_retry)
    'ok'

    ```
"""

from __future__ import annotations

__all__ = ["RetryInfo", "invoke_on_retry"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        attempt: The number of failed attempts so far (1-indexed).
        error: The exception that triggered the retry.
        wait_time: The backoff in seconds before the next attempt.
        elapsed: The seconds elapsed since the retry sequence started.
    """

    attempt: int
    error: Exception
    wait_time: float
    elapsed: float


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    attempt: int,
    error: Exception,
    wait_time: float,
    elapsed: float,
) -> None:
    """Invoke on_retry callback if provided.

    Args:
        on_retry: Optional callback to invoke before each backoff wait.
        attempt: The number of failed attempts so far (1-indexed).
        error: The exception that triggered the retry.
        wait_time: The backoff in seconds before the next attempt.
        elapsed: The seconds elapsed since the retry sequence started.
    """
    if on_retry is not None:
        on_retry(RetryInfo(attempt=attempt, error=error, wait_time=wait_time, elapsed=elapsed))
