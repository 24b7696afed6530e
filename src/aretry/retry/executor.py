r"""Synchronous retry loop.

This module provides ``do``, which calls an operation until it succeeds
or the retry policy, the permanent-failure marker, the context deadline
or a cancellation stops it.
"""

from __future__ import annotations

__all__ = ["do"]

import logging
import time
from typing import TYPE_CHECKING, TypeVar

from aretry.callbacks import invoke_on_retry
from aretry.exceptions import is_permanent
from aretry.policy.defaults import default_backoff
from aretry.retry.core import next_backoff

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.callbacks import RetryInfo
    from aretry.context import Context
    from aretry.policy.base import BasePolicy

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


def do(
    fn: Callable[[], T],
    policy: BasePolicy | None = None,
    context: Context | None = None,
    *,
    clock: Callable[[], float] | None = None,
    on_retry: Callable[[RetryInfo], None] | None = None,
) -> T:
    """Call ``fn`` according to ``policy`` until it succeeds.

    The loop stops when:
    - ``fn`` returns: its value is returned immediately
    - ``fn`` raises a permanent failure: it is re-raised as-is, with any
      wrapping layers intact, without consulting the policy
    - the policy vetoes a retry: the last exception is re-raised
    - the context deadline would pass before the next attempt: the last
      exception is re-raised without waiting
    - the context is cancelled while waiting: the last exception is
      re-raised

    No timeout or cancellation specific exception is ever raised, so the
    caller always sees the real cause. Cancellation is not observed while
    ``fn`` itself is running.

    Args:
        fn: The zero-argument operation to call.
        policy: The retry policy. Defaults to ``default_backoff()``.
        context: Optional cancellation signal and deadline. If None, the
            loop is never cancelled and has no deadline.
        clock: The clock used for start/now times and the deadline.
            Defaults to ``time.monotonic``.
        on_retry: Optional callback invoked before each backoff wait.

    Returns:
        The value returned by ``fn``.

    Raises:
        Exception: The permanent failure or the last exception raised by
            ``fn``.

    Example:
        ```pycon
        >>> from aretry import do, immediately, with_max_retries
        >>> calls = []
        >>> def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("unavailable")
        ...     return "done"
        ...
        >>> do(flaky, with_max_retries(immediately(), 5))
        'done'
        >>> len(calls)
        3

        ```
    """
    if policy is None:
        policy = default_backoff()
    if clock is None:
        clock = time.monotonic
    deadline = context.deadline if context is not None else None

    start = clock()
    attempt = 1
    while True:
        try:
            return fn()
        except Exception as exc:
            if is_permanent(exc):
                logger.debug(f"Attempt {attempt} failed permanently: {exc!r}")
                raise
            backoff = next_backoff(
                policy, exc, start=start, attempt=attempt, deadline=deadline, clock=clock
            )
            if backoff is None:
                raise
            invoke_on_retry(
                on_retry, attempt=attempt, error=exc, wait_time=backoff, elapsed=clock() - start
            )
            error = exc

        if context is None:
            time.sleep(backoff)
        elif context.wait(backoff):
            logger.debug(f"Context cancelled while waiting after attempt {attempt}")
            raise error
        attempt += 1
