r"""Asynchronous retry loop.

This module provides ``do_async``, the coroutine counterpart of ``do``.
Backoff waits suspend the current task, allowing other tasks to run.
"""

from __future__ import annotations

__all__ = ["do_async"]

import asyncio
import logging
import time
from typing import TYPE_CHECKING, TypeVar

from aretry.callbacks import invoke_on_retry
from aretry.context import Context
from aretry.exceptions import is_permanent
from aretry.policy.defaults import default_backoff
from aretry.retry.core import next_backoff

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.callbacks import RetryInfo
    from aretry.context import AsyncContext
    from aretry.policy.base import BasePolicy

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


async def do_async(
    fn: Callable[[], Awaitable[T]],
    policy: BasePolicy | None = None,
    context: AsyncContext | None = None,
    *,
    clock: Callable[[], float] | None = None,
    on_retry: Callable[[RetryInfo], None] | None = None,
) -> T:
    """Await ``fn()`` according to ``policy`` until it succeeds.

    The stopping rules are the same as for ``do``. The task running the
    loop can also be cancelled with ``Task.cancel``, in which case
    ``asyncio.CancelledError`` propagates as usual.

    Args:
        fn: The zero-argument coroutine function to call.
        policy: The retry policy. Defaults to ``default_backoff()``.
        context: Optional cancellation signal and deadline. If None, the
            loop is never cancelled and has no deadline.
        clock: The clock used for start/now times and the deadline.
            Defaults to ``time.monotonic``.
        on_retry: Optional callback invoked before each backoff wait.

    Returns:
        The value returned by ``fn``.

    Raises:
        TypeError: If ``context`` is a thread-based ``Context``.
        Exception: The permanent failure or the last exception raised by
            ``fn``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import do_async, immediately
        >>> async def fetch():
        ...     return 42
        ...
        >>> asyncio.run(do_async(fetch, immediately()))
        42

        ```
    """
    if isinstance(context, Context):
        msg = "do_async requires an AsyncContext, got a thread-based Context"
        raise TypeError(msg)
    if policy is None:
        policy = default_backoff()
    if clock is None:
        clock = time.monotonic
    deadline = context.deadline if context is not None else None

    start = clock()
    attempt = 1
    while True:
        try:
            return await fn()
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
            await asyncio.sleep(backoff)
        elif await context.wait(backoff):
            logger.debug(f"Context cancelled while waiting after attempt {attempt}")
            raise error
        attempt += 1
