r"""Cancellation signals with optional deadlines for retry loops.

A context is shared between the code running a retry loop and the code
that may want to stop it. Cancellation is cooperative: it is observed
while the loop waits out a backoff, never while the operation runs.

Example:
    ```pycon
    >>> from aretry.context import Context
    >>> ctx = Context.with_timeout(30.0)
    >>> ctx.deadline is not None
    True
    >>> ctx.cancel()
    >>> ctx.cancelled
    True

    ```
"""

from __future__ import annotations

__all__ = ["AsyncContext", "Context"]

import asyncio
import threading
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class Context:
    """Thread-based cancellation signal for the synchronous retry loop.

    ``cancel`` may be called from any thread.

    Args:
        deadline: Optional absolute deadline, expressed in the units of
            the clock used by the retry loop (``time.monotonic`` by
            default).
    """

    def __init__(self, deadline: float | None = None) -> None:
        self._deadline = deadline
        self._event = threading.Event()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(deadline={self._deadline}, "
            f"cancelled={self.cancelled})"
        )

    @classmethod
    def with_deadline(cls, deadline: float) -> Context:
        """Create a context with an absolute deadline."""
        return cls(deadline=deadline)

    @classmethod
    def with_timeout(
        cls, timeout: float, clock: Callable[[], float] = time.monotonic
    ) -> Context:
        """Create a context whose deadline is ``timeout`` seconds from now.

        Args:
            timeout: The number of seconds until the deadline.
            clock: The clock used to compute the deadline. It must be the
                same clock as the one passed to the retry loop.
        """
        return cls(deadline=clock() + timeout)

    @property
    def deadline(self) -> float | None:
        """The absolute deadline, or None if there is none."""
        return self._deadline

    @property
    def cancelled(self) -> bool:
        """Whether ``cancel`` has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Fire the cancellation signal. Calling it again is a no-op."""
        self._event.set()

    def wait(self, timeout: float) -> bool:
        """Block until the context is cancelled or ``timeout`` elapses.

        Args:
            timeout: The maximum number of seconds to wait.

        Returns:
            ``True`` if the context was cancelled, ``False`` if the
            timeout elapsed first.
        """
        return self._event.wait(max(timeout, 0.0))


class AsyncContext:
    """Asyncio-based cancellation signal for the asynchronous retry loop.

    ``cancel`` must be called from the event loop thread; use
    ``loop.call_soon_threadsafe(ctx.cancel)`` from other threads.

    Args:
        deadline: Optional absolute deadline, expressed in the units of
            the clock used by the retry loop (``time.monotonic`` by
            default).
    """

    def __init__(self, deadline: float | None = None) -> None:
        self._deadline = deadline
        self._event = asyncio.Event()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(deadline={self._deadline}, "
            f"cancelled={self.cancelled})"
        )

    @classmethod
    def with_deadline(cls, deadline: float) -> AsyncContext:
        """Create a context with an absolute deadline."""
        return cls(deadline=deadline)

    @classmethod
    def with_timeout(
        cls, timeout: float, clock: Callable[[], float] = time.monotonic
    ) -> AsyncContext:
        """Create a context whose deadline is ``timeout`` seconds from now."""
        return cls(deadline=clock() + timeout)

    @property
    def deadline(self) -> float | None:
        """The absolute deadline, or None if there is none."""
        return self._deadline

    @property
    def cancelled(self) -> bool:
        """Whether ``cancel`` has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Fire the cancellation signal. Calling it again is a no-op."""
        self._event.set()

    async def wait(self, timeout: float) -> bool:
        """Wait until the context is cancelled or ``timeout`` elapses.

        Args:
            timeout: The maximum number of seconds to wait.

        Returns:
            ``True`` if the context was cancelled, ``False`` if the
            timeout elapsed first.
        """
        if self._event.is_set():
            return True
        if timeout <= 0:
            await asyncio.sleep(0)
            return self._event.is_set()
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True
