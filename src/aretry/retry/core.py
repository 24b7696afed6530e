r"""Shared core logic for retry loops.

This module provides the decision helper used by both the synchronous
and asynchronous retry loops. It consults the policy and checks the
context deadline, so both loops stop for exactly the same reasons.
"""

from __future__ import annotations

__all__ = ["next_backoff"]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.policy.base import BasePolicy

logger: logging.Logger = logging.getLogger(__name__)


def next_backoff(
    policy: BasePolicy,
    error: Exception,
    *,
    start: float,
    attempt: int,
    deadline: float | None,
    clock: Callable[[], float],
) -> float | None:
    """Compute the backoff before the next attempt.

    Args:
        policy: The policy to consult.
        error: The exception raised by the last attempt.
        start: The clock time at which the retry sequence started.
        attempt: The number of failed attempts so far (1-indexed).
        deadline: Optional absolute deadline of the context.
        clock: The clock used to sample the current time.

    Returns:
        The backoff in seconds, or None if the loop must stop because the
        policy vetoed a retry or because waiting would overrun the
        deadline.
    """
    now = clock()
    backoff, retry = policy.next(error, start, now, attempt)
    if not retry:
        logger.debug(f"Attempt {attempt} failed, retry policy gave up: {error!r}")
        return None
    if deadline is not None and deadline < clock() + backoff:
        logger.debug(
            f"Attempt {attempt} failed, backoff of {backoff:.3f}s would overrun "
            f"the deadline: {error!r}"
        )
        return None
    logger.debug(f"Attempt {attempt} failed, retrying in {backoff:.3f}s: {error!r}")
    return backoff
