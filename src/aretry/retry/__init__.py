r"""Retry loops driving an operation with a policy.

Public API:
    - do: Synchronous retry loop
    - do_async: Asynchronous retry loop
    - next_backoff: Decision helper shared by both loops
"""

from __future__ import annotations

__all__ = ["do", "do_async", "next_backoff"]

from aretry.retry.core import next_backoff
from aretry.retry.executor import do
from aretry.retry.executor_async import do_async
