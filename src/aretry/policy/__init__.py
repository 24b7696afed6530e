r"""Retry policies and their composition.

This package provides leaf policies computing a backoff (constant and
exponential) and decorators that wrap a parent policy to jitter or veto
its decision (random jitter, maximum retries and maximum elapsed
duration). Decorators stack in any order.

Example:
    ```pycon
    >>> from aretry.policy import (
    ...     exponential_backoff,
    ...     with_max_elapsed_duration,
    ...     with_max_retries,
    ...     with_random_jitter,
    ... )
    >>> policy = with_max_elapsed_duration(
    ...     with_max_retries(
    ...         with_random_jitter(exponential_backoff(0.1, 5.0, 2.0), 0.2),
    ...         limit=5,
    ...     ),
    ...     limit=30.0,
    ... )
    >>> policy.next(None, start=0.0, now=0.0, attempt=6)
    Decision(backoff=0.0, retry=False)

    ```
"""

from __future__ import annotations

__all__ = [
    "BasePolicy",
    "ConstantBackoff",
    "Decision",
    "ExponentialBackoff",
    "MaxElapsedDuration",
    "MaxRetries",
    "RandomJitter",
    "constant_backoff",
    "default_backoff",
    "default_exponential_backoff",
    "exponential_backoff",
    "immediately",
    "never",
    "with_default_random_jitter",
    "with_max_elapsed_duration",
    "with_max_retries",
    "with_random_jitter",
]

from aretry.policy.base import BasePolicy, Decision
from aretry.policy.constant import ConstantBackoff, constant_backoff
from aretry.policy.defaults import default_backoff, immediately, never
from aretry.policy.exponential import (
    ExponentialBackoff,
    default_exponential_backoff,
    exponential_backoff,
)
from aretry.policy.jitter import (
    RandomJitter,
    with_default_random_jitter,
    with_random_jitter,
)
from aretry.policy.limits import (
    MaxElapsedDuration,
    MaxRetries,
    with_max_elapsed_duration,
    with_max_retries,
)
