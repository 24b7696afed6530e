r"""aretry - Retry with backoff for fallible operations.

This package decides, after each failure of an operation, whether to
retry it and how long to wait first. Policies are small stateless
objects composed into a tree once and shared freely between threads and
tasks; a retry loop applies a policy to one call under an optional
cancellable deadline.

Key Features:
    - Constant and exponential backoff policies
    - Random jitter, maximum retries and maximum elapsed duration
      decorators that stack in any order
    - Permanent failures that stop retrying immediately, detected through
      any number of wrapping layers
    - Cancellation and deadlines that never hide the real failure
    - Synchronous and asyncio retry loops

Example:
    ```pycon
    >>> from aretry import do, permanent, with_max_retries, constant_backoff
    >>> def fetch():
    ...     raise permanent(PermissionError("bad credentials"))
    ...
    >>> do(fetch, with_max_retries(constant_backoff(0.1), 3))
    Traceback (most recent call last):
        ...
    aretry.exceptions.PermanentError: bad credentials

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncContext",
    "BasePolicy",
    "Context",
    "Decision",
    "PermanentError",
    "RetryConfig",
    "RetryInfo",
    "__version__",
    "constant_backoff",
    "default_backoff",
    "default_exponential_backoff",
    "do",
    "do_async",
    "exponential_backoff",
    "immediately",
    "is_permanent",
    "never",
    "permanent",
    "with_default_random_jitter",
    "with_max_elapsed_duration",
    "with_max_retries",
    "with_random_jitter",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.callbacks import RetryInfo
from aretry.context import AsyncContext, Context
from aretry.core.config import RetryConfig
from aretry.exceptions import PermanentError, is_permanent, permanent
from aretry.policy import (
    BasePolicy,
    Decision,
    constant_backoff,
    default_backoff,
    default_exponential_backoff,
    exponential_backoff,
    immediately,
    never,
    with_default_random_jitter,
    with_max_elapsed_duration,
    with_max_retries,
    with_random_jitter,
)
from aretry.retry import do, do_async

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
