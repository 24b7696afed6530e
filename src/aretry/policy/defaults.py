r"""Ready-made policies shared across callers.

Policies hold no per-call state, so these are module-level singletons.
"""

from __future__ import annotations

__all__ = ["default_backoff", "immediately", "never"]

from typing import TYPE_CHECKING

from aretry.policy.constant import ConstantBackoff
from aretry.policy.exponential import default_exponential_backoff
from aretry.policy.jitter import with_default_random_jitter
from aretry.policy.limits import MaxRetries

if TYPE_CHECKING:
    from aretry.policy.base import BasePolicy

_DEFAULT_POLICY = with_default_random_jitter(default_exponential_backoff())
_NEVER = MaxRetries(None, 0)
_IMMEDIATELY = ConstantBackoff(0.0)


def default_backoff() -> BasePolicy:
    r"""Return the default exponential backoff with 50% random jitter.

    This results in the following behavior:

    ```
    Attempt         Backoff                  Total
          1     [0.075s,  0.225s]     [ 0.075s,   0.225s]
          2     [0.113s,  0.338s]     [ 0.188s,   0.562s]
          3     [0.169s,  0.506s]     [ 0.356s,   1.069s]
          4     [0.253s,  0.759s]     [ 0.609s,   1.828s]
          5     [0.380s,  1.139s]     [ 0.989s,   2.967s]
          6     [0.570s,  1.709s]     [ 1.559s,   4.676s]
          7     [0.854s,  2.563s]     [ 2.413s,   7.239s]
          8     [1.281s,  3.844s]     [ 3.694s,  11.083s]
          9     [1.922s,  5.767s]     [ 5.617s,  16.850s]
         10     [2.883s,  8.650s]     [ 8.500s,  25.499s]
         11     [4.325s, 12.975s]     [12.825s,  38.474s]
         12     [6.487s, 19.462s]     [19.312s,  57.936s]
         13     [7.500s, 22.500s]     [26.812s,  80.436s]
         14     [7.500s, 22.500s]     [34.312s, 102.936s]
        ...            ...                    ...
    ```
    """
    return _DEFAULT_POLICY


def never() -> BasePolicy:
    """Return a policy that doesn't allow any retry attempts."""
    return _NEVER


def immediately() -> BasePolicy:
    """Return a policy that retries with no backoff."""
    return _IMMEDIATELY
