r"""Parameter validation utilities for retry configuration.

This module provides validation functions for retry parameters to ensure
they meet the required constraints before a policy is built from them.
"""

from __future__ import annotations

__all__ = ["validate_retry_params"]


def validate_retry_params(
    max_retries: int | None = None,
    max_elapsed: float | None = None,
    min_backoff: float = 0.15,
    max_backoff: float = 15.0,
    growth_factor: float = 1.5,
    jitter_factor: float = 0.0,
) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retries. Must be >= 0 if provided.
        max_elapsed: Maximum elapsed duration in seconds for the whole
            retry sequence. Must be > 0 if provided.
        min_backoff: Backoff for the first retry. Must be > 0.
        max_backoff: Maximum backoff. Must be >= min_backoff.
        growth_factor: Exponential growth factor. Must be > 1.
        jitter_factor: Random jitter factor. Must be in [0, 1].

    Raises:
        ValueError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from aretry.core import validate_retry_params
        >>> validate_retry_params(max_retries=3)
        >>> validate_retry_params(max_retries=3, jitter_factor=0.1)
        >>> validate_retry_params(max_elapsed=30.0)
        >>> validate_retry_params(max_retries=-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be >= 0, got -1

        ```
    """
    if max_retries is not None and max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if max_elapsed is not None and max_elapsed <= 0:
        msg = f"max_elapsed must be > 0, got {max_elapsed}"
        raise ValueError(msg)
    if min_backoff <= 0:
        msg = f"min_backoff must be > 0, got {min_backoff}"
        raise ValueError(msg)
    if max_backoff < min_backoff:
        msg = f"max_backoff must be >= min_backoff ({min_backoff}), got {max_backoff}"
        raise ValueError(msg)
    if growth_factor <= 1:
        msg = f"growth_factor must be > 1, got {growth_factor}"
        raise ValueError(msg)
    if jitter_factor < 0 or jitter_factor > 1:
        msg = f"jitter_factor must be in [0, 1], got {jitter_factor}"
        raise ValueError(msg)
