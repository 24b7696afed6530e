r"""Configuration dataclass and defaults for retry policies.

This module provides the default policy values and a dataclass-based
configuration object that builds a policy tree from flat settings.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_GROWTH_FACTOR",
    "DEFAULT_JITTER_FACTOR",
    "DEFAULT_MAX_BACKOFF",
    "DEFAULT_MIN_BACKOFF",
    "RetryConfig",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from aretry.core.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.callbacks import RetryInfo
    from aretry.policy.base import BasePolicy


# Backoff in seconds for the first retry of an exponential backoff
DEFAULT_MIN_BACKOFF = 0.15

# Cap in seconds for the backoff of an exponential backoff
DEFAULT_MAX_BACKOFF = 15.0

# Growth of the exponential backoff between successive attempts
# With 1.5 the backoff roughly doubles every 1.7 attempts
DEFAULT_GROWTH_FACTOR = 1.5

# Plus or minus factor of random jitter applied to a backoff
# With 0.5 a 10s backoff becomes a random value in [5s, 15s)
DEFAULT_JITTER_FACTOR = 0.5


@dataclass
class RetryConfig:
    """Flat configuration for retry behavior.

    The policy builders silently replace out-of-range values with the
    defaults; this configuration object validates its values instead and
    raises on invalid input, which is more useful for settings loaded from
    user configuration.

    Args:
        max_retries: Optional maximum number of retries. None means
            unbounded. Must be >= 0 if provided.
        max_elapsed: Optional maximum elapsed duration in seconds for the
            whole retry sequence. Must be > 0 if provided.
        min_backoff: Backoff in seconds for the first retry. Must be > 0.
        max_backoff: Maximum backoff in seconds. Must be >= min_backoff.
        growth_factor: Exponential growth factor. Must be > 1.
        jitter_factor: Random jitter factor in [0, 1]. 0 disables jitter.
        on_retry: Optional callback called before each backoff wait.

    Example:
        ```pycon
        >>> from aretry.core.config import RetryConfig
        >>> config = RetryConfig(max_retries=5, jitter_factor=0.0)
        >>> config.to_policy()
        MaxRetries(parent=ExponentialBackoff(min_backoff=0.15, max_backoff=15.0, factor=1.5), limit=5)
        >>> merged = config.merge(max_retries=10)
        >>> merged.max_retries
        10
        >>> config.max_retries  # Original unchanged
        5

        ```
    """

    max_retries: int | None = None
    max_elapsed: float | None = None
    min_backoff: float = DEFAULT_MIN_BACKOFF
    max_backoff: float = DEFAULT_MAX_BACKOFF
    growth_factor: float = DEFAULT_GROWTH_FACTOR
    jitter_factor: float = DEFAULT_JITTER_FACTOR
    on_retry: Callable[[RetryInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_retry_params(
            max_retries=self.max_retries,
            max_elapsed=self.max_elapsed,
            min_backoff=self.min_backoff,
            max_backoff=self.max_backoff,
            growth_factor=self.growth_factor,
            jitter_factor=self.jitter_factor,
        )

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_policy(self) -> BasePolicy:
        """Build the policy tree described by this configuration.

        The tree is, from the leaf up: exponential backoff, random jitter
        (skipped when ``jitter_factor`` is 0), maximum retries and maximum
        elapsed duration (each skipped when unset).

        Returns:
            The root of the policy tree.
        """
        from aretry.policy import (
            exponential_backoff,
            with_max_elapsed_duration,
            with_max_retries,
            with_random_jitter,
        )

        policy = exponential_backoff(self.min_backoff, self.max_backoff, self.growth_factor)
        if self.jitter_factor > 0:
            policy = with_random_jitter(policy, self.jitter_factor)
        if self.max_retries is not None:
            policy = with_max_retries(policy, self.max_retries)
        if self.max_elapsed is not None:
            policy = with_max_elapsed_duration(policy, self.max_elapsed)
        return policy

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to keyword arguments for ``do``/``do_async``.

        Returns:
            Dictionary with the ``policy`` and ``on_retry`` arguments.

        Example:
            ```pycon
            >>> from aretry import do
            >>> from aretry.core.config import RetryConfig
            >>> config = RetryConfig(max_retries=2)
            >>> do(lambda: "ok", **config.to_dict())
            'ok'

            ```
        """
        return {"policy": self.to_policy(), "on_retry": self.on_retry}
