r"""Configuration and validation shared by the retry loops."""

from __future__ import annotations

__all__ = [
    "DEFAULT_GROWTH_FACTOR",
    "DEFAULT_JITTER_FACTOR",
    "DEFAULT_MAX_BACKOFF",
    "DEFAULT_MIN_BACKOFF",
    "RetryConfig",
    "validate_retry_params",
]

from aretry.core.config import (
    DEFAULT_GROWTH_FACTOR,
    DEFAULT_JITTER_FACTOR,
    DEFAULT_MAX_BACKOFF,
    DEFAULT_MIN_BACKOFF,
    RetryConfig,
)
from aretry.core.validation import validate_retry_params
