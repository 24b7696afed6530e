r"""Utility functions and helpers for retry policies."""

from __future__ import annotations

__all__ = ["GLOBAL_RANDOM", "LockedRandom", "RandomSource"]

from aretry.utils.rand import GLOBAL_RANDOM, LockedRandom, RandomSource
