r"""Unit tests for the shared retry decision helper."""

from __future__ import annotations

from typing import TYPE_CHECKING

from aretry.policy import constant_backoff, never
from aretry.retry import next_backoff

if TYPE_CHECKING:
    from tests.helpers import FakeClock


def test_next_backoff_allowed(clock: FakeClock) -> None:
    backoff = next_backoff(
        constant_backoff(2.0),
        ValueError("boom"),
        start=clock.now,
        attempt=1,
        deadline=None,
        clock=clock,
    )
    assert backoff == 2.0


def test_next_backoff_veto(clock: FakeClock) -> None:
    backoff = next_backoff(
        never(), ValueError("boom"), start=clock.now, attempt=1, deadline=None, clock=clock
    )
    assert backoff is None


def test_next_backoff_deadline_exactly_reached(clock: FakeClock) -> None:
    """Test that a wait ending exactly at the deadline is allowed."""
    backoff = next_backoff(
        constant_backoff(2.0),
        ValueError("boom"),
        start=clock.now,
        attempt=1,
        deadline=clock.now + 2.0,
        clock=clock,
    )
    assert backoff == 2.0


def test_next_backoff_deadline_overrun(clock: FakeClock) -> None:
    backoff = next_backoff(
        constant_backoff(2.0),
        ValueError("boom"),
        start=clock.now,
        attempt=1,
        deadline=clock.now + 1.999,
        clock=clock,
    )
    assert backoff is None
