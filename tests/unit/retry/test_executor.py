r"""Unit tests for the synchronous retry loop."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING
from unittest.mock import Mock, call

import pytest

from aretry import Context, RetryInfo, do, permanent
from aretry.exceptions import PermanentError
from aretry.policy import (
    BasePolicy,
    Decision,
    constant_backoff,
    immediately,
    never,
    with_max_retries,
)

if TYPE_CHECKING:
    from tests.helpers import FakeClock


def test_do_success_first_attempt(mock_sleep: Mock) -> None:
    """Test that a successful operation is called once."""
    fn = Mock(return_value="ok")
    assert do(fn, immediately()) == "ok"
    fn.assert_called_once_with()
    mock_sleep.assert_not_called()


def test_do_fails_twice_then_succeeds() -> None:
    """Test that transient failures are retried until success."""
    fn = Mock(side_effect=[ConnectionError("a"), ConnectionError("b"), "ok"])
    assert do(fn, constant_backoff(0)) == "ok"
    assert fn.call_count == 3


def test_do_permanent_failure_not_retried() -> None:
    """Test that a permanent failure is raised after one attempt."""
    error = permanent(ValueError("invalid token"))
    fn = Mock(side_effect=error)
    with pytest.raises(PermanentError) as exc_info:
        do(fn, immediately())
    assert exc_info.value is error
    assert fn.call_count == 1


def test_do_permanent_failure_keeps_wrapping() -> None:
    """Test that the outermost exception is raised, not the marker."""

    def fn() -> None:
        try:
            raise permanent(ValueError("invalid token"))
        except PermanentError as exc:
            raise RuntimeError("login failed") from exc

    with pytest.raises(RuntimeError, match=r"login failed") as exc_info:
        do(fn, immediately())
    assert isinstance(exc_info.value.__cause__, PermanentError)


def test_do_permanent_failure_does_not_consult_policy() -> None:
    policy = Mock(spec=BasePolicy)
    with pytest.raises(PermanentError):
        do(Mock(side_effect=permanent(ValueError("boom"))), policy)
    policy.next.assert_not_called()


def test_do_max_retries_exhausted() -> None:
    """Test that the last failure is raised after 1 + max_retries calls."""
    errors = [ConnectionError("1"), ConnectionError("2"), ConnectionError("3")]
    fn = Mock(side_effect=errors)
    with pytest.raises(ConnectionError) as exc_info:
        do(fn, with_max_retries(constant_backoff(0), 2))
    assert exc_info.value is errors[-1]
    assert fn.call_count == 3


def test_do_never() -> None:
    fn = Mock(side_effect=ConnectionError("down"))
    with pytest.raises(ConnectionError, match=r"down"):
        do(fn, never())
    assert fn.call_count == 1


def test_do_policy_arguments(clock: FakeClock) -> None:
    """Test that start is fixed, now is resampled and attempt
    increments."""
    errors = [ConnectionError("1"), ConnectionError("2")]
    start = clock.now

    def fn() -> str:
        clock.advance(1.0)
        if errors:
            raise errors.pop(0)
        return "ok"

    policy = Mock(spec=BasePolicy)
    policy.next.return_value = Decision(0.0, True)
    first, second = errors
    assert do(fn, policy, clock=clock) == "ok"
    assert [c.args for c in policy.next.call_args_list] == [
        (first, start, start + 1.0, 1),
        (second, start, start + 2.0, 2),
    ]


def test_do_waits_backoff(mock_sleep: Mock) -> None:
    fn = Mock(side_effect=[ConnectionError("a"), ConnectionError("b"), "ok"])
    assert do(fn, constant_backoff(2.5)) == "ok"
    assert mock_sleep.call_args_list == [call(2.5), call(2.5)]


def test_do_default_policy(mock_sleep: Mock) -> None:
    """Test that the default jittered exponential backoff is used."""
    fn = Mock(side_effect=[ConnectionError("a"), "ok"])
    assert do(fn) == "ok"
    mock_sleep.assert_called_once()
    assert 0.075 <= mock_sleep.call_args.args[0] <= 0.225


def test_do_on_retry(mock_sleep: Mock, mock_callback: Mock, clock: FakeClock) -> None:
    error = ConnectionError("a")
    fn = Mock(side_effect=[error, "ok"])
    assert do(fn, constant_backoff(1.0), clock=clock, on_retry=mock_callback) == "ok"
    mock_callback.assert_called_once_with(
        RetryInfo(attempt=1, error=error, wait_time=1.0, elapsed=0.0)
    )
    mock_sleep.assert_called_once_with(1.0)


def test_do_on_retry_not_called_on_veto(mock_callback: Mock) -> None:
    with pytest.raises(ConnectionError):
        do(Mock(side_effect=ConnectionError("a")), never(), on_retry=mock_callback)
    mock_callback.assert_not_called()


def test_do_policy_error_propagates() -> None:
    policy = Mock(spec=BasePolicy)
    policy.next.side_effect = RuntimeError("broken policy")
    with pytest.raises(RuntimeError, match=r"broken policy"):
        do(Mock(side_effect=ConnectionError("a")), policy)


def test_do_base_exception_not_caught() -> None:
    fn = Mock(side_effect=KeyboardInterrupt)
    with pytest.raises(KeyboardInterrupt):
        do(fn, immediately())
    assert fn.call_count == 1


def test_do_deadline_overrun_returns_last_error(clock: FakeClock) -> None:
    """Test that a backoff crossing the deadline stops without waiting."""
    ctx = Context.with_deadline(clock.now + 1.0)
    ctx.wait = Mock(wraps=ctx.wait)
    error = ConnectionError("down")
    fn = Mock(side_effect=error)
    with pytest.raises(ConnectionError) as exc_info:
        do(fn, constant_backoff(5.0), ctx, clock=clock)
    assert exc_info.value is error
    assert fn.call_count == 1
    ctx.wait.assert_not_called()


def test_do_deadline_checked_after_operation(clock: FakeClock) -> None:
    """Test that time spent in the operation counts towards the
    deadline."""
    ctx = Context.with_deadline(clock.now + 10.0)

    def fn() -> None:
        clock.advance(4.0)
        raise ConnectionError("slow")

    with pytest.raises(ConnectionError):
        do(fn, constant_backoff(0.0), ctx, clock=clock)
    # Waits at 104 and 108 fit in the deadline, 112 does not.
    assert clock.now == pytest.approx(112.0)


def test_do_deadline_allows_wait() -> None:
    ctx = Context.with_timeout(60.0)
    fn = Mock(side_effect=[ConnectionError("a"), "ok"])
    assert do(fn, constant_backoff(0.01), ctx) == "ok"
    assert fn.call_count == 2


def test_do_cancelled_during_wait() -> None:
    """Test that cancellation ends a long wait promptly."""
    ctx = Context()
    error = ConnectionError("down")
    fn = Mock(side_effect=error)
    timer = threading.Timer(0.05, ctx.cancel)
    timer.start()
    begin = time.monotonic()
    try:
        with pytest.raises(ConnectionError) as exc_info:
            do(fn, constant_backoff(30.0), ctx)
    finally:
        timer.cancel()
    assert time.monotonic() - begin < 5.0
    assert exc_info.value is error
    assert fn.call_count == 1


def test_do_already_cancelled_context() -> None:
    ctx = Context()
    ctx.cancel()
    fn = Mock(side_effect=[ConnectionError("a"), "ok"])
    with pytest.raises(ConnectionError, match=r"a"):
        do(fn, immediately(), ctx)
    assert fn.call_count == 1


def test_do_cancellation_not_observed_during_operation() -> None:
    """Test that an operation that succeeds after cancel still returns."""
    ctx = Context()

    def fn() -> str:
        ctx.cancel()
        return "ok"

    assert do(fn, immediately(), ctx) == "ok"


def test_do_shared_policy_across_threads() -> None:
    """Test that one policy drives many concurrent retry sequences."""
    policy = with_max_retries(constant_backoff(0.0), 3)
    results: list[str] = []
    lock = threading.Lock()

    def worker() -> None:
        fn = Mock(side_effect=[ConnectionError("a"), ConnectionError("b"), "ok"])
        value = do(fn, policy)
        with lock:
            results.append(value)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert results == ["ok"] * 16


def test_do_retries_error_raised_while_handling_permanent() -> None:
    """Test that an error raised inside ``except PermanentError`` is
    retried."""
    calls = []

    def fn() -> str:
        calls.append(1)
        if len(calls) <= 2:
            try:
                raise permanent(ValueError("token expired"))
            except PermanentError:
                raise ConnectionError("refresh endpoint unavailable")  # noqa: B904
        return "ok"

    assert do(fn, with_max_retries(constant_backoff(0), 5)) == "ok"
    assert len(calls) == 3
