r"""Exceptions signaling that an operation should not be retried.

An operation marks a failure as permanent by raising ``permanent(exc)``.
The marker is detected through any number of wrapping layers, so it may
sit in the middle of an exception chain built with ``raise ... from``.
"""

from __future__ import annotations

__all__ = ["PermanentError", "is_permanent", "permanent"]

from typing import TYPE_CHECKING, overload

if TYPE_CHECKING:
    from collections.abc import Iterator


class PermanentError(Exception):
    """Exception wrapping a failure that must not be retried.

    The wrapped exception is available as ``error`` and is also the
    ``__cause__`` of the marker, so tracebacks show the original failure.

    Args:
        error: The underlying exception.

    Example:
        ```pycon
        >>> from aretry.exceptions import PermanentError
        >>> raise PermanentError(ValueError("invalid token"))
        Traceback (most recent call last):
            ...
        aretry.exceptions.PermanentError: invalid token

        ```
    """

    def __init__(self, error: BaseException) -> None:
        super().__init__(error)
        self.error = error
        self.__cause__ = error

    def __str__(self) -> str:
        return str(self.error)


def _iter_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


def is_permanent(exc: BaseException | None) -> bool:
    """Indicate if an exception is, or wraps, a permanent failure.

    Only explicit wrapping is followed, i.e. the ``__cause__`` chain built
    with ``raise ... from``. An exception raised while a permanent failure
    is being handled is not a wrapper and is not permanent.

    Args:
        exc: The exception to check.

    Returns:
        ``True`` if a ``PermanentError`` is found in the chain.

    Example:
        ```pycon
        >>> from aretry.exceptions import is_permanent, permanent
        >>> is_permanent(ValueError("boom"))
        False
        >>> is_permanent(permanent(ValueError("boom")))
        True
        >>> outer = RuntimeError("while saving")
        >>> outer.__cause__ = permanent(ValueError("boom"))
        >>> is_permanent(outer)
        True

        ```
    """
    if exc is None:
        return False
    return any(isinstance(e, PermanentError) for e in _iter_chain(exc))


@overload
def permanent(exc: None) -> None: ...


@overload
def permanent(exc: BaseException) -> BaseException: ...


def permanent(exc: BaseException | None) -> BaseException | None:
    """Mark an exception as a permanent failure.

    If ``exc`` is None or already permanent, it is returned unchanged so
    the marking is idempotent and outer wrapping layers are preserved.

    Args:
        exc: The exception to mark.

    Returns:
        A ``PermanentError`` wrapping ``exc``, or ``exc`` itself.

    Example:
        ```pycon
        >>> from aretry.exceptions import permanent
        >>> err = permanent(ValueError("boom"))
        >>> permanent(err) is err
        True

        ```
    """
    if exc is None or is_permanent(exc):
        return exc
    return PermanentError(exc)
