"""Consumers: turn a Result into a plain value at a boundary.

These helpers interoperate with exception-based call sites. Only
``consume_or_raise`` (and anything built on it) raises.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, overload

from boxed.errors import UnwrapError
from boxed.result import DEFAULT_MESSAGE, Failure, Result, Success

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

__all__ = [
    "consume_all",
    "consume_or_else",
    "consume_or_none",
    "consume_or_raise",
]


def consume_or_raise[T](result: Result[T, Any]) -> T:
    """Return the payload, or raise ``UnwrapError`` describing the failure."""
    if isinstance(result, Failure):
        raise UnwrapError(
            f"Failure: {result.error_type} - {result.message or DEFAULT_MESSAGE}",
            error_type=result.error_type,
            failure_message=result.message,
        )
    return result.value


def consume_or_none[T](result: Result[T, Any]) -> T | None:
    """Return the payload, or ``None`` for a failure. Never raises."""
    return result.value if isinstance(result, Success) else None


def consume_or_else[T, E: (str, int)](
    result: Result[T, E], callback: Callable[[Failure[E]], T]
) -> T:
    """Return the payload, or ``callback(failure)`` for a failure."""
    if isinstance(result, Failure):
        return callback(result)
    return result.value


@overload
def consume_all[A](
    results: tuple[Result[A, Any]],
    consume: Callable[[Result[Any, Any]], Any] = ...,
) -> tuple[A]: ...
@overload
def consume_all[A, B](
    results: tuple[Result[A, Any], Result[B, Any]],
    consume: Callable[[Result[Any, Any]], Any] = ...,
) -> tuple[A, B]: ...
@overload
def consume_all[A, B, C](
    results: tuple[Result[A, Any], Result[B, Any], Result[C, Any]],
    consume: Callable[[Result[Any, Any]], Any] = ...,
) -> tuple[A, B, C]: ...
@overload
def consume_all[A, B, C, D](
    results: tuple[Result[A, Any], Result[B, Any], Result[C, Any], Result[D, Any]],
    consume: Callable[[Result[Any, Any]], Any] = ...,
) -> tuple[A, B, C, D]: ...
@overload
def consume_all[A, B, C, D, F](
    results: tuple[
        Result[A, Any], Result[B, Any], Result[C, Any], Result[D, Any], Result[F, Any]
    ],
    consume: Callable[[Result[Any, Any]], Any] = ...,
) -> tuple[A, B, C, D, F]: ...
@overload
def consume_all[T](
    results: Sequence[Result[T, Any]],
    consume: Callable[[Result[Any, Any]], Any] = ...,
) -> tuple[T, ...]: ...
def consume_all(
    results: Sequence[Result[Any, Any]],
    consume: Callable[[Result[Any, Any]], Any] = consume_or_raise,
) -> tuple[Any, ...]:
    """Consume every result with one strategy, preserving positional order.

    Args:
        results: Fixed-size sequence of results, possibly heterogeneous.
        consume: Strategy applied to each element. Defaults to
            ``consume_or_raise``, so the first failure (in order) raises.

    Returns:
        Tuple of payloads, one per input position.

    Example:
        port, host = consume_all((Success(8080), Success("localhost")))
    """
    return tuple(consume(result) for result in results)
