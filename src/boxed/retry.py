"""Time-boxed retry over Result-returning producers.

Design goals:
- Linear control flow: one cooperative loop, two suspension points
  (the producer and the inter-attempt sleep)
- Policy injected by the caller: non-retryable error kinds are passed per call,
  producers stay unaware of retries
- Never raises for failures; giving up is reported as a ``TIMEOUT_ERROR`` kind
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import inspect
import logging
import time
from typing import TYPE_CHECKING, Any, Final, Protocol

from boxed.consume import consume_or_raise
from boxed.result import DEFAULT_MESSAGE, Failure, Result, Success

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

__all__ = [
    "DEFAULT_INTERVAL_MS",
    "DEFAULT_TIMEOUT_MS",
    "TIMEOUT_ERROR",
    "RaisingRetryInvoker",
    "RetryInvoker",
    "RetryPolicy",
    "consume_until_success",
    "retry_on_failure",
    "retry_or_raise",
]

logger = logging.getLogger(__name__)

TIMEOUT_ERROR: Final = "TimeoutError"
DEFAULT_INTERVAL_MS: Final = 1000
DEFAULT_TIMEOUT_MS: Final = 10_000

# Time sources; tests swap these for a virtual clock.
_clock = time.monotonic
_sleep = asyncio.sleep

type Producer[T, E: (str, int)] = Callable[
    [], Awaitable[Result[T, E]] | Result[T, E]
]
type OnRetry[E: (str, int)] = Callable[[int, Failure[E], str], object]


class RetryInvoker(Protocol):
    """Async invoker returned by ``retry_on_failure``."""

    async def __call__[T, E: (str, int)](
        self,
        fn: Producer[T, E],
        on_retry: OnRetry[E] | None = ...,
        return_errors: Iterable[E] = ...,
    ) -> Result[T, E]: ...


class RaisingRetryInvoker(Protocol):
    """Async invoker returned by ``retry_or_raise``."""

    async def __call__[T, E: (str, int)](
        self,
        fn: Producer[T, E],
        on_retry: OnRetry[E] | None = ...,
        return_errors: Iterable[E] = ...,
    ) -> T: ...


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-interval retry policy bounded by an overall deadline."""

    interval_ms: float = DEFAULT_INTERVAL_MS
    #: Measured from the start of the loop, not per attempt.
    timeout_ms: float = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        """Validate invariants to keep retry behavior predictable."""
        if self.interval_ms < 0:
            raise ValueError("RetryPolicy.interval_ms must be >= 0")
        if self.timeout_ms < 0:
            raise ValueError("RetryPolicy.timeout_ms must be >= 0")

    @property
    def interval_s(self) -> float:
        return self.interval_ms / 1000

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000


def _producer_name(fn: Callable[..., Any]) -> str:
    # functools.partial and callable instances have no __name__
    return getattr(fn, "__name__", None) or type(fn).__name__


def _notify[E: (str, int)](
    on_retry: OnRetry[E], attempt: int, failure: Failure[E], fn_name: str
) -> None:
    try:
        on_retry(attempt, failure, fn_name)
    except Exception as exc:
        # Observers are diagnostic only and must not break the loop.
        logger.warning("on_retry observer for %s raised: %s", fn_name, exc)


async def _retry_loop[T, E: (str, int)](
    fn: Producer[T, E],
    *,
    policy: RetryPolicy,
    on_retry: OnRetry[E] | None,
    return_errors: Iterable[E],
) -> Result[T, E]:
    terminal = frozenset(return_errors)
    fn_name = _producer_name(fn)
    start = _clock()
    attempt = 0

    while _clock() - start < policy.timeout_s:
        res = fn()
        if inspect.isawaitable(res):
            res = await res

        if isinstance(res, Success):
            return res
        if res.error_type in terminal:
            logger.debug(
                "%s returned non-retryable error %s after %d attempt(s)",
                fn_name,
                res.error_type,
                attempt + 1,
            )
            return res

        logger.debug(
            "%s failed on attempt %d (%s - %s); retrying in %sms",
            fn_name,
            attempt,
            res.error_type,
            res.message,
            policy.interval_ms,
        )
        if on_retry is not None:
            _notify(on_retry, attempt, res, fn_name)
        attempt += 1
        await _sleep(policy.interval_s)

    logger.debug(
        "%s gave up after %d attempt(s) in %sms", fn_name, attempt, policy.timeout_ms
    )
    timed_out: Failure[Any] = Failure(DEFAULT_MESSAGE, TIMEOUT_ERROR)
    return timed_out


def retry_on_failure(policy: RetryPolicy | None = None) -> RetryInvoker:
    """Build a reusable retry invoker returning the raw outcome.

    Args:
        policy: Interval and deadline. Defaults to ``RetryPolicy()``.

    Returns:
        ``async invoke(fn, on_retry=None, return_errors=())`` which re-invokes
        the zero-argument producer ``fn`` until it returns a ``Success``, a
        ``Failure`` whose ``error_type`` is in ``return_errors``, or the
        deadline passes (``Failure(..., TIMEOUT_ERROR)``). ``fn`` may return a
        ``Result`` directly or an awaitable of one. ``on_retry`` is called as
        ``on_retry(attempt, failure, fn_name)`` after each retryable failure.

    Example:
        retry = retry_on_failure(RetryPolicy(interval_ms=200, timeout_ms=5000))
        res = await retry(fetch_row, return_errors=["NotFound"])
    """
    resolved = policy if policy is not None else RetryPolicy()

    async def invoke[T, E: (str, int)](
        fn: Producer[T, E],
        on_retry: OnRetry[E] | None = None,
        return_errors: Iterable[E] = (),
    ) -> Result[T, E]:
        return await _retry_loop(
            fn, policy=resolved, on_retry=on_retry, return_errors=return_errors
        )

    return invoke


def retry_or_raise(policy: RetryPolicy | None = None) -> RaisingRetryInvoker:
    """Build a retry invoker that unwraps the outcome.

    Same arguments as the invoker from ``retry_on_failure``; the final result
    goes through ``consume_or_raise``, so a terminal or timeout failure raises
    ``UnwrapError``.
    """
    raw = retry_on_failure(policy)

    async def invoke[T, E: (str, int)](
        fn: Producer[T, E],
        on_retry: OnRetry[E] | None = None,
        return_errors: Iterable[E] = (),
    ) -> T:
        return consume_or_raise(await raw(fn, on_retry, return_errors))

    return invoke


async def consume_until_success[T, E: (str, int)](
    source: Result[T, E] | Callable[[], Result[T, E]],
    interval_ms: float,
    max_attempts: int = 10,
) -> Result[T, E]:
    """Poll a result on a fixed interval until it is a ``Success``.

    Unlike the retry invoker this never calls a producer: ``source`` is either
    a fixed ``Result`` or a zero-argument reader returning the current one
    (e.g. an attribute updated by another task). The first check happens after
    one interval. A failure is re-checked up to ``max_attempts`` times before
    the last observed value is returned.
    """
    if interval_ms < 0:
        raise ValueError("interval_ms must be >= 0")
    if max_attempts < 0:
        raise ValueError("max_attempts must be >= 0")

    read = source if callable(source) else (lambda: source)
    attempts = 0
    while True:
        await _sleep(interval_ms / 1000)
        current = read()
        if isinstance(current, Success) or attempts >= max_attempts:
            return current
        attempts += 1
