"""Result algebra: explicit success/failure values instead of exceptions.

Every fallible function returns a ``Result``: either ``Success`` carrying a
payload, or ``Failure`` carrying a tagged error (``error_type``) and a
human-readable ``message``. Callers handle both outcomes through the
predicates, extraction methods, or by chaining combinators; nothing here
raises except the strict extractors ``unwrap()`` and ``expect()``.

Example:
    def parse_port(raw: str) -> Result[int, str]:
        if not raw.isdigit():
            return Failure(f"not a number: {raw!r}", "InvalidPort")
        return Success(int(raw))

    port = parse_port("8080").map(lambda p: p + 1).unwrap_or(80)

Both variants are frozen dataclasses, so structural pattern matching works:

    match parse_port(raw):
        case Success(port):
            ...
        case Failure(message, "InvalidPort"):
            ...
"""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
from typing import (
    TYPE_CHECKING,
    Any,
    Final,
    Literal,
    Never,
    NotRequired,
    TypedDict,
    TypeIs,
)

from boxed.errors import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    "DEFAULT_ERROR_TYPE",
    "DEFAULT_MESSAGE",
    "Err",
    "ErrorInfo",
    "Failure",
    "Ok",
    "Result",
    "Success",
    "is_err",
    "is_failure",
    "is_ok",
    "is_success",
]

DEFAULT_MESSAGE: Final = "an error occurred"
DEFAULT_ERROR_TYPE: Final = "UnknownError"


class ErrorInfo(TypedDict):
    """Structured error record accepted from ``map_err`` mapping functions."""

    error_type: str | int
    message: NotRequired[str | None]


def _check_error_type(value: object) -> None:
    # bool is an int subclass but is not a usable discriminant
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TypeError(
            f"error_type must be a str or int, got {type(value).__name__}"
        )


def _describe(error_type: str | int, message: str) -> str:
    return f"{error_type} - {message}" if message else str(error_type)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A successful result carrying ``value``."""

    value: T

    # --- Inspection ---

    def is_success(self) -> Literal[True]:
        return True

    def is_failure(self) -> Literal[False]:
        return False

    def match[R](
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[Failure[Any]], R],  # noqa: ARG002
    ) -> R:
        """Fold the result: call ``on_success`` with the payload."""
        return on_success(self.value)

    # --- Extraction ---

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, fallback: object) -> T:  # noqa: ARG002
        return self.value

    def unwrap_or_else(self, f: Callable[[Failure[Any]], object]) -> T:  # noqa: ARG002
        return self.value

    def expect(self, msg: str) -> T:  # noqa: ARG002
        return self.value

    def to_nullable(self) -> T:
        return self.value

    # --- Transformation ---

    def map[U](self, f: Callable[[T], U]) -> Success[U]:
        return Success(f(self.value))

    def map_err(self, f: Callable[[Never], object]) -> Success[T]:  # noqa: ARG002
        # Error-side transforms are ignored on success; only the declared
        # error kind widens for the caller.
        return self

    def and_then[U, F: (str, int)](
        self, f: Callable[[T], Result[U, F]]
    ) -> Result[U, F]:
        return f(self.value)

    def or_else(self, f: Callable[[Never], object]) -> Success[T]:  # noqa: ARG002
        return self

    def inspect(self, f: Callable[[T], object]) -> Success[T]:
        """Call ``f`` with the payload for its side effect; return self."""
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[Never], object]) -> Success[T]:  # noqa: ARG002
        return self


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E: (str, int)]:
    """A failed result carrying an error kind and a message.

    ``error_type`` is a discriminant (a string label or a numeric code), so
    failures compare by value and can be checked for set membership. Both
    fields fall back to sentinels when omitted or passed as ``None``.

    Note:
        Numeric error families should pass their code explicitly; the
        default kind is the string ``"UnknownError"``.
    """

    message: str = DEFAULT_MESSAGE
    error_type: E = DEFAULT_ERROR_TYPE  # type: ignore[assignment]

    def __post_init__(self) -> None:
        """Apply sentinel defaults and validate the error kind."""
        if self.message is None:
            object.__setattr__(self, "message", DEFAULT_MESSAGE)
        if self.error_type is None:
            object.__setattr__(self, "error_type", DEFAULT_ERROR_TYPE)
        _check_error_type(self.error_type)

    # --- Inspection ---

    def is_success(self) -> Literal[False]:
        return False

    def is_failure(self) -> Literal[True]:
        return True

    def match[R](
        self,
        on_success: Callable[[Any], R],  # noqa: ARG002
        on_failure: Callable[[Failure[E]], R],
    ) -> R:
        """Fold the result: call ``on_failure`` with this failure."""
        return on_failure(self)

    # --- Extraction ---

    def unwrap(self) -> Never:
        raise UnwrapError(
            f"Failure.unwrap(): {_describe(self.error_type, self.message)}",
            error_type=self.error_type,
            failure_message=self.message,
        )

    def unwrap_or[T](self, fallback: T) -> T:
        return fallback

    def unwrap_or_else[T](self, f: Callable[[Failure[E]], T]) -> T:
        return f(self)

    def expect(self, msg: str) -> Never:
        raise UnwrapError(
            f"Failure.expect(): {msg} ({_describe(self.error_type, self.message)})",
            error_type=self.error_type,
            failure_message=self.message,
        )

    def to_nullable(self) -> None:
        return None

    # --- Transformation ---

    def map(self, f: Callable[[Never], object]) -> Failure[E]:  # noqa: ARG002
        return self

    def map_err[F: (str, int)](
        self, f: Callable[[Failure[E]], F | ErrorInfo | Failure[F]]
    ) -> Failure[F]:
        """Map this failure to a new one.

        ``f`` may return a bare error kind (the message resets to the
        default), an ``ErrorInfo`` mapping, or a ``Failure``.
        """
        mapped = f(self)
        if isinstance(mapped, Failure):
            return mapped
        if isinstance(mapped, Mapping):
            return Failure(mapped.get("message"), mapped.get("error_type"))
        return Failure(None, mapped)  # type: ignore[arg-type]

    def and_then(self, f: Callable[[Never], object]) -> Failure[E]:  # noqa: ARG002
        return self

    def or_else[U, F: (str, int)](
        self, f: Callable[[Failure[E]], Result[U, F]]
    ) -> Result[U, F]:
        """Attempt recovery: return whatever ``f`` produces for this failure."""
        return f(self)

    def inspect(self, f: Callable[[Never], object]) -> Failure[E]:  # noqa: ARG002
        return self

    def inspect_err(self, f: Callable[[Failure[E]], object]) -> Failure[E]:
        """Call ``f`` with this failure for its side effect; return self."""
        f(self)
        return self


type Result[T, E: (str, int)] = Success[T] | Failure[E]

# Rust-flavoured aliases
Ok = Success
Err = Failure


def is_success[T](result: Result[T, Any]) -> TypeIs[Success[T]]:
    """Return True when ``result`` is a ``Success``."""
    return isinstance(result, Success)


def is_failure[E: (str, int)](result: Result[Any, E]) -> TypeIs[Failure[E]]:
    """Return True when ``result`` is a ``Failure``."""
    return isinstance(result, Failure)


is_ok = is_success
is_err = is_failure
