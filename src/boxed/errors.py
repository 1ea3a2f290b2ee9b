"""Exception hierarchy for boxed."""

from __future__ import annotations


class BoxedError(Exception):
    """Base exception for all boxed errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(BoxedError):
    """Retry configuration validation or resolution failed."""


class UnwrapError(BoxedError):
    """Strict extraction was attempted on a Failure.

    This signals a programmer error rather than a recoverable condition.
    The original failure's kind and message are kept for diagnosis.
    """

    def __init__(
        self,
        message: str,
        *,
        error_type: str | int,
        failure_message: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.error_type = error_type
        self.failure_message = failure_message
