"""boxed: explicit success/failure results and time-boxed retries.

Public API:
    - Success / Failure: the two result variants (aliases Ok / Err)
    - is_success() / is_failure(): narrowing predicates
    - consume_or_raise(), consume_or_none(), consume_or_else(), consume_all()
    - retry_on_failure() / retry_or_raise(): retry invoker factories
    - RetryPolicy / resolve_retry_policy(): retry timing
"""

from __future__ import annotations

import logging

from boxed.config import RetrySettings, resolve_retry_policy
from boxed.consume import (
    consume_all,
    consume_or_else,
    consume_or_none,
    consume_or_raise,
)
from boxed.errors import BoxedError, ConfigurationError, UnwrapError
from boxed.result import (
    DEFAULT_ERROR_TYPE,
    DEFAULT_MESSAGE,
    Err,
    ErrorInfo,
    Failure,
    Ok,
    Result,
    Success,
    is_err,
    is_failure,
    is_ok,
    is_success,
)
from boxed.retry import (
    TIMEOUT_ERROR,
    RetryPolicy,
    consume_until_success,
    retry_on_failure,
    retry_or_raise,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("boxed")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("boxed").addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_ERROR_TYPE",
    "DEFAULT_MESSAGE",
    "TIMEOUT_ERROR",
    "BoxedError",
    "ConfigurationError",
    "Err",
    "ErrorInfo",
    "Failure",
    "Ok",
    "Result",
    "RetryPolicy",
    "RetrySettings",
    "Success",
    "UnwrapError",
    "consume_all",
    "consume_or_else",
    "consume_or_none",
    "consume_or_raise",
    "consume_until_success",
    "is_err",
    "is_failure",
    "is_ok",
    "is_success",
    "resolve_retry_policy",
    "retry_on_failure",
    "retry_or_raise",
]
