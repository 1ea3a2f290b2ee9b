"""Retry policy resolution from explicit values, environment, and defaults.

Precedence (highest first):
1. Keyword arguments passed to ``resolve_retry_policy``
2. Environment variables (``BOXED_RETRY_INTERVAL_MS``, ``BOXED_RETRY_TIMEOUT_MS``),
   including values from a project ``.env`` file
3. ``RetrySettings`` defaults

All values pass through the ``RetrySettings`` schema before a frozen
``RetryPolicy`` is built.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Final

from pydantic import BaseModel, Field, ValidationError

from boxed.errors import ConfigurationError
from boxed.retry import DEFAULT_INTERVAL_MS, DEFAULT_TIMEOUT_MS, RetryPolicy

__all__ = ["ENV_INTERVAL_MS", "ENV_TIMEOUT_MS", "RetrySettings", "resolve_retry_policy"]

logger = logging.getLogger(__name__)

ENV_INTERVAL_MS: Final = "BOXED_RETRY_INTERVAL_MS"
ENV_TIMEOUT_MS: Final = "BOXED_RETRY_TIMEOUT_MS"

_ENV_KEYS: Final[dict[str, str]] = {
    "interval_ms": ENV_INTERVAL_MS,
    "timeout_ms": ENV_TIMEOUT_MS,
}

_DOTENV_LOADED: bool = False


class RetrySettings(BaseModel):
    """Schema for retry timing, in milliseconds."""

    interval_ms: int = Field(default=DEFAULT_INTERVAL_MS, ge=0)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=0)

    model_config = {"extra": "forbid", "frozen": True}

    def to_policy(self) -> RetryPolicy:
        return RetryPolicy(interval_ms=self.interval_ms, timeout_ms=self.timeout_ms)


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    from dotenv import load_dotenv

    load_dotenv()
    _DOTENV_LOADED = True


def _env_values() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field_name, env_key in _ENV_KEYS.items():
        raw = os.environ.get(env_key)
        if raw is not None and raw.strip():
            values[field_name] = raw.strip()
    return values


def resolve_retry_policy(
    *, interval_ms: int | None = None, timeout_ms: int | None = None
) -> RetryPolicy:
    """Resolve a ``RetryPolicy`` from arguments, environment, and defaults.

    Raises:
        ConfigurationError: If a resolved value is not a non-negative integer.

    Example:
        retry = retry_on_failure(resolve_retry_policy(timeout_ms=30_000))
    """
    _load_dotenv_once()

    merged = _env_values()
    overrides = {"interval_ms": interval_ms, "timeout_ms": timeout_ms}
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        settings = RetrySettings.model_validate(merged)
    except ValidationError as exc:
        first = exc.errors()[0]
        field_name = str(first["loc"][0]) if first.get("loc") else "unknown"
        env_key = _ENV_KEYS.get(field_name)
        hint = (
            f"Pass {field_name}=... or set {env_key} to a non-negative integer."
            if env_key
            else None
        )
        raise ConfigurationError(
            f"Invalid retry setting {field_name!r}: {first['msg']}", hint=hint
        ) from exc

    logger.debug(
        "Resolved retry policy: interval_ms=%s timeout_ms=%s",
        settings.interval_ms,
        settings.timeout_ms,
    )
    return settings.to_policy()
