"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, and a virtual clock
for the retry scheduler. Fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os

import pytest

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class VirtualClock:
    """Deterministic stand-in for the scheduler's monotonic clock and sleep.

    Sleeping advances time instantly; ``advance()`` simulates work done by a
    producer between clock reads.
    """

    now: float = 0.0
    sleeps: list[float] = field(default_factory=list)

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def virtual_clock(monkeypatch: pytest.MonkeyPatch) -> VirtualClock:
    """Replace the retry module's time sources with a VirtualClock (opt-in)."""
    clock = VirtualClock()
    monkeypatch.setattr("boxed.retry._clock", clock.monotonic)
    monkeypatch.setattr("boxed.retry._sleep", clock.sleep)
    return clock


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests."""
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_boxed_env(monkeypatch):
    """Clear BOXED_* env vars to prevent test pollution."""
    for key in list(os.environ.keys()):
        if key.startswith("BOXED_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("asyncio").setLevel(logging.WARNING)
