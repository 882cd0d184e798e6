"""Shared fixtures for the size_timeouts test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from size_timeouts.policy import TimeoutPolicy

if TYPE_CHECKING:
    from collections.abc import Generator

pytest_plugins = ["pytester"]


class RecordingEnforcer:
    """Enforcer double that records every wrap request instead of enforcing it."""

    def __init__(self) -> None:
        self.calls: list[tuple[float, bool, Any]] = []

    def wrap(self, seconds: float, lookup_stuck_thread: bool, body: Any) -> Any:
        self.calls.append((seconds, lookup_stuck_thread, body))
        return ("wrapped", body)


@pytest.fixture(autouse=True)
def clean_size_timeout_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for suffix in ("SMALL", "MEDIUM", "LARGE", "SCALE"):
        monkeypatch.delenv(f"SIZE_TIMEOUTS_{suffix}", raising=False)
    yield


@pytest.fixture
def timeout_policy() -> TimeoutPolicy:
    return TimeoutPolicy()


@pytest.fixture
def recording_enforcer() -> RecordingEnforcer:
    return RecordingEnforcer()


@pytest.fixture
def loguru_messages() -> Generator[list[str], None, None]:
    from loguru import logger

    messages: list[str] = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    yield messages
    logger.remove(handler_id)
