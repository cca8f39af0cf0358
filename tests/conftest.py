"""
Pytest configuration and fixtures for the log router test suite.
"""

import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List

from log_router.core import logging as router_logging
from log_router.core.logging import LogRouter


FIXED_NOW = datetime(2024, 3, 5, 6, 7, 8, tzinfo=timezone.utc)


class SteppingClock:
    """Clock returning FIXED_NOW, advancing one second per call."""

    def __init__(self, start: datetime = FIXED_NOW):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


class RecordingTerminator:
    """Stands in for os._exit so fatal() can be observed."""

    def __init__(self):
        self.statuses: List[int] = []

    def __call__(self, status: int) -> None:
        self.statuses.append(status)


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def terminator() -> RecordingTerminator:
    return RecordingTerminator()


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Base directory for log files."""
    return tmp_path / "logs"


@pytest.fixture
def router(clock, terminator):
    """Uninitialized router with a deterministic clock and no real exit."""
    instance = LogRouter(clock=clock, terminate=terminator)
    yield instance
    instance.stop()


@pytest.fixture
def reset_default_router():
    """Drop the shared default router around a test."""
    router_logging._router_instance = None
    yield
    if router_logging._router_instance is not None:
        router_logging._router_instance.stop()
    router_logging._router_instance = None


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
