from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for log directories, simulated clocks and logging cores.
"""

import os
import sys
import uuid
from datetime import date
from typing import Callable, Iterator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from splitlog.infra.logging import LoggingCore  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
class FakeClock:
    """Callable returning a settable calendar date."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock() -> FakeClock:
    """A simulated clock pinned to 2024-03-07."""
    return FakeClock(date(2024, 3, 7))


@pytest.fixture
def log_dir(tmp_path) -> str:
    """Isolated base directory for the log tree."""
    base = tmp_path / "app"
    base.mkdir()
    return str(base)


@pytest.fixture
def make_core() -> Iterator[Callable[..., LoggingCore]]:
    """
    Factory for logging cores with unique logger names.

    Every core created through the factory is shut down after the test.
    """
    created: List[LoggingCore] = []

    def _make(**kwargs) -> LoggingCore:
        kwargs.setdefault("name", f"splitlog-test-{uuid.uuid4().hex[:8]}")
        core = LoggingCore(**kwargs)
        created.append(core)
        return core

    yield _make

    for core in created:
        core.shutdown()
