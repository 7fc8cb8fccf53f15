# tests/conftest.py - v1
"""Shared test fixtures for unit and integration tests.

Provides smartctl JSON builders, a controllable clock, a mock invoker and
a temporary fixture directory. No real smartctl is ever run.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest

from smartprobe.core.document import normalize
from smartprobe.smartctl.invoker import SmartctlInvoker


def smartctl_output(
    exit_status: int = 0,
    messages: list[dict[str, Any]] | None = None,
    **fields: Any,
) -> str:
    """Minimal smartctl --json output."""
    smartctl: dict[str, Any] = {"version": [7, 4], "exit_status": exit_status}
    if messages is not None:
        smartctl["messages"] = messages
    payload: dict[str, Any] = {"json_format_version": [1, 0], "smartctl": smartctl}
    payload.update(fields)
    return json.dumps(payload)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


# === FIXTURES: smartctl data ===


@pytest.fixture
def make_output() -> Callable[..., str]:
    return smartctl_output


@pytest.fixture
def healthy_output() -> str:
    return smartctl_output(
        exit_status=0,
        device={"name": "/dev/sda", "type": "sat", "protocol": "ATA"},
        smart_status={"passed": True},
    )


# === FIXTURES: collaborators ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def mock_invoker() -> MagicMock:
    """SmartctlInvoker double; set ``outputs[device]`` to control stdout."""
    invoker = MagicMock(spec=SmartctlInvoker)
    invoker.outputs = {}
    invoker.read.side_effect = lambda device: normalize(invoker.outputs.get(device, ""))
    return invoker


# === FIXTURES: Temp dirs ===


@pytest.fixture
def fixture_dir(tmp_path: Path) -> Path:
    """Temporary fixture directory holding sda.json."""
    root = tmp_path / "debug"
    root.mkdir()
    (root / "sda.json").write_text(
        smartctl_output(exit_status=0, device={"name": "/dev/sda"}), encoding="utf-8"
    )
    return root
