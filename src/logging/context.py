# src/logging/context.py - v1
"""Contextual logging support: attach the device being probed to log records."""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

# Set per acquisition; each worker thread or task sees its own value.
_device: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "device", default=None
)
_source: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "source", default=None
)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    device: str | None = None
    source: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(device=_device.get(), source=_source.get())


def set_device_context(device: str, source: str | None = None) -> None:
    """Set the device (and optionally "smartctl" or "fixture") being read."""
    _device.set(device)
    _source.set(source)


def clear_context() -> None:
    """Reset all context variables."""
    _device.set(None)
    _source.set(None)


@contextmanager
def device_context(device: str, source: str | None = None) -> Iterator[None]:
    """Scope the device context to a block, restoring the previous values."""
    device_token = _device.set(device)
    source_token = _source.set(source)
    try:
        yield
    finally:
        _source.reset(source_token)
        _device.reset(device_token)
