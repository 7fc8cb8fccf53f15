# src/core/exceptions.py - v1
"""Exceptions raised to callers of the reading cache."""

from __future__ import annotations


class SmartProbeError(Exception):
    """Base class for smartprobe errors."""


class ReadingRejectedError(SmartProbeError):
    """smartctl output for a device failed validation.

    Causes: a fatal exit-status bit (0 or 1), an embedded message with
    severity "error", or output with no ``smartctl.exit_status`` at all
    (smartctl could not be started or printed no JSON). The last case is
    rejected rather than read as status 0, so an empty reading is never
    cached.

    Raised instead of returning a reading; the cached entry for the device
    is left as it was.
    """

    def __init__(self, device_id: str, reasons: list[str]):
        self.device_id = device_id
        self.reasons = list(reasons)
        detail = "; ".join(self.reasons) if self.reasons else "no reason given"
        super().__init__(
            f"smartctl returned bad data for device {device_id}: {detail}"
        )
