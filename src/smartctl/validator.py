# src/smartctl/validator.py - v1
"""Decide whether a smartctl reading is usable.

Two independent checks, both must pass:

1. ``smartctl.exit_status`` bitmask. Bits 0 and 1 mean smartctl could not
   talk to the device at all and are fatal. Bits 2-7 report disk health
   problems; the reading is still valid data, so they are only logged.
2. ``smartctl.messages``. Any message with severity ``"error"`` rejects
   the reading, whatever the exit status says.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Literal

from smartprobe.core.document import Document
from smartprobe.core.exceptions import ReadingRejectedError

logger = logging.getLogger(__name__)

EXIT_STATUS_PATH = "smartctl.exit_status"
MESSAGES_PATH = "smartctl.messages"


@dataclass(frozen=True)
class ExitStatusBit:
    """Meaning of one bit of the smartctl exit status."""

    bit: int
    severity: Literal["fatal", "advisory"]
    message: str

    @property
    def mask(self) -> int:
        return 1 << self.bit


EXIT_STATUS_BITS: tuple[ExitStatusBit, ...] = (
    ExitStatusBit(0, "fatal", "Command line did not parse."),
    ExitStatusBit(
        1, "fatal",
        "Device open failed, device did not return an IDENTIFY DEVICE structure, "
        "or device is in a low-power mode",
    ),
    ExitStatusBit(
        2, "advisory",
        "Some SMART or other ATA command to the disk failed, "
        "or there was a checksum error in a SMART data structure",
    ),
    ExitStatusBit(3, "advisory", "SMART status check returned 'DISK FAILING'."),
    ExitStatusBit(4, "advisory", "We found prefail Attributes <= threshold."),
    ExitStatusBit(
        5, "advisory",
        "SMART status check returned 'DISK OK' but we found that some (usage or "
        "prefail) Attributes have been <= threshold at some time in the past.",
    ),
    ExitStatusBit(6, "advisory", "The device error log contains records of errors."),
    ExitStatusBit(
        7, "advisory",
        "The device self-test log contains records of errors. [ATA only] Failed "
        "self-tests outdated by a newer successful extended self-test are ignored.",
    ),
)


def fatal_bits() -> frozenset[int]:
    return frozenset(b.bit for b in EXIT_STATUS_BITS if b.severity == "fatal")


def set_bits(status: int) -> list[ExitStatusBit]:
    """Table rows whose bit is set in ``status``."""
    return [b for b in EXIT_STATUS_BITS if status & b.mask]


def exit_status_ok(status: int) -> bool:
    """Interpret a smartctl exit status, logging every set bit."""
    if status <= 0:
        return True
    ok = True
    for row in set_bits(status):
        if row.severity == "fatal":
            logger.error(row.message)
            ok = False
        else:
            logger.warning(row.message)
    return ok


def _messages(reading: Document) -> Iterator[dict[str, Any]]:
    messages = reading.get(MESSAGES_PATH)
    if not isinstance(messages, list):
        return
    for message in messages:
        if isinstance(message, dict):
            yield message


def first_error_message(reading: Document) -> dict[str, Any] | None:
    """First embedded message with severity "error", or None."""
    found = next(
        (m for m in _messages(reading) if m.get("severity") == "error"), None
    )
    if found is not None:
        logger.error(str(found.get("string", "")))
    return found


def validate_reading(device_id: str, reading: Document) -> None:
    """Raise ReadingRejectedError unless ``reading`` passes both checks."""
    reasons: list[str] = []

    status = reading.get_int(EXIT_STATUS_PATH)
    if not reading.exists(EXIT_STATUS_PATH):
        # Empty or truncated output: smartctl never reported on the device.
        reasons.append("no smartctl exit status in output")
    elif not exit_status_ok(status):
        fatal = [b.message for b in set_bits(status) if b.severity == "fatal"]
        reasons.append(f"exit status {status}: " + " ".join(fatal))

    error = first_error_message(reading)
    if error is not None:
        reasons.append(f"smartctl error message: {error.get('string', '')}")

    if reasons:
        raise ReadingRejectedError(device_id, reasons)
