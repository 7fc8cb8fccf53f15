# src/smartctl/invoker.py - v1
"""Run smartctl for one device, or for device discovery.

Exit codes are not judged here: a non-zero code is logged and stdout is
handed on, the validator decides what the reading is worth.
"""

from __future__ import annotations

import logging
import subprocess

from smartprobe.core.document import Document, empty_document, normalize

logger = logging.getLogger(__name__)

DEVICE_ARGS: tuple[str, ...] = (
    "--json",
    "--info",
    "--health",
    "--attributes",
    "--tolerance=verypermissive",
    "--nocheck=standby",
    "--format=brief",
)
SCAN_ARGS: tuple[str, ...] = ("--json", "--scan")

# smartctl --scan exits 2 when devices are present but asleep.
SCAN_SLEEPING_EXIT_CODE = 2


class SmartctlInvoker:
    """Blocking smartctl subprocess calls. No timeout is applied."""

    def __init__(self, smartctl_path: str = "smartctl") -> None:
        self._smartctl_path = smartctl_path

    @property
    def smartctl_path(self) -> str:
        return self._smartctl_path

    def device_command(self, device_id: str) -> list[str]:
        return [self._smartctl_path, *DEVICE_ARGS, device_id]

    def scan_command(self) -> list[str]:
        return [self._smartctl_path, *SCAN_ARGS]

    def invoke(self, device_id: str) -> str:
        """Run smartctl for ``device_id`` and return its stdout.

        Returns an empty string when the process cannot be started.
        """
        logger.debug("Collecting S.M.A.R.T. counters for %s", device_id)
        completed = self._run(self.device_command(device_id))
        if completed is None:
            return ""
        if completed.returncode != 0:
            logger.warning(
                "S.M.A.R.T. output reading for %s: smartctl exited with status %d",
                device_id, completed.returncode,
            )
        return completed.stdout

    def read(self, device_id: str) -> Document:
        """``invoke`` followed by ``normalize``."""
        return normalize(self.invoke(device_id))

    def scan(self) -> Document:
        """Run ``smartctl --json --scan``; not cached, not validated."""
        logger.debug("Scanning for devices")
        completed = self._run(self.scan_command())
        if completed is None:
            return empty_document()
        if completed.returncode != 0:
            logger.debug("Exit Status: %d", completed.returncode)
            if completed.returncode != SCAN_SLEEPING_EXIT_CODE:
                logger.warning(
                    "S.M.A.R.T. output reading error: smartctl --scan exited with status %d",
                    completed.returncode,
                )
                return empty_document()
        return normalize(completed.stdout)

    def _run(self, command: list[str]) -> subprocess.CompletedProcess[str] | None:
        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            logger.warning("Could not run %s: %s", command[0], e)
            return None
        if completed.stderr:
            logger.debug("smartctl stderr: %s", completed.stderr.strip())
        return completed
