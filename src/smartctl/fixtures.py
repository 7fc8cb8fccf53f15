# src/smartctl/fixtures.py - v1
"""Canned smartctl JSON read from disk instead of running the tool.

``/dev/sda`` maps to ``<fixture_dir>/sda.json``. Reads are never cached.
"""

from __future__ import annotations

import logging
from pathlib import Path

from smartprobe.core.document import Document, empty_document, normalize

logger = logging.getLogger(__name__)

DEFAULT_FIXTURE_DIR = Path("debug")


def fixture_name(device_id: str) -> str:
    """Last path segment of a device identifier."""
    return device_id.split("/")[-1]


class FixtureReader:
    """Load recorded readings from a directory of ``<name>.json`` files."""

    def __init__(self, fixture_dir: Path | str = DEFAULT_FIXTURE_DIR) -> None:
        self._root = Path(fixture_dir)

    @property
    def fixture_dir(self) -> Path:
        return self._root

    def fixture_path(self, device_id: str) -> Path:
        return self._root / f"{fixture_name(device_id)}.json"

    def read(self, device_id: str) -> Document:
        """Return the fixture for ``device_id``, or the empty document."""
        path = self.fixture_path(device_id)
        logger.debug("Read fake S.M.A.R.T. data from json: %s", path)
        try:
            content = path.read_bytes()
        except OSError as e:
            logger.error("Fake S.M.A.R.T. data reading error for %s: %s", device_id, e)
            return empty_document()
        return normalize(content)
