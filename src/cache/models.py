# src/cache/models.py - v1
"""Cache domain model: one validated reading per device."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict

from smartprobe.core.document import Document


class CacheEntry(BaseModel):
    """Last accepted reading for a device and when it was captured."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    device_id: str
    reading: Document
    captured_at: datetime

    def expires_at(self, window: timedelta) -> datetime:
        return self.captured_at + window

    def is_fresh(self, now: datetime, window: timedelta) -> bool:
        """Fresh while ``now <= captured_at + window``."""
        return now <= self.expires_at(window)
