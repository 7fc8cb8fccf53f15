# src/cache/base_cache_store.py - v1
"""Abstract store for per-device cache entries."""

from __future__ import annotations

from abc import ABC, abstractmethod

from smartprobe.cache.models import CacheEntry


class BaseReadingStore(ABC):
    """Keyed by device identifier; at most one entry per key."""

    @abstractmethod
    def get(self, device_id: str) -> CacheEntry | None:
        """Retrieve the entry for a device."""

    @abstractmethod
    def put(self, entry: CacheEntry) -> None:
        """Store an entry, replacing any previous one for the same device."""

    @abstractmethod
    def delete(self, device_id: str) -> None:
        """Remove the entry for a device, if any."""

    @abstractmethod
    def list_entries(self) -> list[CacheEntry]:
        """All stored entries."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""
