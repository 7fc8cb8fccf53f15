# src/cache/memory_store.py - v1
"""Process-memory entry store, safe for concurrent threads."""

from __future__ import annotations

import threading

from smartprobe.cache.base_cache_store import BaseReadingStore
from smartprobe.cache.models import CacheEntry


class InMemoryReadingStore(BaseReadingStore):
    """Dict of device id to CacheEntry guarded by a lock."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, device_id: str) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(device_id)

    def put(self, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[entry.device_id] = entry

    def delete(self, device_id: str) -> None:
        with self._lock:
            self._entries.pop(device_id, None)

    def list_entries(self) -> list[CacheEntry]:
        with self._lock:
            return list(self._entries.values())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
