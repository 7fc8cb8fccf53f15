# src/cache/reading_cache.py - v1
"""Per-device reading cache with a freshness window.

Per device: absent -> fresh -> stale -> fresh again on a successful
refresh. A failed refresh raises and leaves the stored entry (or its
absence) exactly as it was. Staleness is only evaluated when a device is
asked for; nothing expires in the background.

In fixture mode the cache is bypassed: readings come straight from the
fixture directory, unvalidated and never stored.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

from smartprobe.cache.base_cache_store import BaseReadingStore
from smartprobe.cache.memory_store import InMemoryReadingStore
from smartprobe.cache.models import CacheEntry
from smartprobe.core.document import Document
from smartprobe.logging.context import device_context
from smartprobe.smartctl.fixtures import FixtureReader
from smartprobe.smartctl.invoker import SmartctlInvoker
from smartprobe.smartctl.validator import validate_reading

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = timedelta(seconds=60)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReadingCache:
    """Serve validated smartctl readings, re-probing only when stale.

    Create one per process and pass it to every caller. Thread-safe: each
    device has its own lock, held while its entry is checked, refreshed
    and stored, so callers for the same stale device wait for a single
    smartctl run instead of starting their own. Different devices never
    wait on each other.
    """

    def __init__(
        self,
        invoker: SmartctlInvoker,
        fixture_reader: FixtureReader | None = None,
        store: BaseReadingStore | None = None,
        window: timedelta = DEFAULT_WINDOW,
        use_fixtures: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if use_fixtures and fixture_reader is None:
            raise ValueError("use_fixtures requires a fixture_reader")
        self._invoker = invoker
        self._fixture_reader = fixture_reader
        self._store = store if store is not None else InMemoryReadingStore()
        self._window = window
        self._use_fixtures = use_fixtures
        self._clock = clock
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def window(self) -> timedelta:
        return self._window

    @property
    def use_fixtures(self) -> bool:
        return self._use_fixtures

    def get(self, device_id: str) -> Document:
        """Current reading for ``device_id``.

        Raises:
            ReadingRejectedError: smartctl output failed validation.
        """
        if self._use_fixtures:
            with device_context(device_id, "fixture"):
                return self._fixture_reader.read(device_id)  # type: ignore[union-attr]

        with self._lock_for(device_id), device_context(device_id, "smartctl"):
            entry = self._store.get(device_id)
            if entry is not None and entry.is_fresh(self._clock(), self._window):
                return entry.reading

            reading = self._invoker.read(device_id)
            validate_reading(device_id, reading)

            self._store.put(
                CacheEntry(device_id=device_id, reading=reading, captured_at=self._clock())
            )
            return reading

    def entry(self, device_id: str) -> CacheEntry | None:
        """Stored entry for a device, fresh or not."""
        return self._store.get(device_id)

    def is_fresh(self, device_id: str) -> bool:
        entry = self._store.get(device_id)
        return entry is not None and entry.is_fresh(self._clock(), self._window)

    def devices(self) -> list[str]:
        return [e.device_id for e in self._store.list_entries()]

    def invalidate(self, device_id: str) -> None:
        """Drop a device's entry so the next ``get`` re-probes it."""
        with self._lock_for(device_id):
            self._store.delete(device_id)

    def clear(self) -> None:
        """Drop every entry and the per-device locks."""
        with self._locks_guard:
            self._store.clear()
            self._locks.clear()

    def _lock_for(self, device_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(device_id)
            if lock is None:
                lock = self._locks[device_id] = threading.Lock()
            return lock
