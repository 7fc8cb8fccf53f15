# src/cache/cache_factory.py - v1
"""Build the process-wide ReadingCache from Settings."""

from __future__ import annotations

from smartprobe.cache.memory_store import InMemoryReadingStore
from smartprobe.cache.reading_cache import ReadingCache
from smartprobe.config.settings import Settings
from smartprobe.smartctl.fixtures import FixtureReader
from smartprobe.smartctl.invoker import SmartctlInvoker


def create_reading_cache(settings: Settings | None = None) -> ReadingCache:
    """Instantiate the reading cache and its collaborators.

    Args:
        settings: Application settings. Loaded from the environment if None.

    Returns:
        ReadingCache backed by an in-memory store.
    """
    settings = settings or Settings()
    return ReadingCache(
        invoker=SmartctlInvoker(settings.smartctl_path),
        fixture_reader=FixtureReader(settings.smartctl_fixture_dir),
        store=InMemoryReadingStore(),
        window=settings.smartctl_interval,
        use_fixtures=settings.smartctl_fake_data,
    )
