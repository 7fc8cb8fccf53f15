# src/api/collector.py - v1
"""Collect readings for many devices at once.

Usage:
    cache = create_reading_cache(settings)
    devices = discover_devices(SmartctlInvoker(settings.smartctl_path))
    result = await collect_readings(cache, devices, settings=settings)

Each device is read in a worker thread through ``ReadingCache.get``; one
device being rejected never affects the others.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from smartprobe.core.document import Document
from smartprobe.core.exceptions import SmartProbeError

if TYPE_CHECKING:
    from smartprobe.cache.reading_cache import ReadingCache
    from smartprobe.config.settings import Settings
    from smartprobe.smartctl.invoker import SmartctlInvoker

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 4


class CollectionResult(BaseModel):
    """Readings and errors from one collection pass, keyed by device."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    readings: dict[str, Document] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.errors


def discover_devices(invoker: SmartctlInvoker) -> list[str]:
    """Device names reported by ``smartctl --scan``, in scan order."""
    devices = invoker.scan().get("devices", [])
    if not isinstance(devices, list):
        return []
    names: list[str] = []
    for device in devices:
        name = device.get("name") if isinstance(device, dict) else None
        if isinstance(name, str) and name:
            names.append(name)
    return names


async def collect_readings(
    cache: ReadingCache,
    devices: list[str],
    max_concurrency: int | None = None,
    settings: Settings | None = None,
) -> CollectionResult:
    """Read every device through the cache, at most ``max_concurrency`` at once.

    ``max_concurrency`` defaults to ``settings.collect_max_concurrency``, or
    DEFAULT_MAX_CONCURRENCY without settings. Duplicate device names are
    read once. A failure of any kind on one device is recorded in
    ``errors`` and never stops the others.
    """
    if max_concurrency is None:
        max_concurrency = (
            settings.collect_max_concurrency
            if settings is not None
            else DEFAULT_MAX_CONCURRENCY
        )
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be >= 1")

    start = time.monotonic()
    semaphore = asyncio.Semaphore(max_concurrency)
    unique = list(dict.fromkeys(devices))

    async def _read(device_id: str) -> tuple[str, Document | None, str | None]:
        async with semaphore:
            try:
                reading = await asyncio.to_thread(cache.get, device_id)
            except SmartProbeError as e:
                logger.warning("Collection failed for %s: %s", device_id, e)
                return device_id, None, str(e)
            except Exception as e:
                logger.exception("Unexpected error collecting %s", device_id)
                return device_id, None, f"{type(e).__name__}: {e}"
            return device_id, reading, None

    outcomes = await asyncio.gather(*(_read(d) for d in unique))

    result = CollectionResult()
    for device_id, reading, error in outcomes:
        if error is not None:
            result.errors[device_id] = error
        else:
            result.readings[device_id] = reading  # type: ignore[assignment]
    result.duration_seconds = time.monotonic() - start

    logger.info(
        "Collected %d device(s), %d error(s) in %.2fs",
        len(result.readings), len(result.errors), result.duration_seconds,
    )
    return result
