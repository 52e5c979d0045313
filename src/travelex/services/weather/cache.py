"""Time-bounded forecast cache and its periodic sweeper."""

from __future__ import annotations

import asyncio
import logging
import time
from functools import lru_cache
from typing import Callable, Optional, Protocol

from ...config import settings
from ...models.domain import WeatherAssessment

logger = logging.getLogger(__name__)


def make_cache_key(lat: float, lng: float, date: str | None) -> str:
    return f"{lat:.4f},{lng:.4f},{date or 'current'}"


class ForecastCache(Protocol):
    def get(self, key: str) -> Optional[WeatherAssessment]: ...

    def set(self, key: str, value: WeatherAssessment) -> None: ...

    def sweep(self) -> int: ...


class InMemoryForecastCache:
    """Process-local cache. Entries are fresh while ``age < ttl``.

    ``get`` never deletes; stale entries stay until ``sweep`` runs or a fresh
    value overwrites them.
    """

    def __init__(self, ttl_seconds: float | None = None, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.weather_cache_ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, WeatherAssessment]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[WeatherAssessment]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at < self.ttl_seconds:
            return value
        return None

    def set(self, key: str, value: WeatherAssessment) -> None:
        self._entries[key] = (self._clock(), value)

    def sweep(self) -> int:
        now = self._clock()
        expired = [key for key, (stored_at, _) in self._entries.items() if now - stored_at > self.ttl_seconds]
        for key in expired:
            self._entries.pop(key, None)
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()


@lru_cache()
def get_forecast_cache() -> InMemoryForecastCache:
    """Process-wide cache, created on first use."""
    return InMemoryForecastCache()


class CacheSweeper:
    """Runs ``cache.sweep()`` on a fixed interval as an asyncio task."""

    def __init__(self, cache: ForecastCache, interval_seconds: float | None = None) -> None:
        self.cache = cache
        self.interval_seconds = (
            interval_seconds if interval_seconds is not None else settings.weather_cache_sweep_interval_seconds
        )
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            evicted = self.cache.sweep()
            if evicted:
                logger.info(f"Evicted {evicted} expired forecast cache entries")

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
