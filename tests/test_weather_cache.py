import asyncio

import pytest

from travelex.models.domain import WeatherAssessment, WeatherSources
from travelex.services.weather.cache import CacheSweeper, InMemoryForecastCache, make_cache_key


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _assessment(summary: str = "Clear sky") -> WeatherAssessment:
    return WeatherAssessment(
        is_hazardous=False,
        summary=summary,
        temperature=20.0,
        target_date="2024-05-01",
        source=WeatherSources(open_meteo=True, weather_api=False),
        timestamp="2024-05-01T00:00:00+00:00",
    )


def test_cache_key_rounds_to_four_decimals():
    assert make_cache_key(37.123449, -122.56781, "2024-05-01") == "37.1234,-122.5678,2024-05-01"
    assert make_cache_key(1, 2, None) == "1.0000,2.0000,current"


def test_entry_is_fresh_until_ttl():
    clock = FakeClock()
    cache = InMemoryForecastCache(ttl_seconds=900, clock=clock)
    cache.set("k", _assessment())

    clock.now += 899
    assert cache.get("k") is not None

    clock.now += 1
    assert cache.get("k") is None
    # Stale entries stay until swept or overwritten.
    assert len(cache) == 1


def test_overwrite_refreshes_entry():
    clock = FakeClock()
    cache = InMemoryForecastCache(ttl_seconds=900, clock=clock)
    cache.set("k", _assessment("old"))
    clock.now += 1000
    cache.set("k", _assessment("new"))

    assert cache.get("k").summary == "new"


def test_sweep_evicts_only_expired_entries():
    clock = FakeClock()
    cache = InMemoryForecastCache(ttl_seconds=900, clock=clock)
    cache.set("old", _assessment())
    clock.now += 600
    cache.set("recent", _assessment())
    clock.now += 400

    assert cache.sweep() == 1
    assert len(cache) == 1
    assert cache.get("recent") is not None


@pytest.mark.asyncio
async def test_sweeper_runs_periodically_and_stops():
    clock = FakeClock()
    cache = InMemoryForecastCache(ttl_seconds=10, clock=clock)
    cache.set("k", _assessment())
    clock.now += 11

    sweeper = CacheSweeper(cache, interval_seconds=0.01)
    sweeper.start()
    assert sweeper.running
    await asyncio.sleep(0.05)
    await sweeper.stop()

    assert len(cache) == 0
    assert not sweeper.running
