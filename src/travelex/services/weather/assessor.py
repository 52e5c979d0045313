"""Weather assessment: fan out to both providers, merge, cache."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Awaitable, Optional

from ...config import settings
from ...models.domain import WeatherAssessment, WeatherSources
from .cache import ForecastCache, get_forecast_cache, make_cache_key
from .hazards import HazardReport, apply_open_meteo, apply_weather_api
from .providers import OpenMeteoClient, WeatherApiClient

logger = logging.getLogger(__name__)


class WeatherUnavailableError(RuntimeError):
    """Raised when no provider returned usable data."""


def assess_weather(
    open_meteo_data: Optional[dict[str, Any]],
    weather_api_data: Optional[dict[str, Any]],
    target_date: Optional[str],
) -> WeatherAssessment:
    """Merge provider payloads into one hazard verdict. Either payload may be ``None``."""
    report = HazardReport()
    if open_meteo_data:
        apply_open_meteo(report, open_meteo_data, target_date)
    if weather_api_data:
        apply_weather_api(report, weather_api_data, target_date)

    now = datetime.now(timezone.utc)
    return WeatherAssessment(
        is_hazardous=report.is_hazardous,
        hazard_details=report.details,
        summary=report.summary,
        temperature=report.temperature,
        target_date=target_date or now.date().isoformat(),
        source=WeatherSources(open_meteo=bool(open_meteo_data), weather_api=bool(weather_api_data)),
        timestamp=now.isoformat(),
    )


class WeatherAssessor:
    def __init__(
        self,
        open_meteo: OpenMeteoClient | None = None,
        weather_api: WeatherApiClient | None = None,
        cache: ForecastCache | None = None,
        timeout: float | None = None,
    ) -> None:
        self.open_meteo = open_meteo or OpenMeteoClient()
        self.weather_api = weather_api or WeatherApiClient()
        self.cache = cache if cache is not None else get_forecast_cache()
        self.timeout = timeout if timeout is not None else settings.weather_timeout_seconds

    async def _settle(self, name: str, call: Awaitable[Optional[dict[str, Any]]]) -> Optional[dict[str, Any]]:
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{name} forecast timed out after {self.timeout}s")
        except Exception as exc:
            logger.warning(f"{name} forecast failed: {exc}")
        return None

    async def get_forecast(self, lat: float, lng: float, date: str | None = None) -> WeatherAssessment:
        """Return the hazard verdict for a coordinate and optional ``YYYY-MM-DD`` date.

        Served from cache while fresh. Otherwise both providers are queried
        concurrently; one failing is tolerated, both failing raises
        ``WeatherUnavailableError``.
        """
        key = make_cache_key(lat, lng, date)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        open_meteo_data, weather_api_data = await asyncio.gather(
            self._settle("Open-Meteo", self.open_meteo.fetch(lat, lng)),
            self._settle("WeatherAPI", self.weather_api.fetch(lat, lng, date)),
        )
        if not open_meteo_data and not weather_api_data:
            logger.error(f"All weather providers failed for {key}")
            raise WeatherUnavailableError("All weather providers failed")

        assessment = assess_weather(open_meteo_data, weather_api_data, date)
        self.cache.set(key, assessment)
        return assessment


@lru_cache()
def get_weather_assessor() -> WeatherAssessor:
    return WeatherAssessor()
