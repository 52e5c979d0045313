"""HTTP clients for the Open-Meteo and WeatherAPI.com forecast services."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...config import settings

logger = logging.getLogger(__name__)

OPEN_METEO_CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,is_day,precipitation,weather_code,wind_speed_10m"
OPEN_METEO_DAILY_FIELDS = (
    "weather_code,temperature_2m_max,temperature_2m_min,precipitation_sum,"
    "precipitation_probability_max,wind_speed_10m_max"
)


class _ForecastClient:
    """Shared request plumbing; uses an injected client or a short-lived one per call."""

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float | None = None) -> None:
        self._client = client
        self.timeout = timeout if timeout is not None else settings.weather_timeout_seconds

    async def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        if self._client is not None:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            return response.json()

        async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout, connect=5.0)) as client:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()


class OpenMeteoClient(_ForecastClient):
    """Multi-day numeric forecast plus a current-conditions snapshot."""

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        forecast_days: int | None = None,
    ) -> None:
        super().__init__(client=client, timeout=timeout)
        self.base_url = (base_url or settings.open_meteo_base_url).rstrip("/")
        self.forecast_days = forecast_days or settings.weather_forecast_days

    async def fetch(self, lat: float, lng: float) -> dict[str, Any]:
        params = {
            "latitude": lat,
            "longitude": lng,
            "current": OPEN_METEO_CURRENT_FIELDS,
            "daily": OPEN_METEO_DAILY_FIELDS,
            "timezone": "auto",
            "forecast_days": self.forecast_days,
        }
        data = await self._get_json(f"{self.base_url}/v1/forecast", params)
        if "daily" not in data and "current" not in data:
            raise ValueError("Open-Meteo response missing daily/current data.")
        return data


class WeatherApiClient(_ForecastClient):
    """Short forecast with official alerts. Needs an API key."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(client=client, timeout=timeout)
        self.api_key = api_key if api_key is not None else settings.weather_api_key
        self.base_url = (base_url or settings.weather_api_base_url).rstrip("/")

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def fetch(self, lat: float, lng: float, date: str | None = None) -> dict[str, Any] | None:
        """Return the forecast payload, or ``None`` when no API key is configured."""
        if not self.configured:
            logger.debug("WeatherAPI key not configured; skipping provider")
            return None

        params: dict[str, Any] = {
            "key": self.api_key,
            "q": f"{lat},{lng}",
            "days": 1,
            "alerts": "yes",
            "aqi": "no",
        }
        if date:
            params["dt"] = date
        return await self._get_json(f"{self.base_url}/v1/forecast.json", params)
