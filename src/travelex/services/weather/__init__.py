"""Weather forecast and hazard assessment services."""

from .assessor import WeatherAssessor, WeatherUnavailableError, assess_weather, get_weather_assessor
from .cache import CacheSweeper, InMemoryForecastCache, get_forecast_cache, make_cache_key

__all__ = [
    "WeatherAssessor",
    "WeatherUnavailableError",
    "assess_weather",
    "get_weather_assessor",
    "CacheSweeper",
    "InMemoryForecastCache",
    "get_forecast_cache",
    "make_cache_key",
]
