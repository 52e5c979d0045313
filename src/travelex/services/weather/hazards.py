"""Hazard classification for merged forecast data.

Thresholds are metric: degrees Celsius, km/h and millimetres, matching the
units both providers are queried in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

WIND_KMH = 60.0
PRECIP_DAILY_MM = 20.0
PRECIP_CURRENT_MM = 5.0
FREEZING_TEMP_C = 0.0
THUNDERSTORM_MIN_CODE = 95

UNKNOWN_SUMMARY = "Unknown"
NOT_AVAILABLE_SUMMARY = "Forecast not available for this date"
ALERT_PREFIX = "Alert: "

# WMO weather code groups, excluding thunderstorms which are matched by range.
WMO_HAZARD_GROUPS: tuple[tuple[str, frozenset[int]], ...] = (
    ("Heavy rain", frozenset({65, 82})),
    ("Heavy snow", frozenset({75, 77, 86})),
    ("Dense drizzle", frozenset({55})),
    ("Fog", frozenset({45, 48})),
    ("Moderate rain", frozenset({63, 81})),
    ("Moderate snow", frozenset({73, 85})),
)

WMO_DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def describe_wmo_code(code: Any) -> str:
    try:
        return WMO_DESCRIPTIONS.get(int(code), "Unknown weather")
    except (TypeError, ValueError):
        return "Unknown weather"


def _num(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _fmt(value: float) -> str:
    return f"{value:g}"


@dataclass(slots=True)
class HazardReport:
    """Accumulates hazard triggers in the order they are found."""

    summary: str = UNKNOWN_SUMMARY
    temperature: Optional[float] = None
    is_hazardous: bool = False
    details: list[str] = field(default_factory=list)

    def flag(self, detail: str) -> None:
        self.is_hazardous = True
        self.details.append(detail)

    @property
    def needs_summary(self) -> bool:
        return self.summary in (UNKNOWN_SUMMARY, NOT_AVAILABLE_SUMMARY)


def _check_conditions(
    report: HazardReport,
    *,
    code: Any,
    temperature: Optional[float],
    wind: Optional[float],
    precipitation: Optional[float],
    daily: bool,
) -> None:
    verb = "expected" if daily else "detected"
    weather_code = _num(code)

    if weather_code is not None and weather_code >= THUNDERSTORM_MIN_CODE:
        report.flag("Thunderstorms expected" if daily else "Thunderstorm detected")
    if weather_code is not None:
        for label, codes in WMO_HAZARD_GROUPS:
            if int(weather_code) in codes:
                report.flag(f"{label} {verb}")

    if wind is not None and wind > WIND_KMH:
        report.flag(f"High winds forecast ({_fmt(wind)} km/h)" if daily else f"High winds ({_fmt(wind)} km/h)")

    precip_limit = PRECIP_DAILY_MM if daily else PRECIP_CURRENT_MM
    if precipitation is not None and precipitation > precip_limit:
        if daily:
            report.flag(f"Heavy precipitation expected ({_fmt(precipitation)} mm)")
        else:
            report.flag("Heavy precipitation")

    if temperature is not None and temperature <= FREEZING_TEMP_C:
        if precipitation:
            report.flag("Freezing conditions with precipitation")
        else:
            report.flag("Freezing temperatures")


def _find_day_index(daily: dict[str, Any], target_date: str) -> int:
    try:
        return list(daily.get("time") or []).index(target_date)
    except ValueError:
        return -1


def _day_value(daily: dict[str, Any], key: str, index: int) -> Any:
    values = daily.get(key) or []
    return values[index] if index < len(values) else None


def apply_open_meteo(report: HazardReport, data: dict[str, Any], target_date: Optional[str]) -> None:
    """Evaluate the Open-Meteo day record for ``target_date``, or current conditions."""
    if target_date:
        daily = data.get("daily") or {}
        index = _find_day_index(daily, target_date)
        if index < 0:
            report.summary = NOT_AVAILABLE_SUMMARY
            return
        code = _day_value(daily, "weather_code", index)
        max_temp = _num(_day_value(daily, "temperature_2m_max", index))
        report.temperature = max_temp
        report.summary = describe_wmo_code(code)
        _check_conditions(
            report,
            code=code,
            temperature=max_temp,
            wind=_num(_day_value(daily, "wind_speed_10m_max", index)),
            precipitation=_num(_day_value(daily, "precipitation_sum", index)),
            daily=True,
        )
        return

    current = data.get("current")
    if not current:
        return
    temperature = _num(current.get("temperature_2m"))
    report.temperature = temperature
    report.summary = describe_wmo_code(current.get("weather_code"))
    _check_conditions(
        report,
        code=current.get("weather_code"),
        temperature=temperature,
        wind=_num(current.get("wind_speed_10m")),
        precipitation=_num(current.get("precipitation")),
        daily=False,
    )


def apply_weather_api(report: HazardReport, data: dict[str, Any], target_date: Optional[str]) -> None:
    """Add official alerts, then backfill the summary when Open-Meteo produced none."""
    alerts = (data.get("alerts") or {}).get("alert") or []
    for alert in alerts:
        report.flag(f"{ALERT_PREFIX}{alert.get('event') or alert.get('headline') or 'Weather alert'}")

    if not report.needs_summary:
        return

    forecast_days = (data.get("forecast") or {}).get("forecastday") or []
    if forecast_days:
        day = forecast_days[0].get("day") or {}
        report.temperature = _num(day.get("avgtemp_c"))
        report.summary = (day.get("condition") or {}).get("text") or report.summary
        max_wind = _num(day.get("maxwind_kph"))
        if max_wind is not None and max_wind > WIND_KMH:
            report.flag(f"High winds ({_fmt(max_wind)} km/h)")
    elif data.get("current") and not target_date:
        current = data["current"]
        report.temperature = _num(current.get("temp_c"))
        report.summary = (current.get("condition") or {}).get("text") or report.summary
