import itertools
from typing import Any

import pytest


class _Response:
    def __init__(self, data: Any) -> None:
        self.data = data


class _Query:
    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self.db = db
        self.table_name = table
        self.filters: list = []
        self._single = False
        self._order: str | None = None
        self._insert: dict | None = None

    def select(self, *_args, **_kwargs):
        return self

    def eq(self, column: str, value: Any):
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def in_(self, column: str, values):
        values = list(values)
        self.db.in_calls.append((self.table_name, values))
        wanted = {str(v) for v in values}
        self.filters.append(lambda row: str(row.get(column)) in wanted)
        return self

    def order(self, column: str):
        self._order = column
        return self

    def limit(self, _count: int):
        return self

    def single(self):
        self._single = True
        return self

    def insert(self, record: dict):
        self._insert = record
        return self

    def execute(self) -> _Response:
        if self.table_name in self.db.failing:
            raise RuntimeError(self.db.failing[self.table_name])
        if self._insert is not None:
            row = {"id": next(self.db.ids), **self._insert}
            self.db.tables.setdefault(self.table_name, []).append(row)
            return _Response([row])
        rows = [row for row in self.db.tables.get(self.table_name, []) if all(f(row) for f in self.filters)]
        if self._order:
            rows = sorted(rows, key=lambda row: row.get(self._order))
        if self._single:
            return _Response(rows[0] if rows else None)
        return _Response(rows)


class FakeSupabase:
    """In-memory stand-in for the Supabase query builder calls the repositories make."""

    def __init__(self, tables: dict[str, list[dict]] | None = None) -> None:
        self.tables = tables or {}
        self.failing: dict[str, str] = {}
        self.in_calls: list[tuple[str, list]] = []
        self.ids = itertools.count(1)

    def table(self, name: str) -> _Query:
        return _Query(self, name)


SETTINGS_ID = "11111111-1111-1111-1111-111111111111"


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase(
        {
            "company_settings": [{"id": SETTINGS_ID, "distance_rate": 1.5, "duration_rate": 15}],
            "surcharge_factors": [
                {"id": "s-night", "name": "Night service", "rate": 15, "type": "percentage"},
                {"id": "s-airport", "name": "Airport fee", "rate": 10, "type": "fixed"},
            ],
            "discounts": [
                {"id": "d-loyal", "name": "Loyal customer", "rate": 5, "type": "fixed"},
                {"id": "d-promo", "name": "Promo", "rate": 10, "type": "percentage"},
            ],
        }
    )


def open_meteo_payload(
    date: str = "2024-05-01",
    code: int = 1,
    temp_max: float = 21.0,
    wind_max: float = 12.0,
    precip_sum: float = 0.0,
) -> dict:
    return {
        "current": {
            "temperature_2m": 18.0,
            "precipitation": 0.0,
            "weather_code": 2,
            "wind_speed_10m": 8.0,
        },
        "daily": {
            "time": ["2024-04-30", date],
            "weather_code": [0, code],
            "temperature_2m_max": [20.0, temp_max],
            "temperature_2m_min": [10.0, 9.0],
            "precipitation_sum": [0.0, precip_sum],
            "wind_speed_10m_max": [10.0, wind_max],
        },
    }


def weather_api_payload(alerts: list[str] | None = None, condition: str = "Sunny", maxwind_kph: float = 14.0) -> dict:
    return {
        "current": {"temp_c": 17.0, "condition": {"text": "Clear"}},
        "forecast": {
            "forecastday": [
                {"day": {"avgtemp_c": 16.5, "maxwind_kph": maxwind_kph, "condition": {"text": condition}}}
            ]
        },
        "alerts": {"alert": [{"event": event} for event in (alerts or [])]},
    }


@pytest.fixture
def om_payload():
    return open_meteo_payload


@pytest.fixture
def wa_payload():
    return weather_api_payload
