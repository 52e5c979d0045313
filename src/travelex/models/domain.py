"""Domain models for pricing catalogs, quotes and weather assessments."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Optional


class AdjustmentKind(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"

    @classmethod
    def from_raw(cls, value: Any) -> "AdjustmentKind":
        """Anything not explicitly a percentage is charged as a flat amount."""
        if isinstance(value, cls):
            return value
        return cls.PERCENTAGE if value == cls.PERCENTAGE.value else cls.FIXED


@dataclass(frozen=True, slots=True)
class Adjustment:
    """A named surcharge or discount with a percentage-or-fixed rate."""

    id: str
    name: str
    kind: AdjustmentKind
    rate: float


@dataclass(frozen=True, slots=True)
class RateCatalog:
    """Read-only snapshot of base rates plus the surcharges and discounts in catalog order.

    ``duration_rate`` is a price per hour.
    """

    distance_rate: float
    duration_rate: float
    surcharges: tuple[Adjustment, ...] = ()
    discounts: tuple[Adjustment, ...] = ()


@dataclass(frozen=True, slots=True)
class QuoteRequest:
    distance: float
    duration: float
    surcharge_ids: frozenset[str] = frozenset()
    discount_ids: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class AppliedAdjustment:
    id: str
    name: str
    amount: float


@dataclass(frozen=True, slots=True)
class QuoteResult:
    base_price: float
    final_price: float
    surcharges: tuple[AppliedAdjustment, ...]
    discounts: tuple[AppliedAdjustment, ...]

    @property
    def formatted_price(self) -> str:
        # Decimal(float) is exact, so ties round up the same way toFixed(2) does.
        return str(Decimal(self.final_price).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(slots=True)
class WeatherSources:
    open_meteo: bool
    weather_api: bool


@dataclass(slots=True)
class WeatherAssessment:
    """Merged hazard verdict for one coordinate/date pair."""

    is_hazardous: bool
    summary: str
    temperature: Optional[float]
    target_date: str
    source: WeatherSources
    timestamp: str
    hazard_details: list[str] = field(default_factory=list)
