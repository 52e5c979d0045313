"""Pricing request/response schemas."""

from __future__ import annotations

import datetime
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.domain import Adjustment, AdjustmentKind, QuoteRequest, QuoteResult, RateCatalog
from ..services.pricing.engine import duration_to_hours, sanitize_measure


class QuoteRequestModel(BaseModel):
    distance: float = Field(default=0.0, description="Trip distance in the catalog's distance unit.")
    duration: float = Field(default=0.0, description="Trip duration, expressed in `duration_unit`.")
    duration_unit: Literal["hours", "minutes"] = "hours"
    surcharges: List[str] = Field(default_factory=list, description="Selected surcharge ids.")
    discounts: List[str] = Field(default_factory=list, description="Selected discount ids.")

    @field_validator("distance", "duration", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> float:
        return sanitize_measure(value)

    @field_validator("surcharges", "discounts", mode="before")
    @classmethod
    def _stringify_ids(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, (str, int)):
            value = [value]
        return [str(item) for item in value if item is not None and str(item).strip()]

    def to_domain(self) -> QuoteRequest:
        return QuoteRequest(
            distance=self.distance,
            duration=duration_to_hours(self.duration, self.duration_unit),
            surcharge_ids=frozenset(self.surcharges),
            discount_ids=frozenset(self.discounts),
        )


class AdjustmentModel(BaseModel):
    id: str
    name: str = ""
    rate: float
    type: AdjustmentKind = AdjustmentKind.FIXED

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_kind(cls, value: Any) -> AdjustmentKind:
        return AdjustmentKind.from_raw(value)

    @classmethod
    def from_domain(cls, adjustment: Adjustment) -> "AdjustmentModel":
        return cls(id=adjustment.id, name=adjustment.name, rate=adjustment.rate, type=adjustment.kind)

    def to_domain(self) -> Adjustment:
        return Adjustment(id=self.id, name=self.name, kind=self.type, rate=self.rate)


class CatalogModel(BaseModel):
    distance_rate: float = Field(..., ge=0)
    duration_rate: float = Field(..., ge=0, description="Price per hour.")
    surcharges: List[AdjustmentModel] = Field(default_factory=list)
    discounts: List[AdjustmentModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, catalog: RateCatalog) -> "CatalogModel":
        return cls(
            distance_rate=catalog.distance_rate,
            duration_rate=catalog.duration_rate,
            surcharges=[AdjustmentModel.from_domain(item) for item in catalog.surcharges],
            discounts=[AdjustmentModel.from_domain(item) for item in catalog.discounts],
        )

    def to_domain(self) -> RateCatalog:
        return RateCatalog(
            distance_rate=self.distance_rate,
            duration_rate=self.duration_rate,
            surcharges=tuple(item.to_domain() for item in self.surcharges),
            discounts=tuple(item.to_domain() for item in self.discounts),
        )


class PreviewRequest(QuoteRequestModel):
    """Quote request evaluated against a catalog snapshot the caller already holds."""

    catalog: CatalogModel


class AppliedAdjustmentModel(BaseModel):
    id: str
    name: str
    amount: float


class QuoteBreakdownModel(BaseModel):
    base: float
    surcharges: List[AppliedAdjustmentModel]
    discounts: List[AppliedAdjustmentModel]


class QuoteResponse(BaseModel):
    price: str = Field(..., description="Final price formatted to two decimals.")
    breakdown: QuoteBreakdownModel

    @classmethod
    def from_result(cls, result: QuoteResult) -> "QuoteResponse":
        return cls(
            price=result.formatted_price,
            breakdown=QuoteBreakdownModel(
                base=result.base_price,
                surcharges=[
                    AppliedAdjustmentModel(id=item.id, name=item.name, amount=item.amount)
                    for item in result.surcharges
                ],
                discounts=[
                    AppliedAdjustmentModel(id=item.id, name=item.name, amount=item.amount)
                    for item in result.discounts
                ],
            ),
        )


class TripDraft(QuoteRequestModel):
    """Trip submitted for pricing and storage. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    user_id: str
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    date: datetime.date

    @field_validator("user_id", mode="before")
    @classmethod
    def _stringify_user(cls, value: Any) -> str:
        return str(value)


class PricedTripResponse(BaseModel):
    trip_id: str
    quote: QuoteResponse
