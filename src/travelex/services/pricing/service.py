"""Quote orchestration: authoritative quotes, catalog-snapshot previews and priced trips."""

from __future__ import annotations

import logging

from ...data.catalog_repository import load_rate_catalog
from ...data.trips_repository import insert_trip
from ...models.domain import QuoteResult
from ...schemas.pricing import (
    CatalogModel,
    PreviewRequest,
    PricedTripResponse,
    QuoteRequestModel,
    QuoteResponse,
    TripDraft,
)
from .engine import compute_quote

logger = logging.getLogger(__name__)


def _authoritative_quote(payload: QuoteRequestModel) -> QuoteResult:
    # Fresh snapshot per call so admin rate edits apply to the next quote.
    catalog = load_rate_catalog(payload.surcharges, payload.discounts)
    return compute_quote(payload.to_domain(), catalog)


def quote_from_storage(payload: QuoteRequestModel) -> QuoteResponse:
    """Price a request against the rate catalog currently held in storage."""
    result = _authoritative_quote(payload)
    logger.info(
        f"Quoted {payload.distance} x {payload.duration} {payload.duration_unit}: "
        f"{result.formatted_price} ({len(result.surcharges)} surcharges, {len(result.discounts)} discounts)"
    )
    return QuoteResponse.from_result(result)


def preview_quote(payload: PreviewRequest) -> QuoteResponse:
    """Price a request against the catalog snapshot sent by the client. No storage access."""
    return QuoteResponse.from_result(compute_quote(payload.to_domain(), payload.catalog.to_domain()))


def get_catalog() -> CatalogModel:
    return CatalogModel.from_domain(load_rate_catalog())


def price_trip(draft: TripDraft) -> PricedTripResponse:
    """Recompute the quote for a trip and store the trip with the numbers frozen in."""
    request = draft.to_domain()
    result = _authoritative_quote(draft)
    quote = QuoteResponse.from_result(result)

    record = {
        "user_id": draft.user_id,
        "origin": draft.origin,
        "destination": draft.destination,
        "distance": request.distance,
        "duration": request.duration,
        "date": draft.date.isoformat(),
        "price": float(result.formatted_price),
        "base_price": result.base_price,
        "active_surcharges": [item.id for item in result.surcharges],
        "active_discounts": [item.id for item in result.discounts],
        "price_breakdown": quote.breakdown.model_dump(),
    }
    trip_id = insert_trip(record)
    return PricedTripResponse(trip_id=trip_id, quote=quote)
