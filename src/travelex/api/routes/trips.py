"""Trip endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...data.catalog_repository import CatalogLoadError
from ...data.trips_repository import TripPersistenceError
from ...schemas.pricing import PricedTripResponse, TripDraft
from ...services.pricing.service import price_trip

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("/priced", response_model=PricedTripResponse, status_code=status.HTTP_201_CREATED)
def create_priced_trip(payload: TripDraft) -> PricedTripResponse:
    """Price a trip on the server and store it with the breakdown frozen in."""
    try:
        return price_trip(payload)
    except (CatalogLoadError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except TripPersistenceError as exc:
        logging.exception(f"Error saving priced trip: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save trip",
        ) from exc
