"""Pricing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...data.catalog_repository import CatalogLoadError
from ...schemas.pricing import CatalogModel, PreviewRequest, QuoteRequestModel, QuoteResponse
from ...services.pricing.service import get_catalog, preview_quote, quote_from_storage

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.post("/quote", response_model=QuoteResponse, status_code=status.HTTP_200_OK)
def quote(payload: QuoteRequestModel) -> QuoteResponse:
    """Authoritative quote using the rate catalog currently in storage."""
    try:
        return quote_from_storage(payload)
    except (CatalogLoadError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error computing quote: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute quote",
        ) from exc


@router.post("/preview", response_model=QuoteResponse, status_code=status.HTTP_200_OK)
def preview(payload: PreviewRequest) -> QuoteResponse:
    """Quote against a client-held catalog snapshot, for live feedback before saving."""
    try:
        return preview_quote(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/catalog", response_model=CatalogModel, status_code=status.HTTP_200_OK)
def catalog() -> CatalogModel:
    try:
        return get_catalog()
    except CatalogLoadError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
