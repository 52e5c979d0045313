"""Weather forecast endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...schemas.weather import WeatherAssessmentModel
from ...services.weather.assessor import WeatherUnavailableError, get_weather_assessor

router = APIRouter(tags=["weather"])

logger = logging.getLogger(__name__)


@router.get("/weather", response_model=WeatherAssessmentModel, status_code=status.HTTP_200_OK)
async def get_forecast(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    date: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$", description="Target date (YYYY-MM-DD)."),
) -> WeatherAssessmentModel:
    """Hazard verdict for a destination, for `date` or for current conditions."""
    try:
        assessment = await get_weather_assessor().get_forecast(lat, lng, date)
    except WeatherUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Weather forecast unavailable",
        ) from exc
    except Exception as exc:
        logger.exception(f"Error building weather forecast: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build weather forecast",
        ) from exc
    return WeatherAssessmentModel.from_domain(assessment)
