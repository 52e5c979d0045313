"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection by probing the company settings table."""
    from ...data.catalog_repository import SETTINGS_TABLE
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "connected": False,
            "message": "Supabase not configured. Set TRAVELEX_SUPABASE_URL and TRAVELEX_SUPABASE_KEY environment variables.",
        }

    try:
        supabase.table(SETTINGS_TABLE).select("id").limit(1).execute()
        return {"configured": True, "connected": True, "message": "Database connected."}
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }


@router.get("/health/weather", status_code=status.HTTP_200_OK)
def check_weather() -> dict:
    """Report whether the keyed WeatherAPI provider is configured and the forecast cache size.

    Open-Meteo needs no key, so there is nothing to report for it without a network call.
    """
    from ...services.weather.assessor import get_weather_assessor
    from ...services.weather.cache import get_forecast_cache

    assessor = get_weather_assessor()
    return {
        "providers": {"weatherApi": assessor.weather_api.configured},
        "cache_entries": len(get_forecast_cache()),
    }
