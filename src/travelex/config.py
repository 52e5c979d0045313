"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TRAVELEX_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "JG TravelEx API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level applied at startup.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    company_settings_id: str = Field(
        default="11111111-1111-1111-1111-111111111111",
        description="Primary key of the singleton company_settings row holding base rates.",
    )
    catalog_order_column: str = Field(
        default="name",
        description="Column that defines catalog order for surcharges and discounts.",
    )

    # Weather providers
    open_meteo_base_url: str = Field(default="https://api.open-meteo.com")
    weather_api_base_url: str = Field(default="https://api.weatherapi.com")
    weather_api_key: Optional[str] = Field(
        default=None,
        description="WeatherAPI.com key. When missing the provider is skipped.",
    )
    weather_timeout_seconds: float = Field(default=10.0, gt=0.0)
    weather_forecast_days: int = Field(default=14, ge=1, le=16)
    weather_cache_ttl_seconds: float = Field(default=15 * 60, gt=0.0)
    weather_cache_sweep_interval_seconds: float = Field(default=60 * 60, gt=0.0)

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
