"""Route group exports."""

from . import health, pricing, trips, weather

__all__ = ["health", "pricing", "trips", "weather"]
