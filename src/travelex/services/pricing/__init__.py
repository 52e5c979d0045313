"""Pricing services."""

from .engine import compute_quote, duration_to_hours, sanitize_measure

__all__ = ["compute_quote", "duration_to_hours", "sanitize_measure"]
