"""Trip persistence for priced trips."""

from __future__ import annotations

import logging
from typing import Any

from ..db.supabase import get_supabase_client

TRIPS_TABLE = "trips"

logger = logging.getLogger(__name__)


class TripPersistenceError(RuntimeError):
    """Raised when a priced trip cannot be written to storage."""


def insert_trip(record: dict[str, Any]) -> str:
    """Insert a trip record and return its id.

    The record already carries the frozen price and breakdown; nothing here
    reads the rate catalog.
    """
    supabase = get_supabase_client()
    if not supabase:
        raise TripPersistenceError("Supabase not configured - trips cannot be saved.")

    try:
        response = supabase.table(TRIPS_TABLE).insert(record).execute()
    except Exception as exc:
        logger.error(f"Failed to insert trip: {exc}")
        raise TripPersistenceError(str(exc)) from exc

    rows = response.data or []
    if not rows or "id" not in rows[0]:
        raise TripPersistenceError("Trip insert returned no id.")
    trip_id = str(rows[0]["id"])
    logger.info(f"Saved trip {trip_id} priced at {record.get('price')}")
    return trip_id
