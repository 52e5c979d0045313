"""Rate catalog loader backed by the Supabase company settings and adjustment tables."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Adjustment, AdjustmentKind, RateCatalog

SETTINGS_TABLE = "company_settings"
SURCHARGES_TABLE = "surcharge_factors"
DISCOUNTS_TABLE = "discounts"

# Postgres rejects an empty IN (); this id never matches a real row.
EMPTY_SELECTION_PLACEHOLDER = "00000000-0000-0000-0000-000000000000"

logger = logging.getLogger(__name__)


class CatalogLoadError(RuntimeError):
    """Raised when the rate catalog cannot be read from storage."""


def _selection_filter(ids: Sequence[str]) -> list[str]:
    return list(ids) if ids else [EMPTY_SELECTION_PLACEHOLDER]


def _to_rate(row: dict[str, Any], column: str) -> float:
    try:
        value = float(row[column])
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogLoadError(f"Invalid or missing '{column}' in {SETTINGS_TABLE}.") from exc
    if value < 0:
        raise CatalogLoadError(f"'{column}' must be non-negative, got {value}.")
    return value


def _row_to_adjustment(row: dict[str, Any], table: str) -> Adjustment:
    try:
        return Adjustment(
            id=str(row["id"]),
            name=str(row.get("name") or ""),
            kind=AdjustmentKind.from_raw(row.get("type")),
            rate=float(row["rate"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogLoadError(f"Malformed row in {table}: {exc}") from exc


def _load_adjustments(client: Any, table: str, ids: Sequence[str] | None) -> tuple[Adjustment, ...]:
    query = client.table(table).select("*")
    if ids is not None:
        query = query.in_("id", _selection_filter(ids))
    response = query.order(settings.catalog_order_column).execute()
    return tuple(_row_to_adjustment(row, table) for row in (response.data or []))


def load_rate_catalog(
    surcharge_ids: Iterable[str] | None = None,
    discount_ids: Iterable[str] | None = None,
) -> RateCatalog:
    """Load a fresh catalog snapshot.

    Args:
        surcharge_ids: Restrict surcharges to these ids. ``None`` loads every surcharge.
        discount_ids: Restrict discounts to these ids. ``None`` loads every discount.

    Raises:
        CatalogLoadError: If storage is not configured or any query fails.
    """
    supabase = get_supabase_client()
    if not supabase:
        raise CatalogLoadError("Supabase not configured. Set TRAVELEX_SUPABASE_URL and TRAVELEX_SUPABASE_KEY.")

    surcharge_filter = None if surcharge_ids is None else sorted(set(surcharge_ids))
    discount_filter = None if discount_ids is None else sorted(set(discount_ids))

    try:
        settings_row = (
            supabase.table(SETTINGS_TABLE)
            .select("*")
            .eq("id", settings.company_settings_id)
            .single()
            .execute()
        ).data
        if not settings_row:
            raise CatalogLoadError(f"No {SETTINGS_TABLE} row with id '{settings.company_settings_id}'.")

        catalog = RateCatalog(
            distance_rate=_to_rate(settings_row, "distance_rate"),
            duration_rate=_to_rate(settings_row, "duration_rate"),
            surcharges=_load_adjustments(supabase, SURCHARGES_TABLE, surcharge_filter),
            discounts=_load_adjustments(supabase, DISCOUNTS_TABLE, discount_filter),
        )
    except CatalogLoadError:
        raise
    except Exception as exc:
        logger.warning(f"Failed to load rate catalog: {exc}")
        raise CatalogLoadError(str(exc)) from exc

    logger.debug(
        f"Loaded rate catalog: {len(catalog.surcharges)} surcharges, {len(catalog.discounts)} discounts"
    )
    return catalog
