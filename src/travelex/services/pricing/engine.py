"""Quote calculation: base rates followed by sequential surcharges and discounts."""

from __future__ import annotations

import math
from typing import Any, Iterable

from ...models.domain import (
    Adjustment,
    AdjustmentKind,
    AppliedAdjustment,
    QuoteRequest,
    QuoteResult,
    RateCatalog,
)

MINUTES_PER_HOUR = 60.0


def sanitize_measure(value: Any) -> float:
    """Coerce a distance or duration input to a finite, non-negative float.

    Unparsable, NaN, infinite and negative values become ``0.0``.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def duration_to_hours(value: float, unit: str = "hours") -> float:
    """Convert a duration to hours, the unit ``RateCatalog.duration_rate`` is priced in."""
    if unit == "hours":
        return value
    if unit == "minutes":
        return value / MINUTES_PER_HOUR
    raise ValueError(f"Unsupported duration unit '{unit}'.")


def _adjustment_amount(adjustment: Adjustment, running_price: float) -> float:
    if adjustment.kind is AdjustmentKind.PERCENTAGE:
        return running_price * (adjustment.rate / 100)
    return adjustment.rate


def _apply(
    adjustments: Iterable[Adjustment],
    selected: frozenset[str],
    price: float,
    sign: int,
) -> tuple[float, list[AppliedAdjustment]]:
    applied: list[AppliedAdjustment] = []
    for adjustment in adjustments:
        if adjustment.id not in selected:
            continue
        amount = _adjustment_amount(adjustment, price)
        price += sign * amount
        applied.append(AppliedAdjustment(id=adjustment.id, name=adjustment.name, amount=amount))
    return price, applied


def compute_quote(request: QuoteRequest, catalog: RateCatalog) -> QuoteResult:
    """Price a trip against a catalog snapshot.

    Surcharges and then discounts are applied one at a time against the running
    total, walking the catalog in its own order. Which ids the caller selected
    matters; the order they were selected in does not. Ids missing from the
    catalog are ignored. Only the final price is clamped at zero.
    """
    base_price = request.distance * catalog.distance_rate + request.duration * catalog.duration_rate

    price, surcharges = _apply(catalog.surcharges, request.surcharge_ids, base_price, +1)
    price, discounts = _apply(catalog.discounts, request.discount_ids, price, -1)

    return QuoteResult(
        base_price=base_price,
        final_price=max(0.0, price),
        surcharges=tuple(surcharges),
        discounts=tuple(discounts),
    )
