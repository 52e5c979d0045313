import datetime

import pytest

from travelex.data import catalog_repository, trips_repository
from travelex.data.catalog_repository import EMPTY_SELECTION_PLACEHOLDER, CatalogLoadError, load_rate_catalog
from travelex.data.trips_repository import TripPersistenceError
from travelex.models.domain import AdjustmentKind
from travelex.schemas.pricing import CatalogModel, PreviewRequest, QuoteRequestModel, TripDraft
from travelex.services.pricing import service as pricing_service


@pytest.fixture
def storage(monkeypatch, fake_supabase):
    monkeypatch.setattr(catalog_repository, "get_supabase_client", lambda: fake_supabase)
    monkeypatch.setattr(trips_repository, "get_supabase_client", lambda: fake_supabase)
    return fake_supabase


def test_load_rate_catalog_filters_and_orders(storage):
    catalog = load_rate_catalog(["s-night", "s-airport"], [])

    assert catalog.distance_rate == 1.5
    assert catalog.duration_rate == 15.0
    assert [s.id for s in catalog.surcharges] == ["s-airport", "s-night"]
    assert catalog.surcharges[1].kind is AdjustmentKind.PERCENTAGE
    assert catalog.discounts == ()
    assert ("discounts", [EMPTY_SELECTION_PLACEHOLDER]) in storage.in_calls


def test_load_rate_catalog_without_filter_returns_everything(storage):
    catalog = load_rate_catalog()

    assert len(catalog.surcharges) == 2
    assert len(catalog.discounts) == 2
    assert storage.in_calls == []


def test_load_rate_catalog_requires_configured_storage(monkeypatch):
    monkeypatch.setattr(catalog_repository, "get_supabase_client", lambda: None)

    with pytest.raises(CatalogLoadError, match="not configured"):
        load_rate_catalog([], [])


def test_load_rate_catalog_passes_storage_error_through(storage):
    storage.failing["surcharge_factors"] = "relation does not exist"

    with pytest.raises(CatalogLoadError, match="relation does not exist"):
        load_rate_catalog(["s-night"], [])


def test_load_rate_catalog_rejects_negative_rates(storage):
    storage.tables["company_settings"][0]["duration_rate"] = -1

    with pytest.raises(CatalogLoadError, match="non-negative"):
        load_rate_catalog([], [])


def test_quote_from_storage_applies_catalog_order(storage):
    payload = QuoteRequestModel(distance=10, duration=2, surcharges=["s-night", "s-airport"], discounts=["d-loyal"])
    response = pricing_service.quote_from_storage(payload)

    # Airport fee sorts before Night service: 45 + 10 = 55, +15% = 63.25, -5 = 58.25
    assert response.price == "58.25"
    assert [s.id for s in response.breakdown.surcharges] == ["s-airport", "s-night"]
    assert response.breakdown.surcharges[1].amount == pytest.approx(8.25)
    assert response.breakdown.base == pytest.approx(45.0)


def test_quote_from_storage_reloads_catalog_each_call(storage):
    payload = QuoteRequestModel(distance=10, duration=2)
    assert pricing_service.quote_from_storage(payload).price == "45.00"

    storage.tables["company_settings"][0]["distance_rate"] = 2.0

    assert pricing_service.quote_from_storage(payload).price == "50.00"


def test_preview_quote_needs_no_storage(monkeypatch):
    monkeypatch.setattr(catalog_repository, "get_supabase_client", lambda: None)
    payload = PreviewRequest(
        distance=10,
        duration=2,
        surcharges=["1"],
        discounts=["2"],
        catalog=CatalogModel(
            distance_rate=1.5,
            duration_rate=15,
            surcharges=[{"id": 1, "name": "Night", "rate": 15, "type": "percentage"}],
            discounts=[{"id": 2, "name": "Loyal", "rate": 5, "type": "fixed"}],
        ),
    )

    response = pricing_service.preview_quote(payload)

    assert response.price == "46.75"
    assert response.breakdown.surcharges[0].amount == pytest.approx(6.75)


def test_preview_matches_authoritative_quote(storage):
    catalog = pricing_service.get_catalog()
    selection = {"distance": 33.3, "duration": 95, "duration_unit": "minutes",
                 "surcharges": ["s-night", "s-airport"], "discounts": ["d-promo", "d-loyal"]}

    authoritative = pricing_service.quote_from_storage(QuoteRequestModel(**selection))
    preview = pricing_service.preview_quote(PreviewRequest(catalog=catalog, **selection))

    assert preview == authoritative


def test_price_trip_stores_frozen_breakdown(storage):
    draft = TripDraft(
        user_id=42,
        origin="San Juan",
        destination="Ponce",
        distance=10,
        duration=120,
        duration_unit="minutes",
        date=datetime.date(2024, 5, 1),
        surcharges=["s-night"],
        discounts=[],
    )

    response = pricing_service.price_trip(draft)

    stored = storage.tables["trips"][0]
    assert response.trip_id == str(stored["id"])
    assert response.quote.price == "51.75"
    assert stored["price"] == 51.75
    assert stored["duration"] == pytest.approx(2.0)
    assert stored["user_id"] == "42"
    assert stored["date"] == "2024-05-01"
    assert stored["active_surcharges"] == ["s-night"]
    assert stored["price_breakdown"]["surcharges"][0]["name"] == "Night service"


def test_price_trip_surfaces_insert_failure(storage):
    storage.failing["trips"] = "insert denied"
    draft = TripDraft(user_id="u1", origin="A", destination="B", distance=1, duration=1, date="2024-05-01")

    with pytest.raises(TripPersistenceError, match="insert denied"):
        pricing_service.price_trip(draft)


def test_preview_and_storage_agree_on_unrecognised_adjustment_type(storage):
    storage.tables["surcharge_factors"].append({"id": "s-toll", "name": "Toll", "rate": 4, "type": "flat"})
    selection = {"distance": 10, "duration": 2, "surcharges": ["s-toll"]}

    authoritative = pricing_service.quote_from_storage(QuoteRequestModel(**selection))
    catalog = CatalogModel(
        distance_rate=1.5,
        duration_rate=15,
        surcharges=[{"id": "s-toll", "name": "Toll", "rate": 4, "type": "flat"}],
    )
    preview = pricing_service.preview_quote(PreviewRequest(catalog=catalog, **selection))

    assert catalog.surcharges[0].type is AdjustmentKind.FIXED
    assert authoritative.price == "49.00"
    assert preview == authoritative
