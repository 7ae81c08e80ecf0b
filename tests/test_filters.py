#!/usr/bin/env python3
"""
Catalog Filter Tests

Run:
----
    pytest tests/test_filters.py -v
"""

from datetime import timedelta

from discovery import DiscoveryFilters, apply_filters, public_only

from tests.conftest import NOW, make_item


def _ids(items):
    return [i.id for i in items]


CATALOG = [
    make_item("itin-1", kind="itinerary", title="Beach week", location="Bali, Indonesia",
              categories=["beach"], start_date=NOW + timedelta(days=10),
              end_date=NOW + timedelta(days=17)),
    make_item("deal-cheap", kind="deal", title="Hostel", location="Lisbon", categories=["budget"],
              price=40),
    make_item("deal-pricey", kind="deal", title="Resort", location="Bali, Indonesia",
              categories=["beach", "luxury"], price=400),
    make_item("promo-1", kind="promotion", title="Food tour", description="Street food in Bangkok",
              location="Bangkok", categories=["food"]),
    make_item("hidden", kind="itinerary", title="Draft", is_public=False),
]


class TestApplyFilters:

    def test_no_filters_keeps_everything(self):
        assert _ids(apply_filters(CATALOG, None)) == _ids(CATALOG)
        assert _ids(apply_filters(CATALOG, DiscoveryFilters())) == _ids(CATALOG)

    def test_types(self):
        kept = apply_filters(CATALOG, DiscoveryFilters(types=["deal"]))
        assert _ids(kept) == ["deal-cheap", "deal-pricey"]

    def test_categories_any_match(self):
        kept = apply_filters(CATALOG, DiscoveryFilters(categories=["luxury", "food"]))
        assert _ids(kept) == ["deal-pricey", "promo-1"]

    def test_location_substring(self):
        kept = apply_filters(CATALOG, DiscoveryFilters(location="bali"))
        assert _ids(kept) == ["itin-1", "deal-pricey"]

    def test_search_matches_description(self):
        kept = apply_filters(CATALOG, DiscoveryFilters(search_query="street FOOD"))
        assert _ids(kept) == ["promo-1"]

    def test_price_range_from_client_keys(self):
        filters = DiscoveryFilters.model_validate({"priceRange": [0, 100]})
        kept = apply_filters(CATALOG, filters)
        assert "deal-pricey" not in _ids(kept)
        # unpriced items are unaffected
        assert "itin-1" in _ids(kept)

    def test_date_range_only_constrains_dated_items(self):
        filters = DiscoveryFilters.model_validate({
            "dateRange": [(NOW + timedelta(days=20)).isoformat(), None],
        })
        kept = apply_filters(CATALOG, filters)
        assert "itin-1" not in _ids(kept)
        assert "deal-cheap" in _ids(kept)

    def test_date_range_contains_trip(self):
        filters = DiscoveryFilters(date_range={"start": NOW, "end": NOW + timedelta(days=30)})
        assert "itin-1" in _ids(apply_filters(CATALOG, filters))

    def test_over_filtering_yields_empty(self):
        filters = DiscoveryFilters(types=["destination"], location="Mars")
        assert apply_filters(CATALOG, filters) == []


class TestPublicOnly:

    def test_drops_private(self):
        assert "hidden" not in _ids(public_only(CATALOG))
        assert len(public_only(CATALOG)) == len(CATALOG) - 1
