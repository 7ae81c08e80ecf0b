#!/usr/bin/env python3
"""
Catalog Store Tests

The JSON store behind the HTTP API implements every provider protocol.

Run:
----
    pytest tests/test_catalog_store.py -v
"""

import json

import pytest

from discovery import TrendingUpdate
from discovery.providers import CatalogProvider, PlacementTierProvider, UserSignalsProvider
from server.services import InMemoryCatalogStore, JsonCatalogStore

from tests.conftest import SAMPLE_CATALOG


@pytest.fixture
def store():
    return JsonCatalogStore(SAMPLE_CATALOG)


class TestJsonCatalogStore:

    def test_satisfies_provider_protocols(self, store):
        assert isinstance(store, CatalogProvider)
        assert isinstance(store, UserSignalsProvider)
        assert isinstance(store, PlacementTierProvider)

    def test_public_only_by_default(self, store):
        assert len(store) == 9
        assert len(store.get_items()) == 8
        assert len(store.get_items(public_only=False)) == 9

    def test_kinds(self, store):
        assert [i.id for i in store.get_items(kinds=["deal"])] == ["deal-paris-hotel", "deal-lisbon-surf"]

    def test_joined_rows_normalised(self, store):
        item = store.get_item("itin-paris-food")
        assert item.metrics.like_count == 96
        assert item.categories == ["food", "culture"]

    def test_user_signals(self, store):
        prefs = store.get_preferences("user-amelie")
        behavior = store.get_behavior("user-amelie")
        assert prefs.travel_style == "adventurous"
        assert behavior.friend_likes["user-joao"] == ["itin-paris-food", "dest-kyoto"]
        assert store.get_location("user-amelie") == "Paris, France"
        assert store.get_coordinates("user-amelie").latitude == pytest.approx(48.8566)

    def test_unknown_user_has_no_signals(self, store):
        assert store.get_preferences("ghost") is None
        assert store.get_behavior("ghost") is None
        assert store.get_coordinates("ghost") is None

    def test_owner_tiers(self, store):
        assert store.get_owner_tiers()["biz-seine-hotels"] == "premium"

    def test_catalogs_by_kind(self, store):
        catalogs = store.catalogs_by_kind()
        assert [i.id for i in catalogs.users] == ["user-joao"]
        assert [i.id for i in catalogs.destinations] == ["dest-kyoto"]
        assert "itin-private-draft" not in [i.id for i in catalogs.itineraries]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonCatalogStore(tmp_path / "nope.json")

    def test_bare_list_file(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text(json.dumps([{"id": "a"}, {"id": "b", "kind": "deal"}]))
        store = JsonCatalogStore(path)
        assert [i.id for i in store.get_items()] == ["a", "b"]
        assert store.get_owner_tiers() == {}


class TestTrendingWriteBack:

    def test_apply_and_top_ids(self):
        store = InMemoryCatalogStore(items=[
            {"id": "a", "metrics": {"view_count": 1}},
            {"id": "b", "metrics": {"view_count": 1}},
            {"id": "c"},
        ])
        assert store.top_trending_ids(5) == []
        updated = store.apply_trending([
            TrendingUpdate(item_id="a", trending_score=0.2),
            TrendingUpdate(item_id="b", trending_score=0.6),
        ])
        assert updated == 2
        assert store.top_trending_ids(5) == ["b", "a"]
        assert store.top_trending_ids(1) == ["b"]
