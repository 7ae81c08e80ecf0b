"""
Catalog store.

Holds the catalog, per-user signals, and business placement tiers in memory and
serves them through the discovery provider protocols. The JSON variant loads one
file shaped as:

    {
      "items": [ {ContentItem row}, ... ],
      "users": { "<user_id>": {"preferences": {...}, "behavior": {...},
                                "location": "...", "coordinates": {...}} },
      "business_tiers": { "<owner_id>": "premium" }
    }
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from discovery import (
    CatalogsByKind,
    ContentItem,
    Coordinates,
    TrendingUpdate,
    UserBehaviorSignals,
    UserPreferences,
    apply_trending_updates,
    catalogs_by_kind,
)
from discovery.models import coerce_coordinates, ensure_behavior, ensure_items, ensure_preferences

logger = logging.getLogger(__name__)


class InMemoryCatalogStore:
    """
    Catalog, user signals, and tiers held in memory.
    Implements CatalogProvider, UserSignalsProvider, and PlacementTierProvider.
    """

    def __init__(
        self,
        items: Optional[List[Union[Dict, ContentItem]]] = None,
        users: Optional[Dict[str, Dict]] = None,
        business_tiers: Optional[Dict[str, str]] = None,
    ):
        self._items: List[ContentItem] = ensure_items(items or [])
        self._users: Dict[str, Dict] = dict(users or {})
        self._tiers: Dict[str, str] = dict(business_tiers or {})

    def __len__(self) -> int:
        return len(self._items)

    # Catalog

    def get_items(
        self,
        kinds: Optional[List[str]] = None,
        public_only: bool = True,
    ) -> List[ContentItem]:
        items = self._items
        if kinds:
            allowed = set(kinds)
            items = [i for i in items if i.kind in allowed]
        if public_only:
            items = [i for i in items if i.is_public]
        return list(items)

    def get_item(self, item_id: str) -> Optional[ContentItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def catalogs_by_kind(self) -> CatalogsByKind:
        return catalogs_by_kind(self.get_items())

    # User signals

    def _user(self, user_id: Optional[str]) -> Dict:
        if not user_id:
            return {}
        return self._users.get(user_id) or {}

    def has_user(self, user_id: str) -> bool:
        return user_id in self._users

    def get_preferences(self, user_id: str) -> Optional[UserPreferences]:
        return ensure_preferences(self._user(user_id).get("preferences"))

    def get_behavior(self, user_id: str) -> Optional[UserBehaviorSignals]:
        return ensure_behavior(self._user(user_id).get("behavior"))

    def get_location(self, user_id: str) -> Optional[str]:
        return self._user(user_id).get("location") or None

    def get_coordinates(self, user_id: str) -> Optional[Coordinates]:
        return coerce_coordinates(self._user(user_id).get("coordinates"))

    # Placement tiers

    def get_owner_tiers(self) -> Dict[str, str]:
        return dict(self._tiers)

    # Trending

    def apply_trending(self, updates: List[TrendingUpdate]) -> int:
        """Write trending scores back onto stored items. Returns the number of updates."""
        self._items = apply_trending_updates(self._items, updates)
        logger.info("[catalog_store] TRENDING_APPLIED updated=%s", len(updates))
        return len(updates)

    def top_trending_ids(self, n: int) -> List[str]:
        """Ids of public items with the highest stored trending_score (> 0)."""
        scored = [
            (i.metrics.trending_score, i.id)
            for i in self.get_items()
            if i.metrics is not None and i.metrics.trending_score > 0
        ]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [item_id for _, item_id in scored[:max(n, 0)]]


class JsonCatalogStore(InMemoryCatalogStore):
    """
    Catalog store backed by a single JSON file.
    Used by the server; path comes from CATALOG_JSON_PATH.
    """

    def __init__(self, catalog_path: Union[Path, str]):
        self._catalog_path = Path(catalog_path)
        if not self._catalog_path.exists():
            raise FileNotFoundError(f"Catalog JSON not found: {self._catalog_path}")
        with open(self._catalog_path) as f:
            data = json.load(f)
        if isinstance(data, list):
            data = {"items": data}
        super().__init__(
            items=data.get("items") or [],
            users=data.get("users") or {},
            business_tiers=data.get("business_tiers") or {},
        )
        logger.info(
            "[catalog_store] LOADED path=%s items=%s users=%s",
            self._catalog_path, len(self._items), len(self._users),
        )

    @property
    def path(self) -> Path:
        return self._catalog_path
