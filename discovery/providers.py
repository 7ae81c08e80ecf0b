"""
Provider abstractions.

Supply the catalog, user signals, and business placement tiers to the host that
calls the discovery engine. The engine itself never calls these; the host reads
through them and passes plain models into rank / build_feed / trending_update.
"""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from .models.content import ContentItem, Coordinates
from .models.signals import UserBehaviorSignals, UserPreferences


@runtime_checkable
class CatalogProvider(Protocol):
    """Protocol for catalog access. Implement for a JSON file, a database, or an API."""

    def get_items(
        self,
        kinds: Optional[List[str]] = None,
        public_only: bool = True,
    ) -> List[ContentItem]:
        """
        Return catalog items, optionally restricted to the given kinds.
        public_only=False includes items their owners have not published.
        """
        ...

    def get_item(self, item_id: str) -> Optional[ContentItem]:
        """Get one item by id."""
        ...


@runtime_checkable
class UserSignalsProvider(Protocol):
    """Protocol for per-user preferences, history, and location."""

    def get_preferences(self, user_id: str) -> Optional[UserPreferences]:
        ...

    def get_behavior(self, user_id: str) -> Optional[UserBehaviorSignals]:
        ...

    def get_location(self, user_id: str) -> Optional[str]:
        """Free-text home location (e.g. "Paris, France")."""
        ...

    def get_coordinates(self, user_id: str) -> Optional[Coordinates]:
        ...


@runtime_checkable
class PlacementTierProvider(Protocol):
    """Protocol for business placement tiers (owner id -> tier name)."""

    def get_owner_tiers(self) -> Dict[str, str]:
        ...
