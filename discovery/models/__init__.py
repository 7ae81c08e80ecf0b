"""Data models for the discovery engine."""

from .config import DEFAULT_CONFIG, DiscoveryConfig, resolve_config
from .content import (
    CONTENT_KINDS,
    ContentItem,
    ContentKind,
    Coordinates,
    EngagementMetrics,
    ensure_item,
    coerce_coordinates,
    ensure_items,
    one_or_none,
)
from .feed import (
    CatalogsByKind,
    DateRange,
    DiscoveryFeed,
    DiscoveryFilters,
    FeedEntry,
    SimilarEntry,
    ensure_filters,
)
from .reasons import ReasonSource, RecommendationReason
from .scoring import ScoredItem, SimilarItem, TrendingUpdate
from .signals import (
    FeedUserContext,
    SocialGraph,
    UserBehaviorSignals,
    UserPreferences,
    ensure_behavior,
    ensure_preferences,
)

__all__ = [
    "CONTENT_KINDS",
    "CatalogsByKind",
    "ContentItem",
    "ContentKind",
    "Coordinates",
    "DEFAULT_CONFIG",
    "DateRange",
    "DiscoveryConfig",
    "DiscoveryFeed",
    "DiscoveryFilters",
    "EngagementMetrics",
    "FeedEntry",
    "FeedUserContext",
    "ReasonSource",
    "RecommendationReason",
    "ScoredItem",
    "SimilarEntry",
    "SimilarItem",
    "SocialGraph",
    "TrendingUpdate",
    "UserBehaviorSignals",
    "UserPreferences",
    "coerce_coordinates",
    "ensure_behavior",
    "ensure_filters",
    "ensure_item",
    "ensure_items",
    "ensure_preferences",
    "one_or_none",
    "resolve_config",
]
