"""
Discovery Ranking Engine

Single entry point for the discovery package:
- models/: DiscoveryConfig, ContentItem, ScoredItem, DiscoveryFeed, signals
- stages/: filters, ranking (factors, combiner, diversity), trending, reasons, feed, orchestrator
- utils/: clamping, time decay, haversine distance
- providers: host data-source protocols
"""

from typing import Dict, List, Union

from .models.config import DEFAULT_CONFIG, DiscoveryConfig, resolve_config
from .models.content import CONTENT_KINDS, ContentItem, Coordinates, EngagementMetrics, ensure_items
from .models.feed import CatalogsByKind, DiscoveryFeed, DiscoveryFilters, FeedEntry, SimilarEntry
from .models.reasons import RecommendationReason
from .models.scoring import ScoredItem, SimilarItem, TrendingUpdate
from .models.signals import (
    FeedUserContext,
    SocialGraph,
    UserBehaviorSignals,
    UserPreferences,
)
from .stages.feed import build_feed
from .stages.filters import apply_filters, public_only
from .stages.orchestrator import find_similar, rank
from .stages.ranking import (
    completeness_score,
    diversify,
    freshness_score,
    popularity_score,
    proximity_score,
    quality_score,
    rank_candidates,
    relevance_score,
)
from .stages.reasons import calculate_score, generate_reasons
from .stages.trending import apply_trending_updates, top_trending_ids, trending_update


def catalogs_by_kind(items: List[Union[Dict, ContentItem]]) -> CatalogsByKind:
    """
    Group a flat catalog into the per-kind buckets build_feed takes.
    Accepts items as dicts or ContentItem (same as rank).
    """
    buckets: Dict[str, List[ContentItem]] = {kind: [] for kind in CONTENT_KINDS}
    for item in ensure_items(items):
        buckets[item.kind].append(item)
    return CatalogsByKind(
        itineraries=buckets["itinerary"],
        deals=buckets["deal"],
        promotions=buckets["promotion"],
        destinations=buckets["destination"],
        users=buckets["user"],
    )


__all__ = [
    "CatalogsByKind",
    "ContentItem",
    "Coordinates",
    "DEFAULT_CONFIG",
    "DiscoveryConfig",
    "DiscoveryFeed",
    "DiscoveryFilters",
    "EngagementMetrics",
    "FeedEntry",
    "FeedUserContext",
    "RecommendationReason",
    "ScoredItem",
    "SimilarEntry",
    "SimilarItem",
    "SocialGraph",
    "TrendingUpdate",
    "UserBehaviorSignals",
    "UserPreferences",
    "apply_filters",
    "apply_trending_updates",
    "build_feed",
    "calculate_score",
    "catalogs_by_kind",
    "completeness_score",
    "diversify",
    "find_similar",
    "freshness_score",
    "generate_reasons",
    "popularity_score",
    "proximity_score",
    "public_only",
    "quality_score",
    "rank",
    "rank_candidates",
    "relevance_score",
    "resolve_config",
    "top_trending_ids",
    "trending_update",
]
