"""
Per-item combined scoring: five factors, weighted sum, optional placement boost.

Builds a ScoredItem for one item given the request context and config.
"""

from datetime import datetime
from typing import Mapping, Optional

from ...models.config import DiscoveryConfig
from ...models.content import ContentItem, Coordinates
from ...models.scoring import ScoredItem
from ...models.signals import UserPreferences
from ...utils.scores import clamp
from .factors import (
    freshness_score,
    popularity_score,
    proximity_score,
    quality_score,
    relevance_score,
)


def combine_factors(
    relevance: float,
    popularity: float,
    freshness: float,
    quality: float,
    proximity: float,
    config: DiscoveryConfig,
) -> float:
    """Weighted linear combination; stays in [0, 1] because weights sum to 1."""
    combined = (
        config.weight_relevance * relevance
        + config.weight_popularity * popularity
        + config.weight_freshness * freshness
        + config.weight_quality * quality
        + config.weight_proximity * proximity
    )
    return clamp(combined)


def placement_multiplier(
    item: ContentItem,
    owner_tiers: Optional[Mapping[str, str]],
    config: DiscoveryConfig,
) -> float:
    """Boost for the owner's active placement tier, 1.0 when none."""
    if not owner_tiers or not item.owner_id:
        return 1.0
    return config.boost_for_tier(owner_tiers.get(item.owner_id))


def build_scored_item(
    item: ContentItem,
    config: DiscoveryConfig,
    preferences: Optional[UserPreferences] = None,
    user_location: Optional[str] = None,
    user_coordinates: Optional[Coordinates] = None,
    owner_tiers: Optional[Mapping[str, str]] = None,
    now: Optional[datetime] = None,
) -> ScoredItem:
    """
    Compute the five factor scores for one item and combine them.

    final = (w_rel * relevance + w_pop * popularity + w_fresh * freshness
             + w_qual * quality + w_prox * proximity) * placement boost.
    The boost is applied last, so final may exceed 1.
    """
    relevance = relevance_score(item, preferences, config)
    popularity = popularity_score(item.metrics, config)
    freshness = freshness_score(item, now, config)
    quality = quality_score(item, item.metrics, config)
    proximity = proximity_score(item, user_location, user_coordinates, config)

    base = combine_factors(relevance, popularity, freshness, quality, proximity, config)
    boost = placement_multiplier(item, owner_tiers, config)

    return ScoredItem(
        item=item,
        relevance_score=relevance,
        popularity_score=popularity,
        freshness_score=freshness,
        quality_score=quality,
        proximity_score=proximity,
        base_score=base,
        final_score=base * boost,
        boost_multiplier=boost,
    )
