"""
Factor calculators: relevance, popularity, freshness, quality, proximity.

Each maps (item, context) to a score in [0, 1] with no shared state, so they
can run across a catalog in any order or in parallel. Missing context never
zeroes an item; it falls back to the documented neutral value.
"""

import math
from datetime import datetime
from typing import Optional

from ...models.config import DEFAULT_CONFIG, DiscoveryConfig
from ...models.content import ContentItem, Coordinates, EngagementMetrics
from ...models.signals import UserPreferences
from ...utils.geo import distance_km
from ...utils.scores import clamp, days_since, exp_decay


def _contains(haystack: Optional[str], needle: Optional[str]) -> bool:
    """Case-insensitive substring test; blank needles never match."""
    if not haystack or not needle or not needle.strip():
        return False
    return needle.strip().lower() in haystack.lower()


def relevance_score(
    item: ContentItem,
    preferences: Optional[UserPreferences],
    config: DiscoveryConfig = DEFAULT_CONFIG,
) -> float:
    """
    Fit between the item and stated preferences.

    base + destination bonus (location contains a preferred destination)
    + category bonus * fraction of item categories the user prefers
    + style bonus (travel style matches). Neutral base without preferences.
    """
    if preferences is None:
        return config.relevance_base

    score = config.relevance_base

    if item.location and any(
        _contains(item.location, dest) for dest in preferences.preferred_destinations
    ):
        score += config.relevance_destination_bonus

    if item.categories and preferences.preferred_categories:
        preferred = set(preferences.preferred_categories)
        matches = sum(1 for cat in item.categories if cat in preferred)
        score += (matches / len(item.categories)) * config.relevance_category_bonus

    if (
        preferences.travel_style
        and item.travel_style
        and item.travel_style == preferences.travel_style
    ):
        score += config.relevance_style_bonus

    return clamp(score)


def popularity_score(
    metrics: Optional[EngagementMetrics],
    config: DiscoveryConfig = DEFAULT_CONFIG,
) -> float:
    """Log-scaled weighted engagement so one viral item cannot swamp the scale."""
    if metrics is None:
        return config.popularity_default

    total = (
        max(metrics.view_count, 0) * config.engagement_weight_view
        + max(metrics.save_count, 0) * config.engagement_weight_save
        + max(metrics.like_count, 0) * config.engagement_weight_like
        + max(metrics.comment_count, 0) * config.engagement_weight_comment
        + max(metrics.share_count, 0) * config.engagement_weight_share
    )
    return clamp(math.log10(total + 1) / config.popularity_log_divisor)


def freshness_score(
    item: ContentItem,
    now: Optional[datetime] = None,
    config: DiscoveryConfig = DEFAULT_CONFIG,
) -> float:
    """exp(-days / decay) from the later of created_at and updated_at."""
    age = days_since(item.last_touched_at, now)
    return clamp(exp_decay(age, config.freshness_decay_days))


def completeness_score(item: ContentItem, config: DiscoveryConfig = DEFAULT_CONFIG) -> float:
    """Checklist of filled-in fields, capped at 1.0."""
    score = 0.0
    if item.title:
        score += config.completeness_title
    if item.description and len(item.description) > config.min_description_length:
        score += config.completeness_description
    if item.location:
        score += config.completeness_location
    if item.start_date and item.end_date:
        score += config.completeness_dates
    if item.activities:
        score += config.completeness_activities
    if item.image_url:
        score += config.completeness_image
    return min(score, 1.0)


def quality_score(
    item: ContentItem,
    metrics: Optional[EngagementMetrics] = None,
    config: DiscoveryConfig = DEFAULT_CONFIG,
) -> float:
    """Completeness blended with normalized average rating (0.5 when unrated)."""
    if metrics is None:
        metrics = item.metrics
    rating_score = config.quality_default_rating_score
    if metrics is not None and metrics.average_rating > 0:
        rating_score = clamp(metrics.average_rating / 5.0)
    score = (
        completeness_score(item, config) * config.quality_weight_completeness
        + rating_score * config.quality_weight_rating
    )
    return clamp(score)


def proximity_score(
    item: ContentItem,
    user_location: Optional[str] = None,
    user_coordinates: Optional[Coordinates] = None,
    config: DiscoveryConfig = DEFAULT_CONFIG,
) -> float:
    """
    Match on location text first, then on great-circle distance when both
    sides carry coordinates. Neutral when nothing can be compared.
    """
    if _contains(item.location, user_location):
        return config.proximity_match
    distance = distance_km(user_coordinates, item.coordinates)
    if distance is not None and distance <= config.nearby_radius_km:
        return config.proximity_match
    return config.proximity_neutral
