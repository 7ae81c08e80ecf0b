"""
Main ranking orchestration: score every candidate, sort, then diversify.

Submodules used: factors, combiner, diversity.
"""

import logging
from datetime import datetime
from typing import List, Mapping, Optional

from ...models.config import DEFAULT_CONFIG, DiscoveryConfig
from ...models.content import ContentItem, Coordinates
from ...models.scoring import ScoredItem
from ...models.signals import UserPreferences
from .combiner import build_scored_item
from .diversity import diversify

logger = logging.getLogger(__name__)


def score_candidates(
    candidates: List[ContentItem],
    config: DiscoveryConfig = DEFAULT_CONFIG,
    preferences: Optional[UserPreferences] = None,
    user_location: Optional[str] = None,
    user_coordinates: Optional[Coordinates] = None,
    owner_tiers: Optional[Mapping[str, str]] = None,
    now: Optional[datetime] = None,
) -> List[ScoredItem]:
    """Score each candidate and sort by final_score, highest first (stable)."""
    scored = [
        build_scored_item(
            item,
            config,
            preferences=preferences,
            user_location=user_location,
            user_coordinates=user_coordinates,
            owner_tiers=owner_tiers,
            now=now,
        )
        for item in candidates
    ]
    scored.sort(key=lambda s: s.final_score, reverse=True)
    return scored


def rank_candidates(
    candidates: List[ContentItem],
    config: DiscoveryConfig = DEFAULT_CONFIG,
    preferences: Optional[UserPreferences] = None,
    user_location: Optional[str] = None,
    user_coordinates: Optional[Coordinates] = None,
    owner_tiers: Optional[Mapping[str, str]] = None,
    now: Optional[datetime] = None,
) -> List[ScoredItem]:
    """
    Rank candidates with the weighted multi-factor score, then apply the
    category/location diversity pass.

    Without preferences every item gets neutral relevance; without a user
    location every item gets neutral proximity.
    """
    # 1) Score and sort
    scored = score_candidates(
        candidates,
        config,
        preferences=preferences,
        user_location=user_location,
        user_coordinates=user_coordinates,
        owner_tiers=owner_tiers,
        now=now,
    )

    boosted = sum(1 for s in scored if s.boost_multiplier != 1.0)
    if boosted:
        logger.debug("[rank] PLACEMENT_BOOST_APPLIED boosted=%s total=%s", boosted, len(scored))

    # 2) Diversity: unique category/location in the head, backfill the rest
    return diversify(scored, config)
