"""
Pipeline orchestrator — filter the catalog, rank it, diversify, paginate.

The main entry point is rank, which returns one page of ScoredItems. find_similar
reuses it to surface items that share features with a source item.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Union

from ..models.config import DiscoveryConfig, resolve_config
from ..models.content import ContentItem, Coordinates, coerce_coordinates, ensure_item, ensure_items
from ..models.feed import DiscoveryFilters, ensure_filters
from ..models.scoring import ScoredItem, SimilarItem
from ..models.signals import UserBehaviorSignals, UserPreferences, ensure_behavior, ensure_preferences
from ..utils.scores import clamp
from .filters import apply_filters, public_only
from .ranking import rank_candidates
from .reasons import generate_reasons

logger = logging.getLogger(__name__)


def _paginate(items: List, offset: int, limit: int) -> List:
    return items[offset:offset + limit]


def _retrieve_candidates(
    catalog: List[ContentItem],
    filters: DiscoveryFilters,
) -> List[ContentItem]:
    """Public items that pass the request filters."""
    return apply_filters(public_only(catalog), filters)


def _with_reasons(
    page: List[ScoredItem],
    behavior: Optional[UserBehaviorSignals],
    trending_ids: Iterable[str],
    user_coordinates: Optional[Coordinates],
    config: DiscoveryConfig,
    now: Optional[datetime],
) -> List[ScoredItem]:
    """Attach "why recommended" reasons to each item on the page."""
    behavior = behavior or UserBehaviorSignals()
    trending = set(trending_ids)
    return [
        scored.model_copy(update={"reasons": generate_reasons(
            scored.item.id,
            owner_id=scored.item.owner_id,
            item_kind=scored.item.kind,
            liked=behavior.liked,
            searched=behavior.searched,
            viewed=behavior.viewed,
            friend_likes=behavior.friend_likes,
            followed=behavior.following,
            trending_ids=trending,
            user_location=user_coordinates,
            item_location=scored.item.coordinates,
            item_start_date=scored.item.start_date,
            now=now,
            config=config,
        )})
        for scored in page
    ]


def rank(
    catalog: List[Union[Dict, ContentItem]],
    user_id: Optional[str] = None,
    filters: Union[DiscoveryFilters, Dict, None] = None,
    *,
    preferences: Union[UserPreferences, Dict, None] = None,
    user_location: Optional[str] = None,
    user_coordinates: Union[Coordinates, Dict, None] = None,
    owner_tiers: Optional[Mapping[str, str]] = None,
    behavior: Union[UserBehaviorSignals, Dict, None] = None,
    trending_ids: Optional[Iterable[str]] = None,
    config: Optional[DiscoveryConfig] = None,
    now: Optional[datetime] = None,
) -> List[ScoredItem]:
    """
    Rank a catalog for one user (or an anonymous visitor when user_id is None).

    Steps: drop non-public items, apply filters, score (five factors, weighted sum,
    placement boost for owners in owner_tiers), sort, diversify, then slice
    filters.offset .. offset + filters.limit (default page size from config).
    Each item on the page carries its reasons, built from behavior (history and
    social graph) and trending_ids; anonymous callers get the generic fallback.

    Returns:
        One page of ScoredItems, highest final_score first within the diversified head.
    """
    # Resolve config (use defaults when None)
    config = resolve_config(config)

    # Normalize inputs to models (hosts pass dicts)
    items = ensure_items(catalog)
    filters = ensure_filters(filters)
    user_coordinates = coerce_coordinates(user_coordinates)
    prefs = ensure_preferences(preferences) if user_id else None
    history = ensure_behavior(behavior) if user_id else None
    if preferences is not None and not user_id:
        logger.warning("[rank] PREFERENCES_IGNORED_FOR_ANONYMOUS_USER")

    candidates = _retrieve_candidates(items, filters)
    if not candidates:
        logger.info("[rank] NO_CANDIDATES_AFTER_FILTERS user_id=%s catalog=%s", user_id, len(items))
        return []

    ranked = rank_candidates(
        candidates,
        config,
        preferences=prefs,
        user_location=user_location,
        user_coordinates=user_coordinates,
        owner_tiers=owner_tiers,
        now=now,
    )

    limit = filters.limit if filters.limit is not None else config.default_page_size
    page = _paginate(ranked, filters.offset, limit)
    return _with_reasons(page, history, trending_ids or (), user_coordinates, config, now)


def similarity_to(
    source: ContentItem,
    candidate: ContentItem,
    config: Optional[DiscoveryConfig] = None,
) -> float:
    """
    Feature overlap with the source item, capped at 1.

    base + location containment + category bonus * share of source categories
    matched + same travel style + same budget (weights from config.similar_*).
    """
    config = resolve_config(config)
    score = config.similar_base
    if (
        candidate.location
        and source.location
        and source.location.lower() in candidate.location.lower()
    ):
        score += config.similar_location_bonus
    if source.categories and candidate.categories:
        matching = sum(1 for cat in candidate.categories if cat in source.categories)
        score += (matching / len(source.categories)) * config.similar_category_bonus
    if source.travel_style and source.travel_style == candidate.travel_style:
        score += config.similar_style_bonus
    if source.budget and source.budget == candidate.budget:
        score += config.similar_budget_bonus
    return clamp(score)


def find_similar(
    source: Union[Dict, ContentItem],
    catalog: List[Union[Dict, ContentItem]],
    limit: int = 6,
    *,
    config: Optional[DiscoveryConfig] = None,
    now: Optional[datetime] = None,
) -> List[SimilarItem]:
    """
    Items that share the source's categories and location, most similar first.

    Ranks the catalog anonymously with the source's categories and location as
    filters, drops the source itself, then orders by similarity_to.
    """
    source = ensure_item(source)
    filters = DiscoveryFilters(
        categories=source.categories or None,
        location=source.location or None,
        limit=limit + 1,
    )
    ranked = rank(catalog, None, filters, config=config, now=now)
    similar = [
        SimilarItem(
            item=scored.item,
            similarity_score=similarity_to(source, scored.item, config),
            final_score=scored.final_score,
        )
        for scored in ranked
        if scored.item.id != source.id
    ][:limit]
    similar.sort(key=lambda s: s.similarity_score, reverse=True)
    return similar
