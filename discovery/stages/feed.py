"""
Feed composer — builds the seven named discovery sections for one request.

Every catalog item is filtered, explained (generate_reasons), and scored with
the additive reason score, using the freshness and popularity factors as its
recency and popularity inputs. Sections are independent selections over the
same sorted list and may overlap; within a section an item appears once.
"""

import logging
from collections import Counter
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Set, Union

from ..models.config import DiscoveryConfig, resolve_config
from ..models.content import ContentItem
from ..models.feed import (
    CatalogsByKind,
    DiscoveryFeed,
    DiscoveryFilters,
    FeedEntry,
    SimilarEntry,
    ensure_filters,
)
from ..models.signals import FeedUserContext, SocialGraph
from .filters import apply_filters, public_only
from .ranking.factors import freshness_score, popularity_score
from .reasons import calculate_score, generate_reasons

logger = logging.getLogger(__name__)

_KIND_BY_BUCKET = (
    ("itineraries", "itinerary"),
    ("deals", "deal"),
    ("promotions", "promotion"),
    ("destinations", "destination"),
    ("users", "user"),
)

_HISTORY_SOURCES = {"liked", "searched", "viewed"}


def flatten_catalogs(catalogs: CatalogsByKind) -> List[ContentItem]:
    """All items across buckets, each tagged with its bucket's kind."""
    items: List[ContentItem] = []
    for bucket, kind in _KIND_BY_BUCKET:
        for item in getattr(catalogs, bucket):
            items.append(item if item.kind == kind else item.model_copy(update={"kind": kind}))
    return items


def _unique_take(entries: Iterable[FeedEntry], limit: int) -> List[FeedEntry]:
    """First `limit` entries with no repeated item id."""
    out: List[FeedEntry] = []
    seen: Set[str] = set()
    for entry in entries:
        if len(out) >= limit:
            break
        if entry.item.id in seen:
            continue
        seen.add(entry.item.id)
        out.append(entry)
    return out


def _with_reason(entries: List[FeedEntry], predicate: Callable[[str], bool]) -> List[FeedEntry]:
    return [e for e in entries if any(predicate(r.source) for r in e.reasons)]


def _trending_value(entry: FeedEntry) -> float:
    metrics = entry.item.metrics
    return metrics.trending_score if metrics is not None else 0.0


def _trending_section(
    entries: List[FeedEntry],
    trending_ids: Set[str],
    limit: int,
) -> List[FeedEntry]:
    """Items flagged trending by the caller or by a stored trending_score."""
    candidates = [
        e for e in entries
        if e.item.id in trending_ids or _trending_value(e) > 0
    ]
    # entries are already score-sorted; stable sort keeps that as the tie-break
    candidates.sort(key=_trending_value, reverse=True)
    return _unique_take(candidates, limit)


def top_categories(categories: List[str], n: int) -> List[str]:
    """Most frequent categories first; ties keep first-seen order."""
    counts = Counter(c for c in categories if c)
    return [cat for cat, _ in counts.most_common(n)]


def _similar_section(
    entries: List[FeedEntry],
    categories: List[str],
    config: DiscoveryConfig,
) -> List[SimilarEntry]:
    out: List[SimilarEntry] = []
    seen: Set[str] = set()
    for category in top_categories(categories, config.similar_top_categories):
        taken = 0
        for entry in entries:
            if taken >= config.similar_items_per_category or len(out) >= config.section_limit:
                break
            if category not in entry.item.categories or entry.item.id in seen:
                continue
            seen.add(entry.item.id)
            out.append(SimilarEntry(
                item=entry.item, score=entry.score, reasons=entry.reasons, category=category,
            ))
            taken += 1
    return out


def _ensure_model(model, value):
    """Validate a dict (or None) into model; model instances pass through."""
    if isinstance(value, model):
        return value
    return model.model_validate(value or {})


def score_feed_entries(
    items: List[ContentItem],
    user: FeedUserContext,
    social: SocialGraph,
    trending_ids: Iterable[str],
    config: DiscoveryConfig,
    now: Optional[datetime] = None,
) -> List[FeedEntry]:
    """Explain and score every item; sorted by score, highest first (stable)."""
    trending = list(trending_ids or ())
    entries: List[FeedEntry] = []
    for item in items:
        reasons = generate_reasons(
            item.id,
            owner_id=item.owner_id,
            item_kind=item.kind,
            liked=user.likes,
            searched=user.searches,
            viewed=user.views,
            friend_likes=social.friends,
            followed=social.following,
            trending_ids=trending,
            user_location=user.location,
            item_location=item.coordinates,
            item_start_date=item.start_date,
            now=now,
            config=config,
        )
        recency = freshness_score(item, now, config)
        popularity = popularity_score(item.metrics, config)
        entries.append(FeedEntry(
            item=item,
            score=calculate_score(reasons, recency, popularity, config),
            reasons=reasons,
        ))
    entries.sort(key=lambda e: e.score, reverse=True)
    return entries


def build_feed(
    user_id: Optional[str],
    preferences: Union[FeedUserContext, Dict, None],
    social: Union[SocialGraph, Dict, None],
    catalogs: Union[CatalogsByKind, Dict, None],
    trending_ids: Optional[Iterable[str]] = (),
    filters: Union[DiscoveryFilters, Dict, None] = None,
    *,
    config: Optional[DiscoveryConfig] = None,
    now: Optional[datetime] = None,
) -> DiscoveryFeed:
    """
    Build the discovery feed.

    Sections (limits from config):
    - personalRecommendations: top items overall (5)
    - trending: caller-flagged or stored-trending items, by trending_score (10)
    - forYou: items the user liked, searched, or viewed (10)
    - nearby: items within the nearby radius (10)
    - friendsLiked: items any friend liked (10)
    - seasonal: items starting soon (10)
    - similar: items in the user's top categories, labelled by category (10)
    """
    config = resolve_config(config)
    user = _ensure_model(FeedUserContext, preferences)
    social = _ensure_model(SocialGraph, social)
    catalogs = _ensure_model(CatalogsByKind, catalogs)
    filters = ensure_filters(filters)

    items = apply_filters(public_only(flatten_catalogs(catalogs)), filters)
    if not items:
        logger.info("[feed] EMPTY_CATALOG_AFTER_FILTERS user_id=%s", user_id)
        return DiscoveryFeed()

    trending_set = set(trending_ids or ())
    entries = score_feed_entries(items, user, social, trending_set, config, now)
    limit = config.section_limit

    feed = DiscoveryFeed(
        personal_recommendations=_unique_take(entries, config.personal_section_limit),
        trending=_trending_section(entries, trending_set, limit),
        for_you=_unique_take(_with_reason(entries, lambda s: s in _HISTORY_SOURCES), limit),
        nearby=_unique_take(_with_reason(entries, lambda s: s == "location"), limit),
        friends_liked=_unique_take(_with_reason(entries, lambda s: s == "friend"), limit),
        seasonal=_unique_take(_with_reason(entries, lambda s: s == "seasonal"), limit),
        similar=_similar_section(entries, user.categories, config),
    )
    logger.debug(
        "[feed] BUILT user_id=%s items=%s sections=%s",
        user_id,
        len(entries),
        {name: len(section) for name, section in feed.sections().items()},
    )
    return feed
