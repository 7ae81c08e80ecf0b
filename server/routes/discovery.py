"""Discovery endpoints: ranked page, sectioned feed, similar items."""

import logging
from typing import Optional, Tuple

from fastapi import APIRouter, HTTPException, Query

from discovery import Coordinates, UserBehaviorSignals, UserPreferences, build_feed, find_similar, rank
from discovery.providers import UserSignalsProvider

from ..models import FeedRequest, RankRequest
from ..state import get_state

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_signals(signals: UserSignalsProvider, user_id: Optional[str]) -> Tuple[
    Optional[UserPreferences], Optional[UserBehaviorSignals], Optional[str], Optional[Coordinates]
]:
    """(preferences, behavior, location, coordinates) for user_id; all None when anonymous."""
    if not user_id:
        return None, None, None, None
    return (
        signals.get_preferences(user_id),
        signals.get_behavior(user_id),
        signals.get_location(user_id),
        signals.get_coordinates(user_id),
    )


@router.post("/rank")
def rank_items(request: RankRequest):
    """Rank the public catalog for a user (or anonymously) and return one page."""
    state = get_state()
    store = state.store
    user_id = request.user_id
    if user_id and not store.has_user(user_id):
        logger.info("[discovery] UNKNOWN_USER user_id=%s, ranking without signals", user_id)

    preferences, behavior, location, coordinates = _user_signals(store, user_id)
    filters = request.filters
    scored = rank(
        store.get_items(),
        user_id,
        filters,
        preferences=preferences,
        user_location=location,
        user_coordinates=coordinates,
        owner_tiers=store.get_owner_tiers(),
        behavior=behavior,
        trending_ids=store.top_trending_ids(state.config.trending_top_n),
        config=state.discovery_config,
    )
    return {
        "user_id": user_id,
        "items": [s.model_dump(mode="json") for s in scored],
        "count": len(scored),
        "offset": filters.offset if filters else 0,
    }


@router.post("/feed")
def discovery_feed(request: FeedRequest):
    """Build the seven-section discovery feed."""
    state = get_state()
    store = state.store
    user_id = request.user_id

    preferences, behavior, _, coordinates = _user_signals(store, user_id)
    behavior = behavior or UserBehaviorSignals()
    location = request.location or coordinates

    trending_ids = request.trending_ids
    if trending_ids is None:
        trending_ids = store.top_trending_ids(state.config.trending_top_n)

    feed = build_feed(
        user_id,
        behavior.feed_context(preferences, location),
        behavior.social_graph(),
        store.catalogs_by_kind(),
        trending_ids,
        request.filters,
        config=state.discovery_config,
    )
    return feed.model_dump(mode="json", by_alias=True)


@router.get("/similar/{item_id}")
def similar_items(item_id: str, limit: int = Query(6, ge=1, le=50)):
    """Items similar to item_id."""
    state = get_state()
    source = state.store.get_item(item_id)
    if source is None:
        raise HTTPException(status_code=404, detail="Item not found")
    similar = find_similar(
        source,
        state.store.get_items(),
        limit,
        config=state.discovery_config,
    )
    return {
        "item_id": item_id,
        "similar": [s.model_dump(mode="json") for s in similar],
    }
