"""
Reason generation — "why recommended" explanations and the additive reason score.

generate_reasons emits labelled, weighted reasons from the user's history, the
social graph, trending ids, distance, and upcoming dates. calculate_score turns
reasons plus recency/popularity into the simple explainable score used to order
the discovery feed. It is deliberately independent of the multi-factor score in
stages.ranking; the two are not expected to agree.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..models.config import DiscoveryConfig, resolve_config
from ..models.content import Coordinates
from ..models.reasons import RecommendationReason
from ..utils.geo import distance_km
from ..utils.scores import as_utc, utc_now

FALLBACK_REASON = RecommendationReason(
    source="trending",
    weight=0.3,
    description="Popular with users like you",
)

# Meteorological seasons, northern hemisphere.
_SEASON_BY_MONTH = {
    12: "winter", 1: "winter", 2: "winter",
    3: "spring", 4: "spring", 5: "spring",
    6: "summer", 7: "summer", 8: "summer",
    9: "fall", 10: "fall", 11: "fall",
}


def season_for(moment: datetime) -> str:
    return _SEASON_BY_MONTH[moment.month]


def _friends_who_liked(item_id: str, friend_likes: Optional[Dict[str, List[str]]]) -> List[str]:
    if not friend_likes:
        return []
    return [friend for friend, likes in friend_likes.items() if likes and item_id in likes]


def _upcoming_within(
    start: Optional[datetime],
    now: Optional[datetime],
    window_days: int,
) -> bool:
    if start is None:
        return False
    now = as_utc(now) if now is not None else utc_now()
    delta = (as_utc(start) - now).total_seconds() / 86400
    return 0 <= delta <= window_days


def generate_reasons(
    item_id: str,
    *,
    owner_id: Optional[str] = None,
    item_kind: Optional[str] = None,
    liked: Optional[Iterable[str]] = (),
    searched: Optional[Iterable[str]] = (),
    viewed: Optional[Iterable[str]] = (),
    friend_likes: Optional[Dict[str, List[str]]] = None,
    followed: Optional[Iterable[str]] = (),
    trending_ids: Optional[Iterable[str]] = (),
    user_location: Optional[Coordinates] = None,
    item_location: Optional[Coordinates] = None,
    item_start_date: Optional[datetime] = None,
    now: Optional[datetime] = None,
    config: Optional[DiscoveryConfig] = None,
) -> List[RecommendationReason]:
    """
    Explain why item_id would be shown to this user.

    Always returns at least one reason: when nothing specific fires, a single
    generic trending reason (weight 0.3, "Popular with users like you").
    """
    config = resolve_config(config)
    reasons: List[RecommendationReason] = []

    if item_id in set(liked or ()):
        reasons.append(RecommendationReason(
            source="liked", weight=1.0, description="Based on items you've liked",
        ))

    if item_id in set(searched or ()):
        reasons.append(RecommendationReason(
            source="searched", weight=0.8, description="Based on your recent searches",
        ))

    if item_id in set(viewed or ()):
        reasons.append(RecommendationReason(
            source="viewed", weight=0.5, description="Because you viewed this recently",
        ))

    friends = _friends_who_liked(item_id, friend_likes)
    if friends:
        noun = "friend" if len(friends) == 1 else "friends"
        reasons.append(RecommendationReason(
            source="friend",
            weight=0.7,
            description=f"{len(friends)} {noun} liked this",
            related_items=friends,
        ))

    followed_set = set(followed or ())
    # A user card is "from" the user it shows.
    if (owner_id and owner_id in followed_set) or (item_kind == "user" and item_id in followed_set):
        reasons.append(RecommendationReason(
            source="followed", weight=0.6, description="From someone you follow",
        ))

    if item_id in set(trending_ids or ()):
        reasons.append(RecommendationReason(
            source="trending", weight=0.4, description="Trending right now",
        ))

    distance = distance_km(user_location, item_location)
    if distance is not None and distance <= config.nearby_radius_km:
        reasons.append(RecommendationReason(
            source="location", weight=0.6, description=f"{round(distance)}km from you",
        ))

    if _upcoming_within(item_start_date, now, config.seasonal_window_days):
        reasons.append(RecommendationReason(
            source="seasonal",
            weight=0.5,
            description=f"Perfect for {season_for(item_start_date)}",
        ))

    if not reasons:
        reasons.append(FALLBACK_REASON)

    return reasons


def calculate_score(
    reasons: List[RecommendationReason],
    recency: float,
    popularity: float,
    config: Optional[DiscoveryConfig] = None,
) -> float:
    """
    Additive reason score.

    sum(weight * base_points[source]) + recency * time_decay * 10 + popularity * 5,
    with recency and popularity in [0, 1].
    """
    config = resolve_config(config)
    base = sum(
        reason.weight * config.reason_base_points.get(reason.source, 0.0)
        for reason in reasons
    )
    recency_boost = recency * config.reason_time_decay * config.reason_recency_scale
    popularity_boost = popularity * config.reason_popularity_scale
    return base + recency_boost + popularity_boost
