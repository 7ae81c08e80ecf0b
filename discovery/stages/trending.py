"""
Trending estimator — periodic batch over the whole catalog.

trending = w_wilson * wilson_lower_bound(likes, views) + w_recency * exp(-days / 7)

The Wilson lower bound (95% by default) keeps low-traffic items with a lucky
like ratio from outranking well-sampled ones; the recency term keeps the list
from calcifying around old viral items. The estimator returns TrendingUpdate
commands and never mutates its input; persisting them is the host's job.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Union

import numpy as np

from ..models.config import DiscoveryConfig, resolve_config
from ..models.content import ContentItem, ensure_items
from ..models.scoring import TrendingUpdate
from ..utils.scores import days_since

logger = logging.getLogger(__name__)


def wilson_lower_bound(positive, total, z: float = 1.96):
    """
    Lower bound of the Wilson score interval for a proportion.

    Accepts scalars or arrays. total == 0 yields 0; the observed ratio is
    clamped to [0, 1] so out-of-order counters cannot produce NaN.
    """
    pos = np.asarray(positive, dtype=float)
    n = np.asarray(total, dtype=float)
    has_samples = n > 0
    safe_n = np.where(has_samples, n, 1.0)
    p = np.clip(np.maximum(pos, 0.0) / safe_n, 0.0, 1.0)
    z2 = z * z
    centre = p + z2 / (2 * safe_n)
    margin = z * np.sqrt((p * (1 - p) + z2 / (4 * safe_n)) / safe_n)
    bound = (centre - margin) / (1 + z2 / safe_n)
    result = np.where(has_samples, np.clip(bound, 0.0, 1.0), 0.0)
    if result.ndim == 0:
        return float(result)
    return result


def _last_update(item: ContentItem) -> Optional[datetime]:
    """Metrics row update time, else the item's own latest touch."""
    if item.metrics is not None and item.metrics.updated_at is not None:
        return item.metrics.updated_at
    return item.last_touched_at


def trending_scores(
    items: List[ContentItem],
    now: Optional[datetime] = None,
    config: Optional[DiscoveryConfig] = None,
) -> np.ndarray:
    """Blended trending score for each item (items must carry metrics)."""
    config = resolve_config(config)
    if not items:
        return np.zeros(0)
    views = np.array([max(i.metrics.view_count, 0) for i in items], dtype=float)
    likes = np.array([i.metrics.like_count for i in items], dtype=float)
    ages = np.array([days_since(_last_update(i), now) for i in items], dtype=float)

    wilson = wilson_lower_bound(likes, views, config.trending_z)
    recency = np.exp(-ages / config.trending_recency_decay_days)
    return config.trending_weight_wilson * wilson + config.trending_weight_recency * recency


def trending_update(
    catalog: List[Union[Dict, ContentItem]],
    now: Optional[datetime] = None,
    config: Optional[DiscoveryConfig] = None,
) -> List[TrendingUpdate]:
    """
    Compute new trending scores for every item that has metrics.

    Returns:
        One TrendingUpdate per scored item, in catalog order.
    """
    items = ensure_items(catalog)
    with_metrics = [i for i in items if i.metrics is not None]
    skipped = len(items) - len(with_metrics)
    if skipped:
        logger.info("[trending] ITEMS_WITHOUT_METRICS_SKIPPED skipped=%s total=%s", skipped, len(items))

    scores = trending_scores(with_metrics, now, config)
    updates = [
        TrendingUpdate(item_id=item.id, trending_score=float(score))
        for item, score in zip(with_metrics, scores)
    ]
    logger.info("[trending] BATCH_COMPLETE updated=%s", len(updates))
    return updates


def apply_trending_updates(
    items: List[ContentItem],
    updates: List[TrendingUpdate],
) -> List[ContentItem]:
    """
    Return copies of items with metrics.trending_score replaced from updates.

    Items without an update (or without metrics) are returned unchanged.
    """
    by_id = {u.item_id: u.trending_score for u in updates}
    out = []
    for item in items:
        score = by_id.get(item.id)
        if score is None or item.metrics is None:
            out.append(item)
            continue
        metrics = item.metrics.model_copy(update={"trending_score": score})
        out.append(item.model_copy(update={"metrics": metrics}))
    return out


def top_trending_ids(updates: List[TrendingUpdate], n: int) -> List[str]:
    """Ids of the n highest trending scores; ties keep batch order."""
    ranked = sorted(updates, key=lambda u: u.trending_score, reverse=True)
    return [u.item_id for u in ranked[:max(n, 0)]]
