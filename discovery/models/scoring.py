"""
Scoring models — ScoredItem and the trending batch command.

Contains:
- ScoredItem: a catalog item with its five factor scores and combined score
- TrendingUpdate: one {item_id, trending_score} write for the host to persist
"""

from typing import List, Optional

from pydantic import BaseModel

from .content import ContentItem
from .reasons import RecommendationReason


class ScoredItem(BaseModel):
    """An item with all its scoring components. Built per request, never persisted."""

    item: ContentItem
    relevance_score: float
    popularity_score: float
    freshness_score: float
    quality_score: float
    proximity_score: float
    # Weighted combination before the placement boost; always in [0, 1].
    base_score: float
    final_score: float
    boost_multiplier: float = 1.0
    # Filled by rank for the returned page; None on internal reranking lists.
    reasons: Optional[List[RecommendationReason]] = None


class TrendingUpdate(BaseModel):
    """Batch write produced by the trending estimator."""

    item_id: str
    trending_score: float


class SimilarItem(BaseModel):
    """An item ranked by feature overlap with a source item."""

    item: ContentItem
    similarity_score: float
    final_score: float
