"""
Ranking: five factor scores blended into one score, sorted, then diversified.

Public API: rank_candidates, score_candidates, diversify, build_scored_item.
- core: main orchestration (rank_candidates).
- Submodules: factors, combiner, diversity.
"""

from .combiner import build_scored_item, combine_factors, placement_multiplier
from .core import rank_candidates, score_candidates
from .diversity import diversify
from .factors import (
    completeness_score,
    freshness_score,
    popularity_score,
    proximity_score,
    quality_score,
    relevance_score,
)

__all__ = [
    "build_scored_item",
    "combine_factors",
    "completeness_score",
    "diversify",
    "freshness_score",
    "placement_multiplier",
    "popularity_score",
    "proximity_score",
    "quality_score",
    "rank_candidates",
    "relevance_score",
    "score_candidates",
]
