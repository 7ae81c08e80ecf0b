"""Pipeline stages: filters, ranking, trending batch, reasons, feed composition."""

from .feed import build_feed, flatten_catalogs, score_feed_entries
from .filters import apply_filters, passes_filters, public_only
from .orchestrator import find_similar, rank, similarity_to
from .ranking import diversify, rank_candidates
from .reasons import FALLBACK_REASON, calculate_score, generate_reasons
from .trending import (
    apply_trending_updates,
    top_trending_ids,
    trending_update,
    wilson_lower_bound,
)

__all__ = [
    "FALLBACK_REASON",
    "apply_filters",
    "apply_trending_updates",
    "build_feed",
    "calculate_score",
    "diversify",
    "find_similar",
    "flatten_catalogs",
    "generate_reasons",
    "passes_filters",
    "public_only",
    "rank",
    "rank_candidates",
    "score_feed_entries",
    "similarity_to",
    "top_trending_ids",
    "trending_update",
    "wilson_lower_bound",
]
