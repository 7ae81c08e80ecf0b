"""Shared fixtures: a fixed clock and small item / scored-item factories."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from discovery import ContentItem, DiscoveryConfig, ScoredItem

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)

SAMPLE_CATALOG = Path(__file__).resolve().parent.parent / "data" / "catalog.json"

NYC = {"latitude": 40.7128, "longitude": -74.0060}
TIMES_SQUARE = {"latitude": 40.7580, "longitude": -73.9855}
LOS_ANGELES = {"latitude": 34.0522, "longitude": -118.2437}


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config():
    return DiscoveryConfig()


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def make_item(item_id: str, **fields) -> ContentItem:
    """ContentItem with a fresh created_at unless one is given."""
    fields.setdefault("created_at", NOW)
    return ContentItem.model_validate({"id": item_id, **fields})


def make_scored(item: ContentItem, score: float) -> ScoredItem:
    """ScoredItem whose every factor equals score (enough for reranking tests)."""
    return ScoredItem(
        item=item,
        relevance_score=score,
        popularity_score=score,
        freshness_score=score,
        quality_score=score,
        proximity_score=score,
        base_score=score,
        final_score=score,
    )
