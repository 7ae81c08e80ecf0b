"""
Catalog filters applied before scoring.

Filters: content type allow-list, category allow-list, location substring,
date range, free-text search, price range. Each is optional; an absent filter
never removes an item.

The public entry point is apply_filters.
"""

from datetime import datetime
from typing import List, Optional

from ..models.content import ContentItem
from ..models.feed import DateRange, DiscoveryFilters
from ..utils.scores import as_utc


def _icontains(text: Optional[str], query: str) -> bool:
    return bool(text) and query.lower() in text.lower()


def _matches_types(item: ContentItem, types: Optional[List[str]]) -> bool:
    """True if no type filter or the item kind is allowed."""
    if not types:
        return True
    return item.kind in types


def _matches_categories(item: ContentItem, categories: Optional[List[str]]) -> bool:
    """True if no category filter or the item carries at least one allowed category."""
    if not categories:
        return True
    allowed = set(categories)
    return any(cat in allowed for cat in item.categories)


def _matches_location(item: ContentItem, location: Optional[str]) -> bool:
    if not location or not location.strip():
        return True
    return _icontains(item.location, location.strip())


def _on_or_after(value: datetime, bound: datetime) -> bool:
    return as_utc(value) >= as_utc(bound)


def _on_or_before(value: datetime, bound: datetime) -> bool:
    return as_utc(value) <= as_utc(bound)


def _matches_date_range(item: ContentItem, date_range: Optional[DateRange]) -> bool:
    """
    start_date >= range start and end_date <= range end. Undated items pass;
    an item with only a start date is bounded on both sides by that date.
    """
    if date_range is None or (date_range.start is None and date_range.end is None):
        return True
    if item.start_date is None and item.end_date is None:
        return True
    start = item.start_date or item.end_date
    end = item.end_date or item.start_date
    if date_range.start is not None and not _on_or_after(start, date_range.start):
        return False
    if date_range.end is not None and not _on_or_before(end, date_range.end):
        return False
    return True


def _matches_search(item: ContentItem, query: Optional[str]) -> bool:
    """Case-insensitive match against title, description, or location."""
    if not query or not query.strip():
        return True
    q = query.strip()
    return (
        _icontains(item.title, q)
        or _icontains(item.description, q)
        or _icontains(item.location, q)
    )


def _matches_price(item: ContentItem, price_range) -> bool:
    """Inclusive bounds for priced items; unpriced items pass."""
    if price_range is None or item.price is None:
        return True
    low, high = price_range
    return low <= item.price <= high


def public_only(items: List[ContentItem]) -> List[ContentItem]:
    """Drop items their owners have not made public."""
    return [item for item in items if item.is_public]


def passes_filters(item: ContentItem, filters: DiscoveryFilters) -> bool:
    """True if the item satisfies every filter that is set."""
    if not _matches_types(item, filters.types):
        return False
    if not _matches_categories(item, filters.categories):
        return False
    if not _matches_location(item, filters.location):
        return False
    if not _matches_date_range(item, filters.date_range):
        return False
    if not _matches_search(item, filters.search_query):
        return False
    if not _matches_price(item, filters.price_range):
        return False
    return True


def apply_filters(
    items: List[ContentItem],
    filters: Optional[DiscoveryFilters] = None,
) -> List[ContentItem]:
    """Return items that pass every filter, preserving catalog order."""
    if filters is None:
        return list(items)
    return [item for item in items if passes_filters(item, filters)]
