"""
Feed models — request filters, per-kind catalogs, and the sectioned DiscoveryFeed.

Field aliases match the camelCase keys the web client sends and expects.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .content import ContentItem
from .reasons import RecommendationReason


class DateRange(BaseModel):
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class DiscoveryFilters(BaseModel):
    """Catalog filters. Every field is optional; absence means no constraint."""

    model_config = ConfigDict(populate_by_name=True)

    categories: Optional[List[str]] = None
    location: Optional[str] = None
    date_range: Optional[DateRange] = Field(default=None, alias="dateRange")
    search_query: Optional[str] = Field(default=None, alias="searchQuery")
    price_range: Optional[Tuple[float, float]] = Field(default=None, alias="priceRange")
    types: Optional[List[str]] = None
    limit: Optional[int] = Field(default=None, ge=0)
    offset: int = Field(default=0, ge=0)

    @field_validator("date_range", mode="before")
    @classmethod
    def _pair_to_range(cls, v: Any) -> Any:
        # Older clients send [start, end].
        if isinstance(v, (list, tuple)):
            start = v[0] if len(v) > 0 else None
            end = v[1] if len(v) > 1 else None
            return {"start": start or None, "end": end or None}
        return v


class CatalogsByKind(BaseModel):
    """Candidate items grouped by kind, as the catalog collaborator returns them."""

    itineraries: List[ContentItem] = []
    deals: List[ContentItem] = []
    promotions: List[ContentItem] = []
    destinations: List[ContentItem] = []
    users: List[ContentItem] = []


class FeedEntry(BaseModel):
    item: ContentItem
    score: float
    reasons: List[RecommendationReason]


class SimilarEntry(FeedEntry):
    """A feed entry grouped under one of the user's top categories."""

    category: str


class DiscoveryFeed(BaseModel):
    """The seven named sections. Sections are independent and may overlap."""

    model_config = ConfigDict(populate_by_name=True)

    personal_recommendations: List[FeedEntry] = Field(
        default_factory=list, alias="personalRecommendations"
    )
    trending: List[FeedEntry] = Field(default_factory=list)
    for_you: List[FeedEntry] = Field(default_factory=list, alias="forYou")
    nearby: List[FeedEntry] = Field(default_factory=list)
    friends_liked: List[FeedEntry] = Field(default_factory=list, alias="friendsLiked")
    seasonal: List[FeedEntry] = Field(default_factory=list)
    similar: List[SimilarEntry] = Field(default_factory=list)

    def sections(self) -> Dict[str, List[FeedEntry]]:
        """Section name (camelCase) -> entries."""
        return {
            "personalRecommendations": self.personal_recommendations,
            "trending": self.trending,
            "forYou": self.for_you,
            "nearby": self.nearby,
            "friendsLiked": self.friends_liked,
            "seasonal": self.seasonal,
            "similar": list(self.similar),
        }


def ensure_filters(
    filters: Optional[Union[Dict[str, Any], DiscoveryFilters]],
) -> DiscoveryFilters:
    """Convert a dict (or None) to DiscoveryFilters."""
    if filters is None:
        return DiscoveryFilters()
    if isinstance(filters, dict):
        return DiscoveryFilters.model_validate(filters)
    return filters
