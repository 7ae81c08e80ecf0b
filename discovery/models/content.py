"""
Content model — typed representation of a recommendable catalog item.

Used by filters, factor calculators, reasons, and the feed composer instead of raw dicts.
Built from catalog rows via ContentItem.model_validate(d); rows arrive already joined
with engagement metrics and category tags.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..utils.scores import as_utc

ContentKind = Literal["itinerary", "deal", "promotion", "user", "destination"]

CONTENT_KINDS = ("itinerary", "deal", "promotion", "user", "destination")

logger = logging.getLogger(__name__)


def one_or_none(value: Any) -> Any:
    """
    Collapse a joined relation that may arrive as an object, a list, or nothing.

    Supabase-style joins return a single row for one-to-one relations on some query
    paths and a single-element list on others.
    """
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


class Coordinates(BaseModel):
    """A geographic point in decimal degrees."""

    latitude: float
    longitude: float


def coerce_coordinates(value: Any) -> Optional[Coordinates]:
    """
    Coordinates from a model or mapping; None when missing or unparseable.

    Bad location data only costs an item its proximity signal.
    """
    if value is None or isinstance(value, Coordinates):
        return value
    try:
        return Coordinates.model_validate(value)
    except ValidationError:
        logger.warning("[content] MALFORMED_COORDINATES_IGNORED value=%r", value)
        return None


class EngagementMetrics(BaseModel):
    """
    Per-item engagement counters, updated by the interaction-recording collaborator.

    trending_score is written back by the host after a trending batch run.
    """

    model_config = ConfigDict(extra="allow")

    view_count: int = 0
    save_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    share_count: int = 0
    average_rating: float = 0.0
    trending_score: float = 0.0
    updated_at: Optional[datetime] = None

    @field_validator(
        "view_count", "save_count", "like_count", "comment_count", "share_count",
        mode="before",
    )
    @classmethod
    def _null_counter(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("average_rating", "trending_score", mode="before")
    @classmethod
    def _null_float(cls, v: Any) -> Any:
        return 0.0 if v is None else v


class ContentItem(BaseModel):
    """
    Catalog item payload used across the engine stages.

    All fields except id are optional to support partial rows from the catalog.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    kind: ContentKind = "itinerary"
    owner_id: Optional[str] = None
    title: Optional[str] = ""
    description: Optional[str] = ""
    location: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    categories: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    is_public: bool = True
    travel_style: Optional[str] = None
    budget: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    activities: List[Any] = []
    image_url: Optional[str] = None
    price: Optional[float] = None
    metrics: Optional[EngagementMetrics] = None

    @field_validator("metrics", mode="before")
    @classmethod
    def _collapse_join(cls, v: Any) -> Any:
        return one_or_none(v)

    @field_validator("coordinates", mode="before")
    @classmethod
    def _lenient_coordinates(cls, v: Any) -> Any:
        return coerce_coordinates(one_or_none(v))

    @field_validator("categories", mode="before")
    @classmethod
    def _category_rows(cls, v: Any) -> Any:
        # Join rows look like {"category": "beach"}; a bare string is one tag.
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        tags = []
        for entry in v:
            if isinstance(entry, dict):
                entry = entry.get("category")
            if entry:
                tags.append(entry)
        return tags

    @field_validator("activities", mode="before")
    @classmethod
    def _null_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("start_date", "end_date", "created_at", "updated_at", mode="before")
    @classmethod
    def _blank_date(cls, v: Any) -> Any:
        return None if v == "" else v

    @property
    def primary_category(self) -> Optional[str]:
        """Primary (first) category tag for this item."""
        return self.categories[0] if self.categories else None

    @property
    def last_touched_at(self) -> Optional[datetime]:
        """The later of created_at and updated_at."""
        stamps = [d for d in (self.created_at, self.updated_at) if d is not None]
        if not stamps:
            return None
        return max(stamps, key=as_utc)


def ensure_items(items: List[Union[Dict[str, Any], "ContentItem"]]) -> List["ContentItem"]:
    """Convert list of dicts or ContentItems to list of ContentItem models."""
    return [
        ContentItem.model_validate(i) if isinstance(i, dict) else i
        for i in items or []
    ]


def ensure_item(item: Union[Dict[str, Any], "ContentItem"]) -> "ContentItem":
    """Convert one dict or ContentItem to a ContentItem."""
    return ContentItem.model_validate(item) if isinstance(item, dict) else item
