"""Request bodies for the discovery and trending endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from discovery import Coordinates, DiscoveryFilters


class RankRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    filters: Optional[DiscoveryFilters] = None


class FeedRequest(BaseModel):
    """trending_ids=None means use the store's current top trending items."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    filters: Optional[DiscoveryFilters] = None
    trending_ids: Optional[List[str]] = Field(default=None, alias="trendingIds")
    location: Optional[Coordinates] = None
