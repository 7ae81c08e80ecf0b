"""
Recommendation reason — a labelled, weighted explanation for why an item surfaced.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ReasonSource = Literal[
    "liked",
    "searched",
    "viewed",
    "friend",
    "followed",
    "trending",
    "location",
    "seasonal",
]


class RecommendationReason(BaseModel):
    """
    source: which signal fired.
    weight: strength of the signal in (0, 1].
    description: display text, e.g. "2 friends liked this".
    related_items: ids behind the reason (e.g. the friends who liked the item).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: ReasonSource
    weight: float = Field(gt=0.0, le=1.0)
    description: str
    related_items: Optional[List[str]] = Field(default=None, alias="relatedItems")
