"""
User signal models — preferences, behavior history, and the per-request social view.

Owned and mutated by the profile and interaction-recording collaborators; read-only here.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .content import Coordinates, coerce_coordinates


def _none_to_list(v: Any) -> Any:
    return [] if v is None else v


def _friend_likes(v: Any) -> Any:
    """None -> {}; a friend with None likes -> []."""
    if v is None:
        return {}
    if isinstance(v, dict):
        return {friend: [] if likes is None else likes for friend, likes in v.items()}
    return v


class UserPreferences(BaseModel):
    """Stated preferences from onboarding / settings."""

    model_config = ConfigDict(extra="allow")

    preferred_destinations: List[str] = []
    preferred_activities: List[str] = []
    preferred_categories: List[str] = []
    travel_style: Optional[str] = None
    budget_preference: Optional[str] = None

    @field_validator(
        "preferred_destinations", "preferred_activities", "preferred_categories",
        mode="before",
    )
    @classmethod
    def _lists(cls, v: Any) -> Any:
        return _none_to_list(v)


class SocialGraph(BaseModel):
    """Friends' likes (friend id -> liked item ids) and followed user ids."""

    friends: Dict[str, List[str]] = Field(default_factory=dict)
    following: List[str] = []

    @field_validator("friends", mode="before")
    @classmethod
    def _friends(cls, v: Any) -> Any:
        return _friend_likes(v)

    @field_validator("following", mode="before")
    @classmethod
    def _lists(cls, v: Any) -> Any:
        return _none_to_list(v)


class FeedUserContext(BaseModel):
    """
    What the feed composer knows about the requesting user.

    categories may repeat; repetition counts toward the user's top categories.
    """

    likes: List[str] = []
    searches: List[str] = []
    views: List[str] = []
    categories: List[str] = []
    location: Optional[Coordinates] = None

    @field_validator("likes", "searches", "views", "categories", mode="before")
    @classmethod
    def _lists(cls, v: Any) -> Any:
        return _none_to_list(v)

    @field_validator("location", mode="before")
    @classmethod
    def _lenient_location(cls, v: Any) -> Any:
        return coerce_coordinates(v)


class UserBehaviorSignals(BaseModel):
    """
    Recency-ordered interaction history (newest first).

    friend_likes maps friend user id -> liked item ids; following lists followed user ids.
    """

    model_config = ConfigDict(extra="allow")

    viewed: List[str] = []
    liked: List[str] = []
    saved: List[str] = []
    searched: List[str] = []
    friend_likes: Dict[str, List[str]] = Field(default_factory=dict)
    following: List[str] = []

    @field_validator("viewed", "liked", "saved", "searched", "following", mode="before")
    @classmethod
    def _lists(cls, v: Any) -> Any:
        return _none_to_list(v)

    @field_validator("friend_likes", mode="before")
    @classmethod
    def _friends(cls, v: Any) -> Any:
        return _friend_likes(v)

    def social_graph(self) -> SocialGraph:
        return SocialGraph(friends=self.friend_likes, following=self.following)

    def feed_context(
        self,
        preferences: Optional[UserPreferences] = None,
        location: Optional[Coordinates] = None,
    ) -> FeedUserContext:
        """Build the feed view from history plus stated category preferences."""
        categories = list(preferences.preferred_categories) if preferences else []
        return FeedUserContext(
            likes=self.liked,
            searches=self.searched,
            views=self.viewed,
            categories=categories,
            location=location,
        )


def ensure_preferences(
    preferences: Optional[Union[Dict[str, Any], UserPreferences]],
) -> Optional[UserPreferences]:
    """Convert a dict to UserPreferences; None stays None."""
    if preferences is None:
        return None
    if isinstance(preferences, dict):
        return UserPreferences.model_validate(preferences)
    return preferences


def ensure_behavior(
    behavior: Optional[Union[Dict[str, Any], UserBehaviorSignals]],
) -> Optional[UserBehaviorSignals]:
    """Convert a dict to UserBehaviorSignals; None stays None."""
    if behavior is None:
        return None
    if isinstance(behavior, dict):
        return UserBehaviorSignals.model_validate(behavior)
    return behavior
