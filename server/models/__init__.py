"""Pydantic request models for the API."""

from .requests import FeedRequest, RankRequest

__all__ = [
    "FeedRequest",
    "RankRequest",
]
