"""Shared utilities for scoring, time decay, and geo distance."""

from .geo import distance_km, haversine_km
from .scores import as_utc, clamp, days_since, exp_decay, utc_now

__all__ = [
    "as_utc",
    "clamp",
    "days_since",
    "distance_km",
    "exp_decay",
    "haversine_km",
    "utc_now",
]
