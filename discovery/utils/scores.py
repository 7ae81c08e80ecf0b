"""
Score helpers — clamping, time deltas, and exponential decay used by every stage.
"""

import math
from datetime import datetime, timezone
from typing import Optional

# Age used when an item carries no usable timestamp; decays to ~0 everywhere.
UNKNOWN_AGE_DAYS = 999.0

SECONDS_PER_DAY = 60 * 60 * 24


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def as_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so aware and naive stamps compare."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def days_since(moment: Optional[datetime], now: Optional[datetime] = None) -> float:
    """
    Fractional days elapsed since moment.

    Future moments count as 0 days; a missing moment counts as UNKNOWN_AGE_DAYS.
    """
    if moment is None:
        return UNKNOWN_AGE_DAYS
    now = as_utc(now) if now is not None else utc_now()
    elapsed = (now - as_utc(moment)).total_seconds() / SECONDS_PER_DAY
    return max(0.0, elapsed)


def exp_decay(days_old: float, decay_days: float) -> float:
    """exp(-days_old / decay_days); 1.0 at age 0, ~0.37 at one decay constant."""
    if decay_days <= 0:
        return 0.0
    return math.exp(-days_old / decay_days)
