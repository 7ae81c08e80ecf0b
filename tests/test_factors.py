#!/usr/bin/env python3
"""
Factor Calculator Tests

Each of the five factors maps (item, context) to [0, 1] and falls back to a
neutral value when context is missing.

Run:
----
    pytest tests/test_factors.py -v
"""

import math
from datetime import timedelta

import pytest

from discovery import (
    Coordinates,
    EngagementMetrics,
    UserPreferences,
    completeness_score,
    freshness_score,
    popularity_score,
    proximity_score,
    quality_score,
    relevance_score,
)

from tests.conftest import LOS_ANGELES, NOW, NYC, TIMES_SQUARE, days_ago, make_item


class TestRelevance:
    """Relevance: base 0.5 plus destination, category, and style bonuses."""

    def test_neutral_without_preferences(self):
        item = make_item("a", location="Lisbon, Portugal", categories=["culture"])
        assert relevance_score(item, None) == 0.5

    def test_all_bonuses(self):
        item = make_item(
            "a",
            location="Lisbon, Portugal",
            categories=["culture", "city"],
            travel_style="adventurous",
        )
        prefs = UserPreferences(
            preferred_destinations=["lisbon"],
            preferred_categories=["culture"],
            travel_style="adventurous",
        )
        # 0.5 + 0.2 destination + 0.2 * 1/2 categories + 0.1 style
        assert relevance_score(item, prefs) == pytest.approx(0.9)

    def test_capped_at_one(self, config):
        tuned = config.model_copy(update={"relevance_base": 0.9})
        item = make_item("a", location="Kyoto", categories=["nature"], travel_style="slow")
        prefs = UserPreferences(
            preferred_destinations=["Kyoto"],
            preferred_categories=["nature"],
            travel_style="slow",
        )
        assert relevance_score(item, prefs, tuned) == 1.0

    def test_blank_destination_never_matches(self):
        item = make_item("a", location="Rome, Italy")
        prefs = UserPreferences(preferred_destinations=["  "])
        assert relevance_score(item, prefs) == 0.5


class TestPopularity:
    """Popularity: log10 of weighted engagement over 4, capped at 1."""

    def test_default_without_metrics(self):
        assert popularity_score(None) == 0.3

    def test_zero_engagement(self):
        assert popularity_score(EngagementMetrics()) == 0.0

    def test_weighted_log_scale(self):
        # 1*9 views + 3*30 likes = 99 -> log10(100) / 4
        metrics = EngagementMetrics(view_count=9, like_count=30)
        assert popularity_score(metrics) == pytest.approx(0.5)

    def test_viral_item_capped(self):
        metrics = EngagementMetrics(view_count=10_000_000, share_count=1_000_000)
        assert popularity_score(metrics) == 1.0


class TestFreshness:
    """Freshness: exp(-days / 30) from the later of created/updated."""

    def test_brand_new(self):
        assert freshness_score(make_item("a", created_at=NOW), NOW) == pytest.approx(1.0)

    def test_one_decay_constant(self):
        item = make_item("a", created_at=days_ago(30))
        assert freshness_score(item, NOW) == pytest.approx(math.exp(-1))

    def test_updated_at_wins_when_later(self):
        item = make_item("a", created_at=days_ago(90), updated_at=days_ago(3))
        assert freshness_score(item, NOW) == pytest.approx(math.exp(-0.1))

    def test_future_timestamp_clamps(self):
        item = make_item("a", created_at=NOW + timedelta(days=2))
        assert freshness_score(item, NOW) == 1.0

    def test_missing_timestamp_is_stale(self):
        item = make_item("a", created_at=None)
        assert freshness_score(item, NOW) < 1e-10


class TestQuality:
    """Quality: 0.6 * completeness + 0.4 * rating (0.5 when unrated)."""

    def test_bare_item(self):
        item = make_item("a")
        assert completeness_score(item) == 0.0
        assert quality_score(item) == pytest.approx(0.2)

    def test_complete_and_top_rated(self):
        item = make_item(
            "a",
            title="Coast road",
            description="Ten days driving the coast.",
            location="Big Sur, CA",
            start_date=days_ago(-10),
            end_date=days_ago(-20),
            activities=["hiking"],
            image_url="https://img.example.com/a.jpg",
            metrics={"average_rating": 5},
        )
        assert completeness_score(item) == pytest.approx(0.8)
        assert quality_score(item) == pytest.approx(0.6 * 0.8 + 0.4)

    def test_short_description_not_counted(self):
        item = make_item("a", description="Nice trip")
        assert completeness_score(item) == 0.0

    def test_only_start_date_not_counted(self):
        item = make_item("a", start_date=NOW)
        assert completeness_score(item) == 0.0


class TestProximity:
    """Proximity: text match or within 50 km -> 1.0, otherwise neutral 0.5."""

    def test_text_match(self):
        item = make_item("a", location="Paris, France")
        assert proximity_score(item, "paris") == 1.0

    def test_nearby_coordinates(self):
        item = make_item("a", location="Manhattan", coordinates=TIMES_SQUARE)
        assert proximity_score(item, "Brooklyn", Coordinates(**NYC)) == 1.0

    def test_far_coordinates(self):
        item = make_item("a", location="Los Angeles", coordinates=LOS_ANGELES)
        assert proximity_score(item, "New York", Coordinates(**NYC)) == 0.5

    def test_neutral_without_user_location(self):
        item = make_item("a", location="Paris, France")
        assert proximity_score(item) == 0.5

    def test_neutral_with_malformed_coordinates(self):
        item = make_item("a", coordinates={"latitude": 123.0, "longitude": 10.0})
        assert proximity_score(item, None, Coordinates(**NYC)) == 0.5


class TestBounds:
    """All factors stay in [0, 1] across a spread of inputs."""

    @pytest.mark.parametrize("views,likes,rating,age", [
        (0, 0, 0, 0),
        (-5, -1, 7.5, 400),
        (10 ** 9, 10 ** 9, 5, -3),
        (1, 100, 0.1, 0.5),
    ])
    def test_factor_bounds(self, views, likes, rating, age):
        item = make_item(
            "a",
            title="t",
            location="Somewhere",
            categories=["x"],
            created_at=days_ago(age),
            metrics={"view_count": views, "like_count": likes, "average_rating": rating},
        )
        prefs = UserPreferences(preferred_categories=["x"], preferred_destinations=["Some"])
        scores = [
            relevance_score(item, prefs),
            popularity_score(item.metrics),
            freshness_score(item, NOW),
            quality_score(item),
            proximity_score(item, "somewhere"),
        ]
        assert all(0.0 <= s <= 1.0 for s in scores)
