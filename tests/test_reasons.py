#!/usr/bin/env python3
"""
Reason Generator Tests

Covers the additive reason score table, the fallback reason, the 50 km
location rule, friend pluralisation, followed owners, and upcoming-trip
seasonal reasons.

Run:
----
    pytest tests/test_reasons.py -v
"""

from datetime import datetime, timedelta

import pytest

from discovery import Coordinates, RecommendationReason, calculate_score, generate_reasons

from tests.conftest import LOS_ANGELES, NOW, NYC, TIMES_SQUARE

BASE_POINTS = {
    "liked": 10,
    "searched": 8,
    "viewed": 5,
    "friend": 7,
    "followed": 6,
    "trending": 4,
    "location": 6,
    "seasonal": 3,
}


def _reason(source, weight=1.0):
    return RecommendationReason(source=source, weight=weight, description=source)


class TestCalculateScore:

    def test_single_liked(self):
        assert calculate_score([_reason("liked")], 0, 0) == pytest.approx(10)

    def test_liked_and_searched(self):
        reasons = [_reason("liked", 1.0), _reason("searched", 0.8)]
        assert calculate_score(reasons, 0, 0) == pytest.approx(16.4)

    def test_recency_only(self):
        assert calculate_score([], 1, 0) == pytest.approx(8)

    def test_popularity_only(self):
        assert calculate_score([], 0, 1) == pytest.approx(5)

    def test_zero(self):
        assert calculate_score([], 0, 0) == 0

    def test_all_sources(self):
        reasons = [_reason(source) for source in BASE_POINTS]
        assert calculate_score(reasons, 0, 0) == pytest.approx(49)

    @pytest.mark.parametrize("source,weight", [
        ("viewed", 0.5), ("friend", 0.7), ("location", 0.6), ("seasonal", 0.5),
    ])
    def test_weight_times_points(self, source, weight):
        expected = weight * BASE_POINTS[source]
        assert calculate_score([_reason(source, weight)], 0, 0) == pytest.approx(expected)


class TestGenerateReasons:

    def test_fallback_when_nothing_matches(self):
        reasons = generate_reasons("x")
        assert len(reasons) == 1
        assert reasons[0].weight == 0.3
        assert reasons[0].description == "Popular with users like you"

    def test_history_reasons_in_order(self):
        reasons = generate_reasons("x", liked=["x"], searched=["x"], viewed=["x"])
        assert [r.source for r in reasons] == ["liked", "searched", "viewed"]
        assert [r.weight for r in reasons] == [1.0, 0.8, 0.5]

    def test_one_friend(self):
        reasons = generate_reasons("x", friend_likes={"f1": ["x"], "f2": ["y"]})
        [friend] = reasons
        assert friend.description == "1 friend liked this"
        assert friend.related_items == ["f1"]

    def test_many_friends(self):
        reasons = generate_reasons("x", friend_likes={"f1": ["x"], "f2": ["x", "y"], "f3": []})
        [friend] = reasons
        assert friend.description == "2 friends liked this"
        assert len(friend.related_items) == 2

    def test_followed_owner(self):
        reasons = generate_reasons("x", owner_id="u1", followed=["u1"])
        assert [r.source for r in reasons] == ["followed"]
        assert reasons[0].weight == 0.6

    def test_followed_user_card(self):
        reasons = generate_reasons("u1", item_kind="user", followed=["u1"])
        assert [r.source for r in reasons] == ["followed"]

    def test_trending(self):
        [reason] = generate_reasons("x", trending_ids=["x"])
        assert (reason.source, reason.weight, reason.description) == ("trending", 0.4, "Trending right now")

    def test_location_within_radius(self):
        reasons = generate_reasons(
            "x",
            user_location=Coordinates(**NYC),
            item_location=Coordinates(**TIMES_SQUARE),
        )
        [location] = reasons
        assert location.source == "location"
        assert location.weight == 0.6
        assert location.description == "5km from you"

    def test_no_location_reason_far_away(self):
        reasons = generate_reasons(
            "x",
            user_location=Coordinates(**NYC),
            item_location=Coordinates(**LOS_ANGELES),
        )
        assert "location" not in [r.source for r in reasons]

    def test_no_location_reason_without_coordinates(self):
        reasons = generate_reasons("x", user_location=Coordinates(**NYC))
        assert reasons[0].description == "Popular with users like you"

    def test_seasonal_for_upcoming_trip(self):
        start = NOW + timedelta(days=20)
        [reason] = generate_reasons("x", item_start_date=start, now=NOW)
        assert reason.source == "seasonal"
        assert reason.description == "Perfect for summer"

    def test_no_seasonal_for_distant_or_past_trip(self):
        for start in (NOW + timedelta(days=200), NOW - timedelta(days=1)):
            reasons = generate_reasons("x", item_start_date=start, now=NOW)
            assert [r.source for r in reasons] == ["trending"]

    def test_naive_start_date(self):
        start = datetime(2026, 12, 24)
        [reason] = generate_reasons("x", item_start_date=start, now=NOW + timedelta(days=150))
        assert reason.description == "Perfect for winter"

    def test_none_history_falls_back(self):
        reasons = generate_reasons(
            "x", liked=None, searched=None, viewed=None, friend_likes=None,
            followed=None, trending_ids=None,
        )
        assert [r.description for r in reasons] == ["Popular with users like you"]
