#!/usr/bin/env python3
"""
Diversity Reranker Tests

Greedy pass: unique primary category / location for the first 10 slots,
backfill by score up to 20, short lists untouched.

Run:
----
    pytest tests/test_diversity.py -v
"""

from discovery import diversify

from tests.conftest import make_item, make_scored


def _ranked(specs):
    """specs: (id, category, location) in descending score order."""
    n = len(specs)
    return [
        make_scored(make_item(i, categories=[c] if c else [], location=loc), (n - idx) / n)
        for idx, (i, c, loc) in enumerate(specs)
    ]


def _ids(scored):
    return [s.item.id for s in scored]


class TestDiversify:

    def test_short_list_unchanged(self):
        ranked = _ranked([(f"i{k}", "beach", "Bali") for k in range(5)])
        assert _ids(diversify(ranked)) == _ids(ranked)

    def test_unique_categories_first_then_backfill(self):
        ranked = _ranked([
            ("a1", "A", None), ("a2", "A", None),
            ("b1", "B", None), ("b2", "B", None),
            ("c1", "C", None), ("c2", "C", None),
        ])
        assert _ids(diversify(ranked)) == ["a1", "b1", "c1", "a2", "b2", "c2"]

    def test_repeated_location_deferred(self):
        ranked = _ranked([
            ("p1", "food", "Paris"), ("p2", "art", "Paris"),
            ("r1", "food", "Rome"), ("r2", "art", "Rome"),
            ("t1", "hike", "Tokyo"), ("t2", "art", "Tokyo"),
        ])
        # r1 shares food with p1, r2 takes Rome with a new category
        assert _ids(diversify(ranked))[:3] == ["p1", "r2", "t1"]

    def test_caps_at_twenty(self):
        ranked = _ranked([(f"i{k}", f"c{k}", f"loc{k}") for k in range(35)])
        result = diversify(ranked)
        assert len(result) == 20
        assert _ids(result) == _ids(ranked)[:20]

    def test_never_repeats_an_item(self):
        ranked = _ranked([(f"i{k % 4}", f"c{k}", None) for k in range(12)])
        ids = _ids(diversify(ranked))
        assert len(ids) == len(set(ids)) == 4

    def test_input_not_mutated(self):
        ranked = _ranked([(f"i{k}", "same", None) for k in range(8)])
        before = _ids(ranked)
        diversify(ranked)
        assert _ids(ranked) == before
