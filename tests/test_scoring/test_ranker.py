"""
Tests for source_valuation.scoring.ranker.

What we test
------------
quadrant_counts():
  - All four quadrants present in display order, zero-filled.
filter_by_quadrant():
  - None returns everything; a quadrant keeps input order.
  - Unknown quadrant raises ValueError.
top_n_per_quadrant():
  - value_score descending, ties keep input order, at most n per quadrant.
"""

from __future__ import annotations

import pytest

from source_valuation.models.source import QUADRANT_ORDER
from source_valuation.scoring.ranker import (
    filter_by_quadrant,
    quadrant_counts,
    top_n_per_quadrant,
)


@pytest.fixture
def classified(make_enhanced):
    return [
        make_enhanced("a.com", quadrant="priority", value_score=70),
        make_enhanced("b.com", quadrant="growth", value_score=40),
        make_enhanced("c.com", quadrant="priority", value_score=90),
        make_enhanced("d.com", quadrant="priority", value_score=70),
        make_enhanced("e.com", quadrant="monitor", value_score=10),
    ]


class TestQuadrantCounts:
    def test_counts(self, classified):
        assert quadrant_counts(classified) == {
            "priority": 3,
            "reputation": 0,
            "growth": 1,
            "monitor": 1,
        }

    def test_empty(self):
        counts = quadrant_counts([])
        assert list(counts) == list(QUADRANT_ORDER)
        assert set(counts.values()) == {0}


class TestFilterByQuadrant:
    def test_none_returns_all(self, classified):
        assert filter_by_quadrant(classified, None) == classified

    def test_filter_keeps_order(self, classified):
        names = [s.name for s in filter_by_quadrant(classified, "priority")]
        assert names == ["a.com", "c.com", "d.com"]

    def test_empty_quadrant(self, classified):
        assert filter_by_quadrant(classified, "reputation") == []

    def test_unknown_quadrant_raises(self, classified):
        with pytest.raises(ValueError, match="Unknown quadrant"):
            filter_by_quadrant(classified, "stars")


class TestTopNPerQuadrant:
    def test_sorted_desc_with_stable_ties(self, classified):
        top = top_n_per_quadrant(classified)
        assert [s.name for s in top["priority"]] == ["c.com", "a.com", "d.com"]

    def test_all_quadrants_present(self, classified):
        top = top_n_per_quadrant(classified)
        assert list(top) == list(QUADRANT_ORDER)
        assert top["reputation"] == []

    def test_n_limits_results(self, classified):
        top = top_n_per_quadrant(classified, n=1)
        assert [s.name for s in top["priority"]] == ["c.com"]
        assert len(top["growth"]) == 1

    def test_n_zero(self, classified):
        top = top_n_per_quadrant(classified, n=0)
        assert all(items == [] for items in top.values())
