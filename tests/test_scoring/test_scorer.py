"""
Tests for source_valuation.scoring.scorer and scoring.normalize.

What we test
------------
compute_maxima():
  - Maxima are floored at 1 (all-zero batches never divide by zero).
compute_value_components() / value_score_for_source():
  - Each term is normalised against the batch maxima.
  - Sentiment is capped at 100; citations and topics are not capped.
  - Weighted total uses 0.3 / 0.3 / 0.2 / 0.1 / 0.1.
composite_score():
  - Fractional 0-1 blend with 0.35 / 0.35 / 0.2 / 0.1 weights.
  - Topics never contribute.
"""

from __future__ import annotations

import pytest

from source_valuation.scoring.normalize import (
    compute_maxima,
    fractional_citations,
    fractional_sentiment,
)
from source_valuation.scoring.scorer import (
    ValueScoreComponents,
    composite_score,
    compute_value_components,
    value_score_for_source,
)


# ── normalize ─────────────────────────────────────────────────────────────────

class TestComputeMaxima:
    def test_maxima_of_batch(self, two_source_batch):
        m = compute_maxima(two_source_batch)
        assert m.max_citations == 40
        assert m.max_topics == 2
        assert m.max_sentiment == 50

    def test_all_zero_batch_floored_at_one(self, make_source):
        m = compute_maxima([make_source(sentiment=0, citations=0, topics=())])
        assert m.max_citations == 1
        assert m.max_topics == 1
        assert m.max_sentiment == 1

    def test_fractional_sentiment_capped_at_one(self):
        assert fractional_sentiment(80, 40) == 1

    def test_fractional_sentiment_zero_max(self):
        assert fractional_sentiment(10, 0) == 0

    def test_fractional_citations(self):
        assert fractional_citations(5, 40) == pytest.approx(0.125)


# ── value score ───────────────────────────────────────────────────────────────

class TestValueScoreComponents:
    def test_total_weights(self):
        c = ValueScoreComponents(
            mention_rate=100, soa=0, sentiment_norm=0, citations_norm=0, topics_norm=0
        )
        assert c.total == pytest.approx(30.0)

        c = ValueScoreComponents(
            mention_rate=0, soa=0, sentiment_norm=100, citations_norm=0, topics_norm=0
        )
        assert c.total == pytest.approx(20.0)

        c = ValueScoreComponents(
            mention_rate=0, soa=0, sentiment_norm=0, citations_norm=0, topics_norm=100
        )
        assert c.total == pytest.approx(10.0)

    def test_total_not_clamped(self):
        c = ValueScoreComponents(
            mention_rate=100, soa=100, sentiment_norm=100, citations_norm=300, topics_norm=100
        )
        assert c.total == pytest.approx(120.0)


class TestComputeValueComponents:
    def test_strong_source(self, two_source_batch):
        c = compute_value_components(two_source_batch[0], 40, 2, 50)
        assert c.mention_rate == 80
        assert c.soa == 70
        assert c.sentiment_norm == pytest.approx(100.0)
        assert c.citations_norm == pytest.approx(100.0)
        assert c.topics_norm == pytest.approx(100.0)
        assert c.total == pytest.approx(85.0)

    def test_weak_source(self, two_source_batch):
        c = compute_value_components(two_source_batch[1], 40, 2, 50)
        assert c.sentiment_norm == pytest.approx(20.0)
        assert c.citations_norm == pytest.approx(12.5)
        assert c.topics_norm == pytest.approx(50.0)
        assert c.total == pytest.approx(20.75)

    def test_sentiment_norm_capped(self, make_source):
        c = compute_value_components(make_source(sentiment=90), 10, 1, 45)
        assert c.sentiment_norm == 100

    def test_value_score_for_source_matches_total(self, two_source_batch):
        s = two_source_batch[0]
        assert value_score_for_source(s, 40, 2, 50) == pytest.approx(
            compute_value_components(s, 40, 2, 50).total
        )

    def test_zero_signals_score_zero(self, make_source):
        s = make_source(mention_rate=0, soa=0, sentiment=0, citations=0, topics=())
        assert value_score_for_source(s, 1, 1, 1) == 0


# ── composite ─────────────────────────────────────────────────────────────────

class TestCompositeScore:
    def test_strong_source(self):
        assert composite_score(80, 70, 50, 40, 40, 50) == pytest.approx(0.825)

    def test_weak_source(self):
        assert composite_score(20, 15, 10, 5, 40, 50) == pytest.approx(0.175)

    def test_full_marks_is_one(self):
        assert composite_score(100, 100, 50, 40, 40, 50) == pytest.approx(1.0)

    def test_sentiment_capped(self):
        capped = composite_score(0, 0, 500, 0, 1, 50)
        assert capped == pytest.approx(0.2)

    def test_zero_max_sentiment(self):
        assert composite_score(0, 0, 10, 0, 1, 0) == 0
