"""
Source valuation: the ranking ``value_score`` and the classifier's
composite score.

Value score formula (weighted sum, approximate range 0–100)
-----------------------------------------------------------
    value_score = (
        mention_rate     * 0.30   # raw 0–100
        + soa            * 0.30   # raw 0–100
        + sentiment_norm * 0.20   # sentiment / max_sentiment * 100, capped at 100
        + citations_norm * 0.10   # citations / max_citations * 100
        + topics_norm    * 0.10   # len(topics) / max_topics * 100
    )

No clamping is applied to the total.

Composite score (classifier only, fractional scale 0–1)
--------------------------------------------------------
    composite = (
        mention / 100            * 0.35
        + soa / 100              * 0.35
        + sentiment_fraction     * 0.20   # min(1, sentiment / max_sentiment)
        + citations_fraction     * 0.10   # citations / max_citations
    )

The composite omits topics and weights its terms differently from the value
score. The two blends are independent: changing one must not change the other.
"""

from __future__ import annotations

from dataclasses import dataclass

from source_valuation.models.source import SourceData
from source_valuation.scoring.normalize import fractional_citations, fractional_sentiment


@dataclass(frozen=True)
class ValueScoreComponents:
    """All terms of a source's value score, each on the 0–100 scale.

    Attributes:
        mention_rate:   Raw mention rate (already 0–100).
        soa:            Raw share of answers (already 0–100).
        sentiment_norm: Sentiment relative to the batch maximum, capped at 100.
        citations_norm: Citations relative to the batch maximum.
        topics_norm:    Topic count relative to the batch maximum.
    """

    mention_rate:   float
    soa:            float
    sentiment_norm: float
    citations_norm: float
    topics_norm:    float

    @property
    def total(self) -> float:
        """Weighted value score.  Not clamped."""
        return (
            self.mention_rate     * 0.3
            + self.soa            * 0.3
            + self.sentiment_norm * 0.2
            + self.citations_norm * 0.1
            + self.topics_norm    * 0.1
        )


def compute_value_components(
    source:        SourceData,
    max_citations: float,
    max_topics:    float,
    max_sentiment: float,
) -> ValueScoreComponents:
    """Normalize one source's signals against the batch maxima.

    Args:
        source:        The source to score.
        max_citations: Batch maximum of ``citations`` (floored at 1).
        max_topics:    Batch maximum of ``len(topics)`` (floored at 1).
        max_sentiment: Batch maximum of ``sentiment`` (floored at 1).

    Returns:
        ValueScoreComponents with every term on the 0–100 scale.
    """
    if max_sentiment > 0:
        sentiment_norm = min(100, (source.sentiment / max_sentiment) * 100)
    else:
        sentiment_norm = 0
    citations_norm = (source.citations / max_citations) * 100 if max_citations > 0 else 0
    topics_norm    = (len(source.topics) / max_topics) * 100 if max_topics > 0 else 0

    return ValueScoreComponents(
        mention_rate=source.mention_rate,
        soa=source.soa,
        sentiment_norm=sentiment_norm,
        citations_norm=citations_norm,
        topics_norm=topics_norm,
    )


def value_score_for_source(
    source:        SourceData,
    max_citations: float,
    max_topics:    float,
    max_sentiment: float,
) -> float:
    """Weighted value score for one source (see module docstring)."""
    return compute_value_components(
        source, max_citations, max_topics, max_sentiment
    ).total


def composite_score(
    mention:       float,
    soa:           float,
    sentiment:     float,
    citations:     float,
    max_citations: float,
    max_sentiment: float,
) -> float:
    """The classifier's 0–1 composite blend for one source.

    Used both to build the batch-level composite thresholds and to classify
    each source, so both sides see bit-identical values.
    """
    mention_norm   = mention / 100
    soa_norm       = soa / 100
    sentiment_norm = fractional_sentiment(sentiment, max_sentiment)
    citations_norm = fractional_citations(citations, max_citations)
    return (
        mention_norm     * 0.35
        + soa_norm       * 0.35
        + sentiment_norm * 0.2
        + citations_norm * 0.1
    )
