"""
Batch-relative normalization of citation, topic and sentiment signals.

Citations, topic counts and sentiment have no fixed ceiling, so each is
scaled against the largest value observed in the current batch. Every
maximum is floored at 1 so a batch where a field is uniformly zero never
divides by zero.

``compute_maxima()`` must run once per batch, never once per source.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from source_valuation.models.source import SourceData


@dataclass(frozen=True)
class DatasetMaxima:
    """Per-field maxima of one batch, each floored at 1.

    Attributes:
        max_citations: Largest ``citations`` in the batch (>= 1).
        max_topics:    Largest ``len(topics)`` in the batch (>= 1).
        max_sentiment: Largest ``sentiment`` in the batch (>= 1).
    """

    max_citations: float
    max_topics:    float
    max_sentiment: float


def compute_maxima(sources: Sequence[SourceData]) -> DatasetMaxima:
    """Compute floored per-field maxima for a batch of sources."""
    return DatasetMaxima(
        max_citations=max([s.citations for s in sources] + [1]),
        max_topics=max([len(s.topics) for s in sources] + [1]),
        max_sentiment=max([s.sentiment for s in sources] + [1]),
    )


def fractional_sentiment(sentiment: float, max_sentiment: float) -> float:
    """Sentiment on the 0–1 scale, capped at 1."""
    if max_sentiment > 0:
        return min(1, sentiment / max_sentiment)
    return 0


def fractional_citations(citations: float, max_citations: float) -> float:
    """Citations on the 0–1 scale (uncapped)."""
    if max_citations > 0:
        return citations / max_citations
    return 0
