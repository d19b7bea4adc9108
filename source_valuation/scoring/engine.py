"""
Valuation engine: turns a batch of ``SourceData`` into ``EnhancedSource``
records, one per input, in input order.

Usage flow
----------
1. compute_dataset_statistics(sources)
   -> DatasetStatistics  (maxima + quadrant thresholds, computed once)

2. compute_enhanced_sources(sources)
   -> list[EnhancedSource]  (value score + quadrant per source)

All batch statistics are hoisted into step 1 so the per-source pass never
re-sorts. The engine is pure: no I/O, no caching, no state between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from source_valuation.models.source import EnhancedSource, SourceData, parse_sources
from source_valuation.scoring.classifier import QuadrantThresholds, classify_quadrant
from source_valuation.scoring.normalize import (
    DatasetMaxima,
    compute_maxima,
    fractional_citations,
    fractional_sentiment,
)
from source_valuation.scoring.scorer import composite_score, value_score_for_source
from source_valuation.scoring.statistics import median, percentile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetStatistics:
    """Everything the per-source pass needs to know about the batch.

    Attributes:
        maxima:     Floored per-field maxima.
        thresholds: Medians / top quartile used by the quadrant classifier.
    """

    maxima:     DatasetMaxima
    thresholds: QuadrantThresholds


def compute_dataset_statistics(sources: Sequence[SourceData]) -> DatasetStatistics:
    """Compute batch maxima and quadrant thresholds in a single pass.

    Args:
        sources: Non-empty batch of validated sources.

    Returns:
        DatasetStatistics for the batch.
    """
    maxima = compute_maxima(sources)
    max_citations = maxima.max_citations
    max_sentiment = maxima.max_sentiment

    mention_median   = median([s.mention_rate for s in sources])
    soa_median       = median([s.soa for s in sources])
    sentiment_median = median(
        [fractional_sentiment(s.sentiment, max_sentiment) for s in sources]
    )
    citations_median = median(
        [fractional_citations(s.citations, max_citations) for s in sources]
    )

    composites = [
        composite_score(
            s.mention_rate, s.soa, s.sentiment, s.citations, max_citations, max_sentiment
        )
        for s in sources
    ]

    return DatasetStatistics(
        maxima=maxima,
        thresholds=QuadrantThresholds(
            mention_median=mention_median,
            soa_median=soa_median,
            sentiment_median=sentiment_median,
            citations_median=citations_median,
            composite_median=median(composites),
            composite_top_quartile=percentile(composites, 75),
        ),
    )


def compute_enhanced_sources(
    sources: Sequence[SourceData | Mapping],
) -> list[EnhancedSource]:
    """Value and classify every source in a batch.

    Raw mappings (wire-format dicts) are validated first; an empty batch
    returns an empty list.

    Args:
        sources: Sources to classify. Not mutated.

    Returns:
        One ``EnhancedSource`` per input, in input order.

    Raises:
        InvalidSourceDataError: If any raw record fails validation.
    """
    if not sources:
        return []

    batch = parse_sources(sources)
    stats = compute_dataset_statistics(batch)
    maxima = stats.maxima

    logger.debug(
        "Classifying %d sources (max_citations=%s, max_topics=%s, max_sentiment=%s)",
        len(batch), maxima.max_citations, maxima.max_topics, maxima.max_sentiment,
    )
    logger.debug("Quadrant thresholds: %s", stats.thresholds)

    enhanced: list[EnhancedSource] = []
    for s in batch:
        value_score = value_score_for_source(
            s, maxima.max_citations, maxima.max_topics, maxima.max_sentiment
        )
        quadrant = classify_quadrant(
            s.mention_rate,
            s.soa,
            s.sentiment,
            s.citations,
            stats.thresholds,
            maxima.max_citations,
            maxima.max_sentiment,
        )
        enhanced.append(
            EnhancedSource(
                name=s.name,
                type=s.type,
                mention_rate=s.mention_rate,
                soa=s.soa,
                sentiment=s.sentiment,
                citations=s.citations,
                top_pages=s.top_pages,
                value_score=value_score,
                quadrant=quadrant,
                mention_change=s.mention_change,
                soa_change=s.soa_change,
            )
        )

    return enhanced
