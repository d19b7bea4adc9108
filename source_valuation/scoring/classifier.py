"""
Quadrant classification: buckets a source into priority / reputation /
growth / monitor by comparing it against batch-level statistics.

Threshold checks
----------------
    visibility_strong  = mention          >= mention_median        (raw 0–100)
    soa_strong         = soa              >= soa_median            (raw 0–100)
    sentiment_positive = sentiment_frac   >= sentiment_median      (0–1)
    citations_strong   = citations_frac   >= citations_median      (0–1)
    composite_healthy  = composite        >= composite_median
    composite_strong   = composite        >= composite_top_quartile

Decision (evaluated in order — first match wins)
-------------------------------------------------
    1. PRIORITY   : visibility_strong AND soa_strong AND composite_strong
    2. REPUTATION : visibility_strong AND (NOT sentiment_positive OR NOT citations_strong)
    3. GROWTH     : NOT visibility_strong AND (sentiment_positive OR citations_strong)
                    AND composite_healthy
    4. MONITOR    : everything else

A source that satisfies both rule 1 and rule 2 is always ``priority``.
"""

from __future__ import annotations

from dataclasses import dataclass

from source_valuation.models.source import Quadrant
from source_valuation.scoring.normalize import fractional_citations, fractional_sentiment
from source_valuation.scoring.scorer import composite_score


@dataclass(frozen=True)
class QuadrantThresholds:
    """Batch statistics that every source is compared against.

    Attributes:
        mention_median:         Median mention rate (0–100).
        soa_median:             Median share of answers (0–100).
        sentiment_median:       Median fractional sentiment (0–1).
        citations_median:       Median fractional citations (0–1).
        composite_median:       Median composite score.
        composite_top_quartile: Nearest-rank 75th percentile composite score.
    """

    mention_median:         float
    soa_median:             float
    sentiment_median:       float
    citations_median:       float
    composite_median:       float
    composite_top_quartile: float


def classify_quadrant(
    mention:       float,
    soa:           float,
    sentiment:     float,
    citations:     float,
    thresholds:    QuadrantThresholds,
    max_citations: float,
    max_sentiment: float,
) -> Quadrant:
    """Assign a single quadrant to one source.

    Args:
        mention:       Mention rate (0–100).
        soa:           Share of answers (0–100).
        sentiment:     Raw sentiment magnitude.
        citations:     Raw citation count.
        thresholds:    Batch statistics from the orchestrator.
        max_citations: Batch maximum of citations (floored at 1).
        max_sentiment: Batch maximum of sentiment (floored at 1).

    Returns:
        One of ``"priority"``, ``"reputation"``, ``"growth"``, ``"monitor"``.
    """
    sentiment_norm = fractional_sentiment(sentiment, max_sentiment)
    citations_norm = fractional_citations(citations, max_citations)
    composite = composite_score(
        mention, soa, sentiment, citations, max_citations, max_sentiment
    )

    visibility_strong  = mention >= thresholds.mention_median
    soa_strong         = soa >= thresholds.soa_median
    sentiment_positive = sentiment_norm >= thresholds.sentiment_median
    citations_strong   = citations_norm >= thresholds.citations_median
    composite_healthy  = composite >= thresholds.composite_median
    composite_strong   = composite >= thresholds.composite_top_quartile

    if visibility_strong and soa_strong and composite_strong:
        return "priority"
    if visibility_strong and (not sentiment_positive or not citations_strong):
        return "reputation"
    if not visibility_strong and (sentiment_positive or citations_strong) and composite_healthy:
        return "growth"
    return "monitor"
