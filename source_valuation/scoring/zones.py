"""
Alternative segmentation of sources into four strategic zones.

This is a second view over the same batch, independent of the quadrant
classifier. Every metric is on the 0–100 percentage scale.

Zone score
----------
    sentiment_pct = min(100, sentiment / max_sentiment * 100)
    citations_pct = min(100, citations / max_citations * 100)
    score = mention * 0.35 + soa * 0.35 + sentiment_pct * 0.20 + citations_pct * 0.10

Cutoffs: ``score_p75`` (nearest-rank), ``score_median``, ``mention_median``,
``soa_median``.

Zone decision (evaluated in order — first match wins)
------------------------------------------------------
    1. marketLeaders   : score >= p75 AND sentiment_pct >= 50 AND citations_pct >= 25
    2. reputationRisks : (mention >= mention_median OR soa >= soa_median)
                         AND (sentiment_pct < 50 OR citations_pct < 20)
                         AND score < p75
    3. growthBets      : score_median <= score < p75
                         AND (sentiment_pct >= 55 OR citations_pct >= 30)
                         AND mention < mention_median
    4. monitorImprove  : everything else
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Sequence

from source_valuation.models.source import SourceData, parse_sources
from source_valuation.scoring.normalize import compute_maxima
from source_valuation.scoring.statistics import median, percentile

Zone = Literal["marketLeaders", "reputationRisks", "growthBets", "monitorImprove"]
ZONE_ORDER: tuple[str, ...] = ("marketLeaders", "reputationRisks", "growthBets", "monitorImprove")

ZONE_LABELS: dict[str, str] = {
    "marketLeaders":   "Market Leaders",
    "reputationRisks": "Reputation Risks",
    "growthBets":      "Growth Bets",
    "monitorImprove":  "Monitor & Improve",
}


@dataclass(frozen=True)
class ZoneCutoffs:
    """Batch cutoffs for zone assignment."""

    score_p75:      float
    score_median:   float
    mention_median: float
    soa_median:     float


@dataclass(frozen=True)
class ZonedSource:
    """A source with its zone score and zone.

    Attributes:
        name:          Source identifier.
        type:          Source category.
        mention_rate:  Mention rate (0–100).
        soa:           Share of answers (0–100).
        sentiment:     Raw sentiment.
        citations:     Raw citation count.
        sentiment_pct: Sentiment on the 0–100 scale.
        citations_pct: Citations on the 0–100 scale.
        score:         Zone score (see module docstring).
        zone:          Assigned zone.
    """

    name:          str
    type:          str
    mention_rate:  float
    soa:           float
    sentiment:     float
    citations:     int
    sentiment_pct: float
    citations_pct: float
    score:         float
    zone:          Zone


def classify_zone(
    mention_pct:   float,
    soa_pct:       float,
    sentiment_pct: float,
    citations_pct: float,
    score:         float,
    cutoffs:       ZoneCutoffs,
) -> Zone:
    """Assign a zone to one source (rules in module docstring)."""
    if score >= cutoffs.score_p75 and sentiment_pct >= 50 and citations_pct >= 25:
        return "marketLeaders"

    if (
        (mention_pct >= cutoffs.mention_median or soa_pct >= cutoffs.soa_median)
        and (sentiment_pct < 50 or citations_pct < 20)
        and score < cutoffs.score_p75
    ):
        return "reputationRisks"

    if (
        cutoffs.score_median <= score < cutoffs.score_p75
        and (sentiment_pct >= 55 or citations_pct >= 30)
        and mention_pct < cutoffs.mention_median
    ):
        return "growthBets"

    return "monitorImprove"


def compute_zoned_sources(sources: Sequence[SourceData | Mapping]) -> list[ZonedSource]:
    """Score and zone every source in a batch, preserving input order.

    Raises:
        InvalidSourceDataError: If any raw record fails validation.
    """
    if not sources:
        return []

    batch = parse_sources(sources)
    maxima = compute_maxima(batch)

    sentiment_pcts = [
        min(100, (s.sentiment / maxima.max_sentiment) * 100) for s in batch
    ]
    citation_pcts = [
        min(100, (s.citations / maxima.max_citations) * 100) for s in batch
    ]
    scores = [
        s.mention_rate * 0.35 + s.soa * 0.35 + sentiment_pcts[i] * 0.2 + citation_pcts[i] * 0.1
        for i, s in enumerate(batch)
    ]

    cutoffs = ZoneCutoffs(
        score_p75=percentile(scores, 75),
        score_median=median(scores),
        mention_median=median([s.mention_rate for s in batch]),
        soa_median=median([s.soa for s in batch]),
    )

    return [
        ZonedSource(
            name=s.name,
            type=s.type,
            mention_rate=s.mention_rate,
            soa=s.soa,
            sentiment=s.sentiment,
            citations=s.citations,
            sentiment_pct=sentiment_pcts[i],
            citations_pct=citation_pcts[i],
            score=scores[i],
            zone=classify_zone(
                s.mention_rate, s.soa, sentiment_pcts[i], citation_pcts[i], scores[i], cutoffs
            ),
        )
        for i, s in enumerate(batch)
    ]


def zone_counts(zoned: Sequence[ZonedSource]) -> dict[str, int]:
    """Number of sources per zone, in display order."""
    counts = {z: 0 for z in ZONE_ORDER}
    for z in zoned:
        counts[z.zone] += 1
    return counts
