"""
Key takeaways: short, prioritised findings generated from a classified
batch of sources.

Analyzers (each may add one candidate)
--------------------------------------
    summary-health     info         always; average sentiment label
    dom-*              insight/...  one quadrant holds > dominant_share of sources
    issue-sentiment    critical     value_score > 60 AND sentiment < 40
    issue-visibility   critical     mention_change < -10
    issue-conversion   critical     mention_rate > 40 AND soa < 15
    opp-rising         opportunity  growth/monitor AND (mention or soa change > 10)
    opp-sentiment      opportunity  sentiment > 85 AND mention_rate < 30
                                    (only when opp-rising did not fire)
    insight-category   insight      best source type (>= 2 sources) averages
                                    > 1.25x the overall value score

Selection
---------
Candidates are sorted by priority (desc). The result takes the top
critical finding (or, failing that, the top opportunity), then the next
best non-info finding, then the snapshot, then fills up to three. At most
``max_takeaways`` are returned.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Literal, Sequence

from source_valuation.models.source import QUADRANT_LABELS, EnhancedSource

TakeawayType = Literal["critical", "opportunity", "insight", "info"]

_MIN_TAKEAWAYS = 3


@dataclass(frozen=True)
class KeyTakeaway:
    """One finding shown above the source table.

    Attributes:
        id:              Stable identifier of the analyzer that produced it.
        type:            Severity bucket.
        title:           Short headline.
        description:     One-sentence explanation.
        priority:        Higher is more important.
        related_sources: Names of the sources the finding is about.
    """

    id:              str
    type:            TakeawayType
    title:           str
    description:     str
    priority:        int
    related_sources: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id":             self.id,
            "type":           self.type,
            "title":          self.title,
            "description":    self.description,
            "priority":       self.priority,
            "relatedSources": list(self.related_sources),
        }


def generate_key_takeaways(
    sources:        Sequence[EnhancedSource],
    dominant_share: float = 0.40,
    max_takeaways:  int = 4,
) -> list[KeyTakeaway]:
    """Generate prioritised takeaways for a classified batch.

    Args:
        sources:        Output of ``compute_enhanced_sources()``.
        dominant_share: Share of sources above which a quadrant "dominates".
        max_takeaways:  Upper bound on the number of takeaways returned.

    Returns:
        At most ``max_takeaways`` takeaways. An empty batch yields a single
        "Insufficient Data" info takeaway; a batch with no typed sources
        yields none.
    """
    if not sources:
        return [
            KeyTakeaway(
                id="no-data",
                type="info",
                title="Insufficient Data",
                description=(
                    "Not enough data to generate takeaways. "
                    "Check back after more citations are collected."
                ),
                priority=1,
            )
        ]

    # Untyped sources are excluded from every analyzer
    valid = [s for s in sources if s.name and s.type]
    if not valid:
        return []

    total = len(valid)
    candidates: list[KeyTakeaway] = [_health_summary(valid)]

    dominance = _quadrant_dominance(valid, dominant_share)
    if dominance is not None:
        candidates.append(dominance)

    candidates.extend(_issues(valid))

    rising = _rising_stars(valid)
    if rising is not None:
        candidates.append(rising)
    else:
        leaders = _sentiment_leaders(valid)
        if leaders is not None:
            candidates.append(leaders)

    category = _category_strength(valid, total)
    if category is not None:
        candidates.append(category)

    return _select(candidates, max_takeaways)


# ── Analyzers ─────────────────────────────────────────────────────────────────

def _health_summary(valid: list[EnhancedSource]) -> KeyTakeaway:
    total = len(valid)
    avg_sentiment = sum(s.sentiment for s in valid) / total
    if avg_sentiment >= 80:
        label = "strong"
    elif avg_sentiment < 50:
        label = "concerning"
    else:
        label = "moderate"
    return KeyTakeaway(
        id="summary-health",
        type="info",
        title="Snapshot",
        description=(
            f"Across {total} sources, your brand maintains {label} sentiment "
            f"(Avg: {round(avg_sentiment)})."
        ),
        priority=5,
    )


def _quadrant_dominance(
    valid: list[EnhancedSource],
    dominant_share: float,
) -> KeyTakeaway | None:
    total = len(valid)
    counts: dict[str, int] = defaultdict(int)
    for s in valid:
        counts[s.quadrant] += 1

    def share(q: str) -> float:
        return counts[q] / total

    if share("priority") > dominant_share:
        return KeyTakeaway(
            id="dom-priority",
            type="insight",
            title="Strong Visibility",
            description=(
                f"{round(share('priority') * 100)}% of your sources are "
                f"'{QUADRANT_LABELS['priority']}', indicating strong all-around performance."
            ),
            priority=5,
        )
    if share("reputation") > dominant_share:
        return KeyTakeaway(
            id="dom-reputation",
            type="critical",
            title="Reputation Risk",
            description=(
                f"{round(share('reputation') * 100)}% of sources are in "
                f"'{QUADRANT_LABELS['reputation']}', meaning high visibility but "
                "lower sentiment/citations."
            ),
            priority=6,
        )
    if share("growth") > dominant_share:
        return KeyTakeaway(
            id="dom-growth",
            type="opportunity",
            title="Growth Potential",
            description=(
                f"{round(share('growth') * 100)}% of sources are "
                f"'{QUADRANT_LABELS['growth']}'. You have good sentiment but need "
                "more visibility."
            ),
            priority=6,
        )
    return None


def _issues(valid: list[EnhancedSource]) -> list[KeyTakeaway]:
    issues: list[KeyTakeaway] = []

    negative = sorted(
        (s for s in valid if s.value_score > 60 and s.sentiment < 40),
        key=lambda s: -s.value_score,
    )
    if negative:
        issues.append(
            KeyTakeaway(
                id="issue-sentiment",
                type="critical",
                title="Negative Sentiment",
                description=(
                    f"High-impact sources like {_first_names(negative)} show negative "
                    "sentiment. Prioritize reputation management here."
                ),
                priority=10,
                related_sources=tuple(s.name for s in negative),
            )
        )

    dropping = sorted(
        (s for s in valid if s.mention_change < -10),
        key=lambda s: s.mention_change,
    )
    if dropping:
        issues.append(
            KeyTakeaway(
                id="issue-visibility",
                type="critical",
                title="Declining Visibility",
                description=(
                    f"Visibility is dropping on: {_first_names(dropping)}. "
                    "Mentions decreased significantly this period."
                ),
                priority=9,
                related_sources=tuple(s.name for s in dropping),
            )
        )

    gaps = sorted(
        (s for s in valid if s.mention_rate > 40 and s.soa < 15),
        key=lambda s: -s.mention_rate,
    )
    if gaps:
        issues.append(
            KeyTakeaway(
                id="issue-conversion",
                type="critical",
                title="Conversion Gap",
                description=(
                    f"High mention rate but low Share of Answer on: {_first_names(gaps)}. "
                    "Review content alignment to improve citations."
                ),
                priority=8,
                related_sources=tuple(s.name for s in gaps),
            )
        )

    return issues


def _rising_stars(valid: list[EnhancedSource]) -> KeyTakeaway | None:
    rising = sorted(
        (
            s for s in valid
            if s.quadrant in ("growth", "monitor")
            and (s.mention_change > 10 or s.soa_change > 10)
        ),
        key=lambda s: -max(s.mention_change, s.soa_change),
    )
    if not rising:
        return None
    return KeyTakeaway(
        id="opp-rising",
        type="opportunity",
        title="Rising Stars",
        description=(
            f"Momentum detected: {_first_names(rising)} are showing rapid growth "
            "metrics. Consider targeted partnerships."
        ),
        priority=9,
        related_sources=tuple(s.name for s in rising),
    )


def _sentiment_leaders(valid: list[EnhancedSource]) -> KeyTakeaway | None:
    leaders = sorted(
        (s for s in valid if s.sentiment > 85 and s.mention_rate < 30),
        key=lambda s: -s.sentiment,
    )
    if not leaders:
        return None
    return KeyTakeaway(
        id="opp-sentiment",
        type="opportunity",
        title="Sentiment Leaders",
        description=(
            f"{_first_names(leaders)} host positive content but have low visibility. "
            "Explore ways to boost traffic."
        ),
        priority=7,
        related_sources=tuple(s.name for s in leaders),
    )


def _category_strength(valid: list[EnhancedSource], total: int) -> KeyTakeaway | None:
    by_type: dict[str, list[float]] = defaultdict(list)
    for s in valid:
        by_type[s.type].append(s.value_score)

    overall_avg = sum(s.value_score for s in valid) / total
    best_type, best_avg = "", 0.0
    for source_type, scores in by_type.items():
        avg = sum(scores) / len(scores)
        if avg > best_avg and len(scores) > 1:
            best_type, best_avg = source_type, avg

    if not best_type or overall_avg <= 0 or best_avg <= overall_avg * 1.25:
        return None
    return KeyTakeaway(
        id="insight-category",
        type="insight",
        title="Category Strength",
        description=(
            f"Your brand performs exceptionally well in '{best_type[:1].upper()}{best_type[1:]}' "
            "sources compared to other channels."
        ),
        priority=6,
    )


# ── Selection ─────────────────────────────────────────────────────────────────

def _select(candidates: list[KeyTakeaway], max_takeaways: int) -> list[KeyTakeaway]:
    # sorted() is stable: equal priorities keep analyzer order
    ranked = sorted(candidates, key=lambda c: -c.priority)
    chosen: list[KeyTakeaway] = []

    lead = next((c for c in ranked if c.type == "critical"), None)
    if lead is None:
        lead = next((c for c in ranked if c.type == "opportunity"), None)
    if lead is not None:
        chosen.append(lead)

    next_best = next((c for c in ranked if c not in chosen and c.type != "info"), None)
    if next_best is not None:
        chosen.append(next_best)

    summary = next((c for c in ranked if c.type == "info"), None)
    if summary is not None and summary not in chosen and len(chosen) < _MIN_TAKEAWAYS:
        chosen.append(summary)

    for c in ranked:
        if len(chosen) >= _MIN_TAKEAWAYS:
            break
        if c not in chosen:
            chosen.append(c)

    return chosen[:max_takeaways]


def _first_names(sources: list[EnhancedSource], n: int = 2) -> str:
    return ", ".join(s.name for s in sources[:n])
