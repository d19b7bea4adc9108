"""
Quadrant ranker: counts, filters and per-quadrant top-N lists over
classified sources.

Usage flow
----------
1. quadrant_counts(enhanced)
   -> dict[quadrant, int]  (all four quadrants present, zero-filled)

2. filter_by_quadrant(enhanced, "growth")
   -> list[EnhancedSource]  (None returns the whole batch)

3. top_n_per_quadrant(enhanced, n=5)
   -> dict[quadrant, list[EnhancedSource]]  (value_score descending)
"""

from __future__ import annotations

from typing import Sequence

from source_valuation.models.source import QUADRANT_ORDER, EnhancedSource, VALID_QUADRANTS


def quadrant_counts(sources: Sequence[EnhancedSource]) -> dict[str, int]:
    """Number of sources per quadrant, in display order."""
    counts = {q: 0 for q in QUADRANT_ORDER}
    for s in sources:
        counts[s.quadrant] += 1
    return counts


def filter_by_quadrant(
    sources:  Sequence[EnhancedSource],
    quadrant: str | None,
) -> list[EnhancedSource]:
    """Return sources in ``quadrant``, preserving input order.

    Args:
        sources:  Classified sources.
        quadrant: Quadrant to keep, or ``None`` for all sources.

    Raises:
        ValueError: If ``quadrant`` is not a known quadrant.
    """
    if quadrant is None:
        return list(sources)
    if quadrant not in VALID_QUADRANTS:
        raise ValueError(
            f"Unknown quadrant '{quadrant}'. Must be one of {sorted(VALID_QUADRANTS)}."
        )
    return [s for s in sources if s.quadrant == quadrant]


def top_n_per_quadrant(
    sources: Sequence[EnhancedSource],
    n:       int = 5,
) -> dict[str, list[EnhancedSource]]:
    """Return the top-N sources by value score within each quadrant.

    Sorting is by ``value_score`` descending; equal scores keep their input
    order. Every quadrant key is present, possibly with an empty list.

    Args:
        sources: Classified sources.
        n:       Max results per quadrant (default 5).

    Returns:
        Dict mapping quadrant -> list of at most ``n`` sources.
    """
    buckets: dict[str, list[EnhancedSource]] = {q: [] for q in QUADRANT_ORDER}
    for s in sources:
        buckets[s.quadrant].append(s)

    return {
        q: sorted(items, key=lambda x: -x.value_score)[:n]
        for q, items in buckets.items()
    }
