"""
ASCII terminal formatters for CLI commands.

All formatters accept classified sources / takeaways and return plain
multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from typing import Sequence

from source_valuation.insights.takeaways import KeyTakeaway
from source_valuation.models.source import QUADRANT_LABELS, EnhancedSource
from source_valuation.scoring.ranker import quadrant_counts, top_n_per_quadrant

_TAKEAWAY_TAGS: dict[str, str] = {
    "critical":    "[CRITICAL]",
    "opportunity": "[OPPORTUNITY]",
    "insight":     "[INSIGHT]",
    "info":        "[INFO]",
}


def format_quadrant_summary(
    sources: Sequence[EnhancedSource],
    top_n:   int = 5,
) -> str:
    """Format per-quadrant counts and the top sources of each quadrant.

    Example::

        Priority Partnerships (2)
             1  example.com                 72.4
             2  docs.python.org             65.0
        Reputation Management (0)
          (none)
    """
    counts = quadrant_counts(sources)
    top = top_n_per_quadrant(sources, n=top_n)
    name_width = max([len(s.name) for s in sources] + [20])

    lines: list[str] = []
    for quadrant, items in top.items():
        lines.append(f"{QUADRANT_LABELS[quadrant]} ({counts[quadrant]})")
        if not items:
            lines.append("  (none)")
            continue
        for rank, s in enumerate(items, start=1):
            lines.append(f"  {rank:>4}  {s.name:<{name_width}}  {s.value_score:>6.1f}")
    return "\n".join(lines)


def format_takeaways(takeaways: Sequence[KeyTakeaway]) -> str:
    """Format takeaways as tagged title/description pairs."""
    if not takeaways:
        return "  No takeaways."
    lines: list[str] = []
    for t in takeaways:
        lines.append(f"  {_TAKEAWAY_TAGS.get(t.type, '[INFO]')} {t.title}")
        lines.append(f"      {t.description}")
    return "\n".join(lines)
