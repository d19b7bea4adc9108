"""
Export helpers for spreadsheet and BI analysis.

All functions write to disk and return the written ``Path``.
They accept generic ``list[dict]`` data to stay decoupled from
specific report shapes.

CSV exports are flat (no nested lists) so they load directly in Excel,
Looker Studio or pandas without any pre-processing step.

``flatten_enhanced_sources()`` is the main adapter function: it converts
classified sources into one flat row each, using the dashboard's
camelCase column names.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Sequence

from source_valuation.models.source import QUADRANT_LABELS, EnhancedSource

SOURCE_CSV_FIELDS: list[str] = [
    "name", "type", "quadrant", "quadrantLabel", "valueScore",
    "mentionRate", "soa", "sentiment", "citations",
    "mentionChange", "soaChange", "topPages",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file (parent dirs created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def flatten_enhanced_sources(sources: Sequence[EnhancedSource]) -> list[dict]:
    """Flatten classified sources into CSV-ready rows.

    ``topPages`` is joined with ``|``; ``quadrantLabel`` carries the display
    name of the quadrant. Row order follows ``sources``.
    """
    rows: list[dict] = []
    for s in sources:
        rows.append(
            {
                "name":          s.name,
                "type":          s.type,
                "quadrant":      s.quadrant,
                "quadrantLabel": QUADRANT_LABELS[s.quadrant],
                "valueScore":    round(s.value_score, 2),
                "mentionRate":   s.mention_rate,
                "soa":           s.soa,
                "sentiment":     s.sentiment,
                "citations":     s.citations,
                "mentionChange": s.mention_change,
                "soaChange":     s.soa_change,
                "topPages":      "|".join(s.top_pages),
            }
        )
    return rows
