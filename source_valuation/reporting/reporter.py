"""
Quadrant report writer: CSV and JSON output for classified sources.

Functions consume in-memory ``EnhancedSource`` lists and write
human-readable + machine-readable files.  No scoring happens here.

Output files (written by the ``score`` CLI command)
---------------------------------------------------
  data/outputs/
    sources_{label}_{date}.csv      -- every classified source, valueScore desc
    quadrants_{label}_{date}.json   -- counts, top-N per quadrant, takeaways,
                                       full source list (input order)
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Sequence

from source_valuation.insights.takeaways import KeyTakeaway
from source_valuation.models.source import QUADRANT_LABELS, EnhancedSource
from source_valuation.reporting.export import (
    SOURCE_CSV_FIELDS,
    export_to_csv,
    export_to_json,
    flatten_enhanced_sources,
)
from source_valuation.scoring.ranker import quadrant_counts, top_n_per_quadrant
from source_valuation.scoring.zones import ZonedSource, zone_counts

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"


def build_quadrant_report(
    sources:   Sequence[EnhancedSource],
    takeaways: Sequence[KeyTakeaway] = (),
    top_n:     int = 5,
    label:     str = "sources",
    zoned:     Sequence[ZonedSource] | None = None,
) -> dict:
    """Assemble the quadrant report payload.

    Args:
        sources:   Output of ``compute_enhanced_sources()``.
        takeaways: Output of ``generate_key_takeaways()``.
        top_n:     Max sources listed per quadrant.
        label:     Report label (brand, date range ...), stored as metadata.
        zoned:     Optional output of ``compute_zoned_sources()``.

    Returns:
        JSON-serialisable dict.
    """
    top = top_n_per_quadrant(sources, n=top_n)

    payload: dict = {
        "schema_version":  SCHEMA_VERSION,
        "label":           label,
        "generated_at":    datetime.now(tz=timezone.utc).isoformat(),
        "source_count":    len(sources),
        "quadrant_counts": quadrant_counts(sources),
        "top_by_quadrant": {
            q: {
                "label": QUADRANT_LABELS[q],
                "sources": [
                    {"rank": rank, "name": s.name, "valueScore": round(s.value_score, 2)}
                    for rank, s in enumerate(items, start=1)
                ],
            }
            for q, items in top.items()
        },
        "takeaways": [t.to_dict() for t in takeaways],
        "sources":   [s.to_wire() for s in sources],
    }

    if zoned is not None:
        payload["zone_counts"] = zone_counts(zoned)
        payload["zones"] = [
            {"name": z.name, "zone": z.zone, "score": round(z.score, 2)}
            for z in zoned
        ]

    return payload


def write_sources_csv(
    sources:    Sequence[EnhancedSource],
    output_dir: Path,
    label:      str,
    run_date:   date | None = None,
) -> Path:
    """Write every classified source to a CSV file, highest value score first.

    Args:
        sources:    Classified sources.
        output_dir: Directory to write the file (created if missing).
        label:      Used in the filename.
        run_date:   Date label for the filename. Defaults to today.

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = date.today()

    csv_path = output_dir / f"sources_{label}_{run_date}.csv"
    ordered = sorted(sources, key=lambda s: -s.value_score)
    export_to_csv(flatten_enhanced_sources(ordered), csv_path, fieldnames=SOURCE_CSV_FIELDS)

    logger.info("Sources CSV written: %s (%d rows)", csv_path, len(sources))
    return csv_path


def write_quadrant_report_json(
    report:     dict,
    output_dir: Path,
    label:      str,
    run_date:   date | None = None,
) -> Path:
    """Write a payload from ``build_quadrant_report()`` to JSON.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    json_path = output_dir / f"quadrants_{label}_{run_date}.json"
    export_to_json(report, json_path)

    logger.info("Quadrant report JSON written: %s", json_path)
    return json_path
