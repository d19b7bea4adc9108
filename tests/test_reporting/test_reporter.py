"""
Tests for source_valuation.reporting.reporter.

What we test
------------
build_quadrant_report():
  - Counts, top-N and takeaways present; sources in input order.
  - Zone section only when zoned sources are supplied.
  - Output is JSON-serialisable.
write_sources_csv() / write_quadrant_report_json():
  - Filenames carry label and run date.
  - CSV rows sorted by value score descending.
"""

from __future__ import annotations

import csv
import json
from datetime import date
from pathlib import Path

import pytest

from source_valuation.insights.takeaways import generate_key_takeaways
from source_valuation.reporting.reporter import (
    SCHEMA_VERSION,
    build_quadrant_report,
    write_quadrant_report_json,
    write_sources_csv,
)
from source_valuation.scoring.engine import compute_enhanced_sources
from source_valuation.scoring.zones import compute_zoned_sources

RUN_DATE = date(2026, 3, 2)


@pytest.fixture
def enhanced(two_source_batch):
    return compute_enhanced_sources(two_source_batch)


class TestBuildQuadrantReport:
    def test_core_keys(self, enhanced):
        report = build_quadrant_report(enhanced, label="acme")
        assert report["schema_version"] == SCHEMA_VERSION
        assert report["label"] == "acme"
        assert report["source_count"] == 2
        assert report["quadrant_counts"] == {
            "priority": 1, "reputation": 0, "growth": 0, "monitor": 1,
        }
        assert "zones" not in report

    def test_top_by_quadrant(self, enhanced):
        top = build_quadrant_report(enhanced)["top_by_quadrant"]
        assert top["priority"]["label"] == "Priority Partnerships"
        assert top["priority"]["sources"] == [
            {"rank": 1, "name": "a.com", "valueScore": 85.0}
        ]
        assert top["reputation"]["sources"] == []

    def test_sources_in_input_order(self, enhanced):
        report = build_quadrant_report(enhanced)
        assert [s["name"] for s in report["sources"]] == ["a.com", "b.com"]
        assert report["sources"][0]["valueScore"] == pytest.approx(85.0)

    def test_takeaways_serialised(self, enhanced):
        takeaways = generate_key_takeaways(enhanced)
        report = build_quadrant_report(enhanced, takeaways)
        assert len(report["takeaways"]) == len(takeaways)
        assert "relatedSources" in report["takeaways"][0]

    def test_zones_included(self, two_source_batch, enhanced):
        report = build_quadrant_report(enhanced, zoned=compute_zoned_sources(two_source_batch))
        assert report["zone_counts"]["marketLeaders"] == 1
        assert report["zones"][0] == {"name": "a.com", "zone": "marketLeaders", "score": 82.5}

    def test_json_serialisable(self, two_source_batch, enhanced):
        report = build_quadrant_report(
            enhanced,
            generate_key_takeaways(enhanced),
            zoned=compute_zoned_sources(two_source_batch),
        )
        assert json.loads(json.dumps(report))["source_count"] == 2


class TestWriters:
    def test_write_sources_csv(self, enhanced, tmp_path: Path):
        reversed_batch = list(reversed(enhanced))
        path = write_sources_csv(reversed_batch, tmp_path, "acme", run_date=RUN_DATE)
        assert path.name == "sources_acme_2026-03-02.csv"

        with path.open(encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [r["name"] for r in rows] == ["a.com", "b.com"]
        assert rows[0]["quadrantLabel"] == "Priority Partnerships"

    def test_write_quadrant_report_json(self, enhanced, tmp_path: Path):
        report = build_quadrant_report(enhanced, label="acme")
        path = write_quadrant_report_json(report, tmp_path / "out", "acme", run_date=RUN_DATE)
        assert path.name == "quadrants_acme_2026-03-02.json"
        assert json.loads(path.read_text(encoding="utf-8"))["label"] == "acme"
