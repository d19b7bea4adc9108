"""Tests for source_valuation.reporting.export."""

from __future__ import annotations

import csv
import json
from pathlib import Path

from source_valuation.reporting.export import (
    SOURCE_CSV_FIELDS,
    export_to_csv,
    export_to_json,
    flatten_enhanced_sources,
)


# ── export_to_csv ─────────────────────────────────────────────────────────────


def test_export_to_csv_basic(tmp_path: Path) -> None:
    """Writes a valid CSV with correct headers and values."""
    records = [
        {"name": "reddit.com", "valueScore": 72.5, "quadrant": "priority"},
        {"name": "quora.com", "valueScore": 45.0, "quadrant": "growth"},
    ]
    out = tmp_path / "test.csv"
    result = export_to_csv(records, out)

    assert result == out
    with out.open(encoding="utf-8") as f:
        reader = list(csv.DictReader(f))
    assert len(reader) == 2
    assert reader[0]["name"] == "reddit.com"
    assert reader[1]["quadrant"] == "growth"


def test_export_to_csv_custom_fieldnames(tmp_path: Path) -> None:
    """Custom fieldnames control column order."""
    out = tmp_path / "cols.csv"
    export_to_csv([{"a": 1, "b": 2, "c": 3}], out, fieldnames=["c", "a"])

    with out.open(encoding="utf-8") as f:
        header = f.readline().strip()
    assert header == "c,a"


def test_export_to_csv_extra_keys_ignored(tmp_path: Path) -> None:
    """Keys not in fieldnames are silently ignored."""
    out = tmp_path / "e.csv"
    export_to_csv([{"name": "foo", "extra": "bar"}], out, fieldnames=["name"])

    with out.open(encoding="utf-8") as f:
        reader = list(csv.DictReader(f))
    assert "extra" not in reader[0]


def test_export_to_csv_empty_records(tmp_path: Path) -> None:
    """Empty records list writes an empty file without raising."""
    out = tmp_path / "empty.csv"
    assert export_to_csv([], out) == out
    assert out.read_text(encoding="utf-8") == ""


def test_export_to_csv_creates_parent_dirs(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "dir" / "output.csv"
    export_to_csv([{"x": 1}], out)
    assert out.exists()


# ── export_to_json ────────────────────────────────────────────────────────────


def test_export_to_json_roundtrip(tmp_path: Path) -> None:
    data = {"quadrant_counts": {"priority": 1}, "sources": [{"name": "a.com"}]}
    out = tmp_path / "sub" / "report.json"
    assert export_to_json(data, out) == out
    assert json.loads(out.read_text(encoding="utf-8")) == data


# ── flatten_enhanced_sources ──────────────────────────────────────────────────


def test_flatten_enhanced_sources(make_enhanced) -> None:
    rows = flatten_enhanced_sources([
        make_enhanced(
            "a.com",
            quadrant="growth",
            value_score=61.23456,
            top_pages=("/x", "/y"),
            soa_change=2.0,
        ),
    ])
    assert len(rows) == 1
    row = rows[0]
    assert list(row) == SOURCE_CSV_FIELDS
    assert row["quadrantLabel"] == "Growth Opportunities"
    assert row["valueScore"] == 61.23
    assert row["topPages"] == "/x|/y"
    assert row["soaChange"] == 2.0


def test_flatten_preserves_order(make_enhanced) -> None:
    rows = flatten_enhanced_sources([make_enhanced("b.com"), make_enhanced("a.com")])
    assert [r["name"] for r in rows] == ["b.com", "a.com"]


def test_flatten_empty() -> None:
    assert flatten_enhanced_sources([]) == []
