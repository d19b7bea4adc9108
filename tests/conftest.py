"""
Shared pytest fixtures for the source-valuation test suite.

Provides:
  - ``make_source``: factory for ``SourceData`` with sensible defaults.
  - ``make_enhanced``: factory for ``EnhancedSource`` (bypasses the engine).
  - ``two_source_batch``: the canonical strong/weak pair used across modules.
  - ``sources_file``: writes a wire-format JSON file and returns its path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from source_valuation.models.source import EnhancedSource, SourceData


def _source(
    name: str = "example.com",
    type: str = "editorial",
    mention_rate: float = 30.0,
    soa: float = 20.0,
    sentiment: float = 60.0,
    citations: int = 10,
    topics: tuple[str, ...] = ("pricing",),
    **kwargs: Any,
) -> SourceData:
    return SourceData(
        name=name,
        type=type,
        mention_rate=mention_rate,
        soa=soa,
        sentiment=sentiment,
        citations=citations,
        topics=topics,
        **kwargs,
    )


def _enhanced(
    name: str = "example.com",
    type: str = "editorial",
    quadrant: str = "monitor",
    value_score: float = 50.0,
    mention_rate: float = 30.0,
    soa: float = 20.0,
    sentiment: float = 60.0,
    citations: int = 10,
    **kwargs: Any,
) -> EnhancedSource:
    return EnhancedSource(
        name=name,
        type=type,
        quadrant=quadrant,
        value_score=value_score,
        mention_rate=mention_rate,
        soa=soa,
        sentiment=sentiment,
        citations=citations,
        **kwargs,
    )


@pytest.fixture
def make_source() -> Callable[..., SourceData]:
    """Factory for ``SourceData``; keyword arguments override defaults."""
    return _source


@pytest.fixture
def make_enhanced() -> Callable[..., EnhancedSource]:
    """Factory for ``EnhancedSource``; keyword arguments override defaults."""
    return _enhanced


@pytest.fixture
def two_source_batch() -> list[SourceData]:
    """A strong source (A) and a weak source (B).

    Batch maxima: citations 40, topics 2, sentiment 50.
    A scores 85.0 and lands in priority; B scores 20.75 and lands in monitor.
    """
    return [
        _source("a.com", mention_rate=80, soa=70, sentiment=50, citations=40, topics=("x", "y")),
        _source("b.com", mention_rate=20, soa=15, sentiment=10, citations=5, topics=("x",)),
    ]


@pytest.fixture
def sources_file(tmp_path: Path) -> Callable[[Any], Path]:
    """Write ``payload`` as JSON to a temp file and return the path."""

    def _write(payload: Any, name: str = "sources.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
