"""
Source models — citation-source input records and their classified output.

Two-stage design:
  1. ``SourceData``     — one source exactly as delivered by the analytics
                          API (mention rate, share of answers, sentiment,
                          citations, topics).
  2. ``EnhancedSource`` — the same source after valuation: carries the
                          composite ``value_score`` and a strategic
                          ``quadrant`` label.

Both models are frozen (immutable) after construction. Python attributes
are snake_case; the camelCase names used on the wire (``mentionRate``,
``topPages``, ``valueScore`` ...) are accepted as aliases and produced by
``to_wire()``.
"""

from __future__ import annotations

import math
from typing import Literal, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

Quadrant = Literal["priority", "reputation", "growth", "monitor"]
VALID_QUADRANTS: frozenset[str] = frozenset({"priority", "reputation", "growth", "monitor"})

# Display order used by counts, reports and the CLI summary
QUADRANT_ORDER: tuple[str, ...] = ("priority", "reputation", "growth", "monitor")

QUADRANT_LABELS: dict[str, str] = {
    "priority":   "Priority Partnerships",
    "reputation": "Reputation Management",
    "growth":     "Growth Opportunities",
    "monitor":    "Monitor",
}


class InvalidSourceDataError(ValueError):
    """Raised when a source record fails validation.

    Attributes:
        index:       Position of the offending record in its batch, or ``None``.
        source_name: ``name`` of the offending record if it could be read.
        reason:      Human-readable validation failure.
    """

    def __init__(
        self,
        reason: str,
        index: int | None = None,
        source_name: str | None = None,
    ) -> None:
        self.index       = index
        self.source_name = source_name
        self.reason      = reason

        where = []
        if index is not None:
            where.append(f"#{index}")
        if source_name:
            where.append(f"'{source_name}'")
        prefix = f"Invalid source record {' '.join(where)}" if where else "Invalid source record"
        super().__init__(f"{prefix}: {reason}")


class SourceData(BaseModel):
    """A content/citation source with its visibility signals.

    Attributes:
        name: Source identifier, usually a domain label.
        type: Source category (free-form, e.g. ``"editorial"``, ``"ugc"``).
        mention_rate: Share of answers mentioning the brand via this source, 0–100.
        soa: Share of answers citing this source, 0–100.
        sentiment: Non-negative sentiment magnitude; dataset-relative scale.
        citations: Non-negative citation count.
        topics: Topics associated with the source (only the count is scored).
        top_pages: Most-cited pages; passthrough, never scored.
        mention_change: Period-over-period change in mention rate (points).
        soa_change: Period-over-period change in share of answers (points).
        sentiment_change: Period-over-period change in sentiment.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str
    type: str = ""
    mention_rate: float = Field(alias="mentionRate")
    soa: float
    sentiment: float
    citations: int
    topics: tuple[str, ...] = ()
    top_pages: tuple[str, ...] = Field(default=(), alias="topPages")
    mention_change: float = Field(default=0.0, alias="mentionChange")
    soa_change: float = Field(default=0.0, alias="soaChange")
    sentiment_change: float = Field(default=0.0, alias="sentimentChange")

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name must not be blank.")
        return v

    @field_validator("mention_rate", "soa")
    @classmethod
    def validate_percentage(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"percentage must be finite, got {v}.")
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"percentage must be in [0, 100], got {v}.")
        return v

    @field_validator("sentiment")
    @classmethod
    def validate_sentiment(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"sentiment must be finite, got {v}.")
        if v < 0:
            raise ValueError(f"sentiment must be non-negative, got {v}.")
        return v

    @field_validator("citations")
    @classmethod
    def validate_citations(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"citations must be non-negative, got {v}.")
        return v

    @field_validator("mention_change", "soa_change", "sentiment_change")
    @classmethod
    def validate_change_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"change values must be finite, got {v}.")
        return v


class EnhancedSource(BaseModel):
    """A source after valuation and quadrant classification.

    ``value_score`` is the ranking score (typically 0–100, not clamped);
    ``quadrant`` is exactly one of :data:`VALID_QUADRANTS`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    type: str
    mention_rate: float = Field(alias="mentionRate")
    soa: float
    sentiment: float
    citations: int
    top_pages: tuple[str, ...] = Field(default=(), alias="topPages")
    value_score: float = Field(alias="valueScore")
    quadrant: Quadrant
    mention_change: float = Field(default=0.0, alias="mentionChange")
    soa_change: float = Field(default=0.0, alias="soaChange")

    def to_wire(self) -> dict:
        """Return the camelCase dict consumed by the dashboard."""
        data = self.model_dump(by_alias=True)
        data["topPages"] = list(self.top_pages)
        return data


def parse_sources(records: Sequence[SourceData | Mapping]) -> list[SourceData]:
    """Validate raw source mappings into :class:`SourceData` objects.

    ``SourceData`` instances pass through untouched. Validation stops at the
    first bad record.

    Args:
        records: Raw mappings using either wire (camelCase) or attribute names.

    Returns:
        Validated ``SourceData`` list, same order as ``records``.

    Raises:
        InvalidSourceDataError: If a record is not a mapping or fails validation.
    """
    parsed: list[SourceData] = []
    for i, raw in enumerate(records):
        if isinstance(raw, SourceData):
            parsed.append(raw)
            continue
        if not isinstance(raw, Mapping):
            raise InvalidSourceDataError(
                f"expected an object, got {type(raw).__name__}.", index=i
            )
        try:
            parsed.append(SourceData.model_validate(dict(raw)))
        except ValidationError as exc:
            raise InvalidSourceDataError(
                _summarize_errors(exc), index=i, source_name=_name_of(raw)
            ) from exc
    return parsed


# ── Private helpers ────────────────────────────────────────────────────────────

def _summarize_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def _name_of(raw: Mapping) -> str | None:
    name = raw.get("name")
    return name if isinstance(name, str) else None
