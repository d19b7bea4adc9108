"""
JSON loader for source-attribution payloads.

Accepted shapes (detected from the top-level value):
  1. A bare array of source objects.
  2. ``{"sources": [...]}`` — the ``data`` body of the sources endpoint.
  3. ``{"success": true, "data": {"sources": [...]}}`` — the full API
     envelope. ``success: false`` raises with the envelope's error message.

Source objects use the wire field names (``mentionRate``, ``soa``,
``sentiment``, ``citations``, ``topics``, ``topPages`` ...). Unknown keys
such as ``url``, ``prompts`` or ``pages`` are ignored.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from source_valuation.models.source import SourceData, parse_sources

logger = logging.getLogger(__name__)


def load_sources_json(path: Path) -> list[SourceData]:
    """Load and validate a source-attribution JSON file.

    All records are validated before any are returned.

    Args:
        path: Path to the JSON file (must exist).

    Returns:
        Validated ``SourceData`` list in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not valid JSON or has an unknown shape.
        InvalidSourceDataError: If any record fails validation.
    """
    if not path.exists():
        raise FileNotFoundError(f"Sources file not found: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Sources file is not valid JSON: {path} ({exc})") from exc

    records = extract_source_records(payload)
    if not records:
        logger.warning("Sources file contains no sources: %s", path)
        return []

    sources = parse_sources(records)
    logger.info("Loaded %d sources from %s", len(sources), path.name)
    return sources


def extract_source_records(payload: Any) -> list[Any]:
    """Pull the list of raw source records out of any accepted payload shape.

    Raises:
        ValueError: On an unrecognised shape or an unsuccessful API envelope.
    """
    if isinstance(payload, list):
        return payload

    if not isinstance(payload, dict):
        raise ValueError(
            f"Expected a JSON array or object, got {type(payload).__name__}."
        )

    if "success" in payload:
        if not payload.get("success"):
            message = payload.get("error") or payload.get("message") or "unknown error"
            raise ValueError(f"Source payload reports failure: {message}")
        payload = payload.get("data") or {}
        if not isinstance(payload, dict):
            raise ValueError("Source payload 'data' must be an object.")

    sources = payload.get("sources")
    if not isinstance(sources, list):
        raise ValueError("Source payload has no 'sources' array.")
    return sources
