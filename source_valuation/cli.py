"""
Source Valuation — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate the sources file.
  4. Score / classify / summarise.
  5. Report result to stdout (and files for ``score``).

Install and run::

    pip install -e .
    source-valuation --help
    source-valuation validate-config
    source-valuation score --input data/raw/sources.json --label acme
    source-valuation takeaways --input data/raw/sources.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="source-valuation",
    help="Citation-source valuation and quadrant classification.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from source_valuation.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config) -> None:
    """Set up logging from config."""
    from source_valuation.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _load_sources_or_exit(input_file: str):
    """Load the sources file, printing a friendly error and exiting on failure."""
    from source_valuation.ingestion.source_json import load_sources_json

    try:
        return load_sources_json(Path(input_file))
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        # InvalidSourceDataError is a ValueError
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Output dir:         {config.report.output_dir}")
    typer.echo(f"  Top N per quadrant: {config.report.top_n_per_quadrant}")
    typer.echo(f"  Dominant share:     {config.takeaways.dominant_share:.0%}")
    typer.echo(f"  Max takeaways:      {config.takeaways.max_takeaways}")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("score")
def score(
    input_file: str = typer.Option(
        ...,
        "--input",
        "-i",
        help="Sources JSON file (array, {'sources': [...]}, or API envelope).",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Override report.output_dir from config.",
    ),
    label: Optional[str] = typer.Option(
        None,
        "--label",
        help="Label used in output filenames (default: report.default_label).",
    ),
    zones: bool = typer.Option(
        False,
        "--zones",
        help="Also compute the alternative zone segmentation.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Value and classify sources, then write CSV + JSON reports.

    \b
    Output:
      {output_dir}/sources_{label}_{date}.csv
      {output_dir}/quadrants_{label}_{date}.json
    """
    from source_valuation.insights.takeaways import generate_key_takeaways
    from source_valuation.reporting.formatters import format_quadrant_summary
    from source_valuation.reporting.reporter import (
        build_quadrant_report,
        write_quadrant_report_json,
        write_sources_csv,
    )
    from source_valuation.scoring.engine import compute_enhanced_sources
    from source_valuation.scoring.zones import ZONE_LABELS, compute_zoned_sources, zone_counts

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    sources = _load_sources_or_exit(input_file)
    if not sources:
        typer.echo("[WARN] No sources to score.")
        raise typer.Exit(code=0)

    enhanced = compute_enhanced_sources(sources)
    takeaways = generate_key_takeaways(
        enhanced,
        dominant_share=config.takeaways.dominant_share,
        max_takeaways=config.takeaways.max_takeaways,
    )
    zoned = compute_zoned_sources(sources) if zones else None

    report_label = label or config.report.default_label
    target_dir = Path(output_dir or config.report.output_dir)
    top_n = config.report.top_n_per_quadrant

    report = build_quadrant_report(
        enhanced, takeaways, top_n=top_n, label=report_label, zoned=zoned
    )
    csv_path = write_sources_csv(enhanced, target_dir, report_label)
    json_path = write_quadrant_report_json(report, target_dir, report_label)

    typer.echo(f"Scored {len(enhanced)} sources.")
    typer.echo("")
    typer.echo(format_quadrant_summary(enhanced, top_n=top_n))

    if zoned is not None:
        typer.echo("")
        typer.echo("Zones:")
        for zone, count in zone_counts(zoned).items():
            typer.echo(f"  {ZONE_LABELS[zone]:<20} {count}")

    typer.echo("")
    typer.echo(f"  CSV:  {csv_path}")
    typer.echo(f"  JSON: {json_path}")
    typer.echo("[OK] Scoring complete.")


@app.command("takeaways")
def takeaways(
    input_file: str = typer.Option(
        ...,
        "--input",
        "-i",
        help="Sources JSON file (array, {'sources': [...]}, or API envelope).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the key takeaways for a batch of sources."""
    from source_valuation.insights.takeaways import generate_key_takeaways
    from source_valuation.reporting.formatters import format_takeaways
    from source_valuation.scoring.engine import compute_enhanced_sources

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    sources = _load_sources_or_exit(input_file)
    enhanced = compute_enhanced_sources(sources)
    result = generate_key_takeaways(
        enhanced,
        dominant_share=config.takeaways.dominant_share,
        max_takeaways=config.takeaways.max_takeaways,
    )

    typer.echo(f"Key takeaways ({len(enhanced)} sources):")
    typer.echo(format_takeaways(result))


if __name__ == "__main__":
    app()
