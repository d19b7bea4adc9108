"""
source_valuation.reporting — report building, formatting, and export.

Modules:
  reporter   — Quadrant report payload + CSV/JSON writers.
  formatters — ASCII terminal formatters for Typer CLI commands.
  export     — CSV/JSON flat-file export helpers.
"""
