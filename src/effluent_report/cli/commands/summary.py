"""Summary command: show per-day aggregates on the terminal."""

from __future__ import annotations

import math

import typer
from rich.console import Console
from rich.table import Table

from effluent_report.aggregation.daily import group_by_day
from effluent_report.cli.logging_setup import configure_logging
from effluent_report.config.report_config import ReportConfig
from effluent_report.ingestion.file_reader import FileReader
from effluent_report.reporting.rows import build_rows

console = Console()


def _fmt(value: float) -> str:
    return "-" if math.isnan(value) else f"{value:.2f}"


def summary(
    path: str = typer.Argument(help="Path to the exported log file"),
    percentile: float = typer.Option(-1.0, help="Temperature percentile, 0.0-1.0. Env: EFFLUENT_PERCENTILE"),
    min_samples: int = typer.Option(0, help="Minimum readings per day. Env: EFFLUENT_MIN_SAMPLES"),
    all_days: bool = typer.Option(False, help="Include days below the minimum sample size"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level. Env: LOG_LEVEL"),
) -> None:
    """Show the daily aggregates without writing any file."""
    try:
        configure_logging(verbose)
        config = ReportConfig.from_env()
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    if percentile >= 0:
        config.percentile = percentile
    if min_samples > 0:
        config.min_sample_size = min_samples

    # Nothing is written, so output settings are not checked
    errors = config.validate(check_outputs=False)
    if errors:
        for err in errors:
            console.print(f"[red]Config error: {err}[/red]")
        raise typer.Exit(1)

    try:
        readings = FileReader(path).read_readings()
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    rows = build_rows(group_by_day(readings), config, gated=not all_days)
    if not rows:
        console.print("[yellow]No days with enough readings found.[/yellow]")
        return

    table = Table(title=f"Daily Summary ({len(rows)} days)")
    table.add_column("Date", style="cyan", no_wrap=True, min_width=10)
    table.add_column("Readings", justify="right")
    table.add_column("Outflow m³/d", justify="right")
    table.add_column("Buffer m³/d", justify="right")
    table.add_column("pH min", justify="right")
    table.add_column("pH max", justify="right")
    table.add_column("T mean", justify="right")
    table.add_column("T max", justify="right")
    for window in config.windows:
        table.add_column(f"P{config.percentile * 100:g} {window.label}", justify="right")

    for row in rows:
        table.add_row(
            row.date.isoformat(),
            str(row.reading_count),
            _fmt(row.daily_outflow),
            _fmt(row.daily_container_outflow),
            _fmt(row.ph_min),
            _fmt(row.ph_max),
            _fmt(row.temperature_mean),
            _fmt(row.temperature_max),
            *(_fmt(v) for v in row.temperature_percentiles),
        )
    console.print(table)
