"""Report command: parse an export file and write the report artifacts."""

from __future__ import annotations

import time

import typer
from rich.console import Console
from rich.table import Table

from effluent_report.aggregation.daily import group_by_day
from effluent_report.cli.logging_setup import configure_logging
from effluent_report.config.report_config import ReportConfig
from effluent_report.ingestion.file_reader import FileReader
from effluent_report.reporting.report_writer import create_report

console = Console()


def report(
    path: str = typer.Argument(help="Path to the exported log file"),
    output_dir: str = typer.Option("", help="Output directory. Env: EFFLUENT_OUTPUT_DIR"),
    percentile: float = typer.Option(-1.0, help="Temperature percentile, 0.0-1.0. Env: EFFLUENT_PERCENTILE"),
    min_samples: int = typer.Option(0, help="Minimum readings per day in the workbook. Env: EFFLUENT_MIN_SAMPLES"),
    excel: bool = typer.Option(True, help="Write the Excel workbook"),
    csv: bool = typer.Option(True, help="Write the CSV summary"),
    daily_pages: bool = typer.Option(True, help="Add one workbook sheet per day"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level. Env: LOG_LEVEL"),
) -> None:
    """Create the daily report from an export file."""
    try:
        configure_logging(verbose)
        config = ReportConfig.from_env()
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    if output_dir:
        config.output_dir = output_dir
    if percentile >= 0:
        config.percentile = percentile
    if min_samples > 0:
        config.min_sample_size = min_samples
    config.emit_excel = config.emit_excel and excel
    config.emit_csv = config.emit_csv and csv
    config.daily_pages = config.daily_pages and daily_pages

    errors = config.validate()
    if errors:
        for err in errors:
            console.print(f"[red]Config error: {err}[/red]")
        raise typer.Exit(1)

    start_time = time.time()
    try:
        readings = FileReader(path).read_readings()
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    buckets = group_by_day(readings)
    try:
        written = create_report(buckets, config)
    except OSError as e:
        console.print(f"[red]Could not write report: {e}[/red]")
        raise typer.Exit(1)
    elapsed = time.time() - start_time

    gated = sum(1 for b in buckets if config.passes_sample_gate(b))
    table = Table(title="Report Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Readings", f"{len(readings):,}")
    table.add_row("Days", str(len(buckets)))
    table.add_row(f"Days with >= {config.min_sample_size} readings", str(gated))
    table.add_row("Percentile", f"{config.percentile:g}")
    table.add_row("Elapsed", f"{elapsed:.1f}s")
    table.add_section()
    for p in written:
        table.add_row("Written", str(p))
    console.print(table)
