"""Typer CLI application."""

import typer

from effluent_report.cli.commands.report import report
from effluent_report.cli.commands.summary import summary

app = typer.Typer(
    name="effluent-report",
    help="Daily wastewater monitoring report generator",
    no_args_is_help=True,
)

app.command()(report)
app.command()(summary)
