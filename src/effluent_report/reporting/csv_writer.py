"""Semicolon-separated summary export."""

from __future__ import annotations

import logging
from pathlib import Path

import polars as pl

from effluent_report.config.report_config import ReportConfig
from effluent_report.reporting.rows import ReportRow, report_headers, report_units

logger = logging.getLogger(__name__)

CSV_SEPARATOR = ";"
CSV_LINE_TERMINATOR = "\r\n"


def rows_to_frame(rows: list[ReportRow], config: ReportConfig) -> pl.DataFrame:
    headers = report_headers(config)
    schema = {name: pl.Float64 for name in headers}
    schema[headers[0]] = pl.Int64
    schema[headers[1]] = pl.Int64
    columns: dict[str, list] = {name: [] for name in headers}
    for row in rows:
        for name, value in zip(headers, row.values()):
            columns[name].append(value)
    return pl.DataFrame(columns, schema=schema)


def write_csv(rows: list[ReportRow], config: ReportConfig, path: str | Path) -> Path:
    """Write header, unit row and one line per day; NaN cells are written as NaN."""
    p = Path(path)
    df = rows_to_frame(rows, config)
    with open(p, "wb") as f:
        for header_row in (report_headers(config), report_units(config)):
            line = CSV_SEPARATOR.join(header_row) + CSV_LINE_TERMINATOR
            f.write(line.encode("utf-8"))
        df.write_csv(
            f,
            include_header=False,
            separator=CSV_SEPARATOR,
            line_terminator=CSV_LINE_TERMINATOR,
        )
    logger.info("Wrote CSV summary with %d days to %s", df.height, p)
    return p
