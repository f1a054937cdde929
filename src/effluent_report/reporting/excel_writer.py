"""Workbook export: summary sheet plus one detail sheet per day."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font

from effluent_report.aggregation.daily import DailyBucket
from effluent_report.config.report_config import ReportConfig
from effluent_report.reporting.rows import build_rows, report_headers, report_units

logger = logging.getLogger(__name__)

SUMMARY_SHEET_TITLE = "Summenblatt"
NAN_CELL = "NaN"
DETAIL_HEADERS = [
    "Datum und Uhrzeit",
    "Durchfluss Pufferbehälter",
    "Durchfluss Mbw.",
    "Temperatur Mbw.",
    "Ph-Wert Mbw.",
]
DETAIL_TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M:%S"


def _cell(value: float | int) -> float | int | str:
    # Excel has no NaN; write the marker as text
    if isinstance(value, float) and math.isnan(value):
        return NAN_CELL
    return value


def detail_sheet_title(bucket: DailyBucket) -> str:
    return bucket.date.strftime("%d-%m")


def write_workbook(
    buckets: Iterable[DailyBucket], config: ReportConfig, path: str | Path
) -> Path:
    """Write the summary workbook; days below the sample gate are left out."""
    p = Path(path)
    gated = [b for b in buckets if config.passes_sample_gate(b)]

    wb = Workbook()
    summary = wb.active
    summary.title = SUMMARY_SHEET_TITLE
    summary.append(report_headers(config))
    summary.append(report_units(config))
    for cell in summary[1]:
        cell.font = Font(bold=True)
    for row in build_rows(gated, config):
        summary.append([_cell(v) for v in row.values()])

    if config.daily_pages:
        for bucket in gated:
            _append_detail_sheet(wb, bucket)

    wb.save(p)
    logger.info(
        "Wrote workbook with %d days (daily pages: %s) to %s",
        len(gated),
        config.daily_pages,
        p,
    )
    return p


def _append_detail_sheet(wb: Workbook, bucket: DailyBucket) -> None:
    ws = wb.create_sheet(title=detail_sheet_title(bucket))
    ws.append(DETAIL_HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for reading in bucket.readings:
        ws.append([
            reading.timestamp.strftime(DETAIL_TIMESTAMP_FORMAT),
            _cell(reading.container.flow),
            _cell(reading.measurement.flow),
            _cell(reading.measurement.temperature),
            _cell(reading.measurement.ph),
        ])
