"""Writes the enabled report artifacts into the output directory."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from effluent_report.aggregation.daily import DailyBucket
from effluent_report.config.report_config import ReportConfig
from effluent_report.reporting.csv_writer import write_csv
from effluent_report.reporting.excel_writer import write_workbook
from effluent_report.reporting.rows import build_rows

logger = logging.getLogger(__name__)

REPORT_PREFIX = "rvt-report-"
REPORT_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def report_base_name(now: Optional[datetime] = None) -> str:
    """Base file name, e.g. rvt-report-2024-03-01_08-15-00."""
    return REPORT_PREFIX + (now or datetime.now()).strftime(REPORT_TIMESTAMP_FORMAT)


def create_report(
    buckets: list[DailyBucket],
    config: ReportConfig,
    now: Optional[datetime] = None,
) -> list[Path]:
    """Write every enabled format and return the paths written."""
    out_dir = Path(config.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    base = out_dir / report_base_name(now)

    written: list[Path] = []
    if config.emit_excel:
        written.append(write_workbook(buckets, config, base.with_suffix(".xlsx")))
    if config.emit_csv:
        # CSV keeps every day regardless of sample size
        written.append(write_csv(build_rows(buckets, config), config, base.with_suffix(".csv")))

    logger.info("Report created with %d file(s) in %s", len(written), out_dir)
    return written
