"""Report configuration from environment variables or CLI options."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from effluent_report.aggregation.daily import DailyBucket
from effluent_report.aggregation.statistics import (
    DEFAULT_PERCENTILE,
    MIN_SAMPLE_SIZE,
    REPORT_WINDOWS,
    TimeWindow,
)

_TRUE_VALUES = {"1", "true", "yes", "on", "ja"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class ReportConfig:
    """Parameters of the per-day report."""

    # Percentile of the windowed temperature values, 0.0 to 1.0
    percentile: float = DEFAULT_PERCENTILE
    windows: tuple[TimeWindow, ...] = field(default_factory=lambda: REPORT_WINDOWS)
    # Days with fewer readings are left out of the workbook
    min_sample_size: int = MIN_SAMPLE_SIZE
    emit_excel: bool = True
    emit_csv: bool = True
    daily_pages: bool = True
    output_dir: str = "./reports"

    @classmethod
    def from_env(cls) -> ReportConfig:
        """Load configuration from environment variables."""
        return cls(
            percentile=float(os.environ.get("EFFLUENT_PERCENTILE", str(DEFAULT_PERCENTILE))),
            min_sample_size=int(os.environ.get("EFFLUENT_MIN_SAMPLES", str(MIN_SAMPLE_SIZE))),
            emit_excel=_env_flag("EFFLUENT_EXCEL", True),
            emit_csv=_env_flag("EFFLUENT_CSV", True),
            daily_pages=_env_flag("EFFLUENT_DAILY_PAGES", True),
            output_dir=os.environ.get("EFFLUENT_OUTPUT_DIR", "./reports"),
        )

    def validate(self, check_outputs: bool = True) -> list[str]:
        """Return list of validation errors, empty if config is valid.

        With check_outputs=False the output format and directory settings
        are not checked.
        """
        errors = []
        if not 0.0 <= self.percentile <= 1.0:
            errors.append(f"percentile must be within [0, 1], got {self.percentile}")
        if self.min_sample_size < 1:
            errors.append(f"min_sample_size must be positive, got {self.min_sample_size}")
        if not self.windows:
            errors.append("at least one time window is required")
        if not check_outputs:
            return errors
        if not (self.emit_excel or self.emit_csv):
            errors.append("no output format enabled")
        if not self.output_dir:
            errors.append("output_dir is required")
        elif Path(self.output_dir).is_file():
            errors.append(f"output_dir is a file: {self.output_dir}")
        return errors

    def passes_sample_gate(self, bucket: DailyBucket) -> bool:
        return bucket.reading_count >= self.min_sample_size
