"""Report rows derived from daily buckets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from effluent_report.aggregation.daily import DailyBucket
from effluent_report.aggregation.statistics import StatisticsEngine, TimeWindow
from effluent_report.config.report_config import ReportConfig

BASE_HEADERS = [
    "Monat",
    "Tag",
    "Auslaufmenge Pufferbehälter",
    "Einleitmenge",
    "Tagesmaximum pH-Wert",
    "Tagesminimum pH-Wert",
    "Tagesmittelwert Temperatur",
    "Tagesmaximalwert Temperatur",
]
BASE_UNITS = ["", "", "m³/d", "m³/d", "", "", "°C", "°C"]


def percentile_header(percentile: float, window: TimeWindow) -> str:
    return f"Temperatur Perzentil {percentile:g} - {window.label}"


def report_headers(config: ReportConfig) -> list[str]:
    return BASE_HEADERS + [percentile_header(config.percentile, w) for w in config.windows]


def report_units(config: ReportConfig) -> list[str]:
    return BASE_UNITS + ["°C"] * len(config.windows)


@dataclass(frozen=True)
class ReportRow:
    """Aggregates of one day as they appear in the summary."""

    date: date
    reading_count: int
    daily_container_outflow: float
    daily_outflow: float
    ph_max: float
    ph_min: float
    temperature_mean: float
    temperature_max: float
    temperature_percentiles: tuple[float, ...]

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def day(self) -> int:
        return self.date.day

    def values(self) -> list[float | int]:
        """Cell values in header order."""
        return [
            self.month,
            self.day,
            self.daily_container_outflow,
            self.daily_outflow,
            self.ph_max,
            self.ph_min,
            self.temperature_mean,
            self.temperature_max,
            *self.temperature_percentiles,
        ]


def build_row(bucket: DailyBucket, config: ReportConfig) -> ReportRow:
    stats = StatisticsEngine(bucket)
    return ReportRow(
        date=bucket.date,
        reading_count=bucket.reading_count,
        daily_container_outflow=stats.daily_container_outflow(),
        daily_outflow=stats.daily_outflow(),
        ph_max=stats.ph_max(),
        ph_min=stats.ph_min(),
        temperature_mean=stats.temperature_mean(),
        temperature_max=stats.temperature_max(),
        temperature_percentiles=stats.window_percentiles(config.windows, config.percentile),
    )


def build_rows(
    buckets: Iterable[DailyBucket], config: ReportConfig, gated: bool = False
) -> list[ReportRow]:
    """Build one row per bucket, optionally skipping days below the sample gate."""
    return [
        build_row(bucket, config)
        for bucket in buckets
        if not gated or config.passes_sample_gate(bucket)
    ]
