"""Per-day statistics over a DailyBucket."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import time
from typing import Callable

import numpy as np

from effluent_report.aggregation.daily import DailyBucket
from effluent_report.ingestion.models import Reading

# Returned by every aggregate computed over zero readings
EMPTY = float("nan")

HOURS_PER_DAY = 24
DEFAULT_PERCENTILE = 0.80
MIN_SAMPLE_SIZE = 10


def is_empty_result(value: float) -> bool:
    return math.isnan(value)


@dataclass(frozen=True)
class TimeWindow:
    """Time-of-day range, inclusive at both ends."""

    start: time
    end: time

    def contains(self, moment: time) -> bool:
        return self.start <= moment <= self.end

    @property
    def label(self) -> str:
        return f"{self.start:%H:%M}h-{self.end:%H:%M}h"


# Note the one-second gap between consecutive windows.
REPORT_WINDOWS: tuple[TimeWindow, ...] = (
    TimeWindow(time(0, 0, 0), time(5, 59, 59)),
    TimeWindow(time(6, 0, 0), time(11, 59, 59)),
    TimeWindow(time(12, 0, 0), time(17, 59, 59)),
    TimeWindow(time(18, 0, 0), time(23, 59, 59)),
)


def percentile_index(count: int, percentile: float) -> int:
    """Index of the selected element in a sorted sample of size count.

    floor(percentile * count), clamped to the last element so that
    percentile == 1.0 selects the maximum.
    """
    return min(int(math.floor(percentile * count)), count - 1)


class StatisticsEngine:
    """Computes the report aggregates of a single bucket.

    All values are computed on demand from the bucket's readings; the bucket
    is never modified. An empty bucket yields EMPTY for every aggregate.
    """

    def __init__(self, bucket: DailyBucket) -> None:
        self._bucket = bucket

    @property
    def bucket(self) -> DailyBucket:
        return self._bucket

    def _values(self, getter: Callable[[Reading], float]) -> np.ndarray:
        return np.array([getter(r) for r in self._bucket.readings], dtype=np.float64)

    def _mean(self, getter: Callable[[Reading], float]) -> float:
        values = self._values(getter)
        if values.size == 0:
            return EMPTY
        # Rounding can push the mean of near-equal values outside [min, max]
        return float(np.clip(values.mean(), values.min(), values.max()))

    def _min(self, getter: Callable[[Reading], float]) -> float:
        values = self._values(getter)
        if values.size == 0:
            return EMPTY
        return float(values.min())

    def _max(self, getter: Callable[[Reading], float]) -> float:
        values = self._values(getter)
        if values.size == 0:
            return EMPTY
        return float(values.max())

    # Flow

    def mean_outflow(self) -> float:
        return self._mean(lambda r: r.measurement.flow)

    def daily_outflow(self) -> float:
        """Mean outflow extrapolated to a full day."""
        return self.mean_outflow() * HOURS_PER_DAY

    def mean_container_outflow(self) -> float:
        return self._mean(lambda r: r.container.drain)

    def daily_container_outflow(self) -> float:
        return self.mean_container_outflow() * HOURS_PER_DAY

    # pH

    def ph_min(self) -> float:
        return self._min(lambda r: r.measurement.ph)

    def ph_max(self) -> float:
        return self._max(lambda r: r.measurement.ph)

    def ph_mean(self) -> float:
        return self._mean(lambda r: r.measurement.ph)

    # Temperature

    def temperature_min(self) -> float:
        return self._min(lambda r: r.measurement.temperature)

    def temperature_max(self) -> float:
        return self._max(lambda r: r.measurement.temperature)

    def temperature_mean(self) -> float:
        return self._mean(lambda r: r.measurement.temperature)

    def temperature_percentile(
        self, start: time, end: time, percentile: float = DEFAULT_PERCENTILE
    ) -> float:
        """Temperature percentile over the readings between start and end.

        Readings are filtered by time of day (inclusive on both ends), their
        temperatures sorted ascending and the element at
        floor(percentile * count) returned, clamped to the maximum.
        Returns EMPTY if no reading falls into the window.
        """
        if not 0.0 <= percentile <= 1.0:
            raise ValueError(f"percentile must be within [0, 1], got {percentile}")

        window = TimeWindow(start, end)
        temperatures = np.sort(
            np.array(
                [
                    r.measurement.temperature
                    for r in self._bucket.readings
                    if window.contains(r.timestamp.time())
                ],
                dtype=np.float64,
            )
        )
        if temperatures.size == 0:
            return EMPTY
        return float(temperatures[percentile_index(temperatures.size, percentile)])

    def window_percentiles(
        self,
        windows: tuple[TimeWindow, ...] = REPORT_WINDOWS,
        percentile: float = DEFAULT_PERCENTILE,
    ) -> tuple[float, ...]:
        return tuple(
            self.temperature_percentile(w.start, w.end, percentile) for w in windows
        )
