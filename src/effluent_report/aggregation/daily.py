"""Partitioning of readings into calendar-day buckets."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from effluent_report.ingestion.models import Reading


class DailyBucket:
    """All readings of one calendar day, in file order.

    The date is fixed at construction; append() is the only way to add
    readings.
    """

    def __init__(self, date: date, readings: Iterable[Reading] = ()) -> None:
        self._date = date
        self._readings: list[Reading] = []
        for reading in readings:
            self.append(reading)

    def __repr__(self) -> str:
        return f"DailyBucket(date={self._date!r}, reading_count={self.reading_count})"

    @property
    def date(self) -> date:
        return self._date

    @property
    def readings(self) -> tuple[Reading, ...]:
        return tuple(self._readings)

    def append(self, reading: Reading) -> None:
        if reading.timestamp.date() != self._date:
            raise ValueError(
                f"Reading from {reading.timestamp.date()} does not belong to bucket {self._date}"
            )
        self._readings.append(reading)

    @property
    def reading_count(self) -> int:
        return len(self._readings)

    @property
    def first_timestamp(self) -> Optional[datetime]:
        return self._readings[0].timestamp if self._readings else None

    @property
    def last_timestamp(self) -> Optional[datetime]:
        return self._readings[-1].timestamp if self._readings else None


class DailyAggregator:
    """Groups readings by calendar day.

    Buckets are returned in the order their date is first seen. The input is
    not sorted and identical timestamps are kept.
    """

    def group(self, readings: Iterable[Reading]) -> list[DailyBucket]:
        buckets: dict[date, DailyBucket] = {}
        for reading in readings:
            day = reading.timestamp.date()
            bucket = buckets.get(day)
            if bucket is None:
                bucket = DailyBucket(date=day)
                buckets[day] = bucket
            bucket.append(reading)
        return list(buckets.values())


def group_by_day(readings: Iterable[Reading]) -> list[DailyBucket]:
    return DailyAggregator().group(readings)
