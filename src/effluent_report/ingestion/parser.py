"""Line-level parser for the semicolon-delimited plant export."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from effluent_report.ingestion.models import (
    ContainerFlow,
    Measurements,
    Reading,
    SensorInputs,
    Sewage,
    ValueRange,
)

FIELD_SEPARATOR = ";"
FIELD_COUNT = 20

# Timestamp pattern: HH:mm:ss.fff dd-MM-yyyy
TIMESTAMP_PATTERN = re.compile(r"^\d{2}:\d{2}:\d{2}\.\d{3} \d{2}-\d{2}-\d{4}$")
TIMESTAMP_FORMAT = "%H:%M:%S.%f %d-%m-%Y"

# Plain decimal with optional exponent, or NaN/Infinity; no digit grouping
DECIMAL_PATTERN = re.compile(
    r"^[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|nan|inf|infinity)$",
    re.IGNORECASE,
)

# Export column index of every numeric field
NUMERIC_FIELDS = {
    "level": 2,
    "container_flow": 3,
    "flow": 4,
    "temperature": 5,
    "conductivity": 6,
    "ph": 7,
    "temperature_sensor": 8,
    "flow_sensor_a": 9,
    "flow_sensor_b": 10,
    "level_sensor_b": 11,
    "flow_rate_a": 12,
    "flow_rate_b": 13,
    "container_drain": 14,
    "discharge": 15,
    "sewage_temperature_max": 16,
    "sewage_temperature_min": 17,
    "sewage_ph_max": 18,
    "sewage_ph_min": 19,
}


class FormatError(ValueError):
    """A record could not be parsed."""

    def __init__(
        self, message: str, line_number: int = 0, field: Optional[str] = None
    ) -> None:
        self.line_number = line_number
        self.field = field
        if line_number:
            message = f"Zeile {line_number}: {message}"
        super().__init__(message)


def parse_decimal(value: str) -> float:
    """Parse a decimal value that may use a comma as decimal separator."""
    candidate = value.strip().replace(",", ".")
    if not candidate:
        raise ValueError("empty value")
    if not DECIMAL_PATTERN.match(candidate):
        raise ValueError(f"not a decimal number: {value!r}")
    return float(candidate)


def parse_timestamp(value: str) -> datetime:
    candidate = value.strip()
    if not TIMESTAMP_PATTERN.match(candidate):
        raise ValueError(f"timestamp {value!r} does not match HH:mm:ss.fff dd-MM-yyyy")
    return datetime.strptime(candidate, TIMESTAMP_FORMAT)


class RecordParser:
    """Parses individual export lines into Reading objects."""

    def parse_line(self, raw: str, line_number: int = 0) -> Optional[Reading]:
        """Parse a single raw export line.

        Returns a Reading for a complete 20-field record and None for a line
        without any separator. Every other shape raises FormatError.
        """
        fields = raw.split(FIELD_SEPARATOR)

        # A line without delimiter carries no data; skip it.
        if len(fields) == 1:
            return None

        if len(fields) != FIELD_COUNT:
            raise FormatError(
                f"{len(fields)} Felder gefunden, erwartet werden {FIELD_COUNT}.",
                line_number=line_number,
            )

        try:
            timestamp = parse_timestamp(fields[0])
        except ValueError as exc:
            raise FormatError(
                f"Ungültiger Zeitstempel {fields[0]!r}.",
                line_number=line_number,
                field="timestamp",
            ) from exc

        values: dict[str, float] = {}
        for name, index in NUMERIC_FIELDS.items():
            try:
                values[name] = parse_decimal(fields[index])
            except ValueError as exc:
                raise FormatError(
                    f"Ungültiger Zahlenwert {fields[index]!r} in Spalte {index + 1} ({name}).",
                    line_number=line_number,
                    field=name,
                ) from exc

        return Reading(
            timestamp=timestamp,
            message=fields[1],
            sensors=SensorInputs(
                level=values["level"],
                temperature_sensor=values["temperature_sensor"],
                flow_sensor_a=values["flow_sensor_a"],
                flow_sensor_b=values["flow_sensor_b"],
                level_sensor_b=values["level_sensor_b"],
                flow_rate_a=values["flow_rate_a"],
                flow_rate_b=values["flow_rate_b"],
            ),
            container=ContainerFlow(
                flow=values["container_flow"],
                drain=values["container_drain"],
            ),
            measurement=Measurements(
                flow=values["flow"],
                temperature=values["temperature"],
                conductivity=values["conductivity"],
                ph=values["ph"],
            ),
            sewage=Sewage(
                discharge=values["discharge"],
                temperature=ValueRange(
                    minimum=values["sewage_temperature_min"],
                    maximum=values["sewage_temperature_max"],
                ),
                ph=ValueRange(
                    minimum=values["sewage_ph_min"],
                    maximum=values["sewage_ph_max"],
                ),
            ),
            line_number=line_number,
        )


def parse_reading(line: str) -> Optional[Reading]:
    """Parse a bare line without line-number context."""
    return RecordParser().parse_line(line)
