"""Shared test fixtures and sample export data."""

from __future__ import annotations

from datetime import datetime

import pytest

from effluent_report.ingestion.models import (
    ContainerFlow,
    Measurements,
    Reading,
    SensorInputs,
    Sewage,
    ValueRange,
)

HEADER_LINE = (
    "Datum und Uhrzeit;Meldung;L301;Durchfluss Pufferbehälter;Durchfluss Mbw.;"
    "Temperatur Mbw.;Leitfähigkeit Mbw.;pH-Wert Mbw.;T101;F206;F103;L203;Q220;Q221;"
    "Ablauf Pufferbehälter;Leitmenge;Temperatur max;Temperatur min;pH max;pH min"
)


def make_line(
    timestamp: str = "08:15:00.000 01-03-2024",
    message: str = "",
    flow: str = "12,5",
    temperature: str = "23,5",
    ph: str = "7,2",
    drain: str = "4,25",
) -> str:
    """Build a 20-field export line with the given primary values."""
    fields = [
        timestamp,
        message,
        "1,5",  # level
        "3,75",  # container flow
        flow,
        temperature,
        "850,3",  # conductivity
        ph,
        "22,1",  # temperature sensor
        "0,5",  # flow sensor a
        "0,75",  # flow sensor b
        "2,0",  # level sensor b
        "10,5",  # flow rate a
        "11,5",  # flow rate b
        drain,
        "100,0",  # discharge
        "35,0",  # sewage temperature max
        "5,0",  # sewage temperature min
        "9,5",  # sewage pH max
        "6,5",  # sewage pH min
    ]
    return ";".join(fields)


def make_reading(
    timestamp: datetime,
    temperature: float = 20.0,
    ph: float = 7.0,
    flow: float = 10.0,
    drain: float = 5.0,
) -> Reading:
    return Reading(
        timestamp=timestamp,
        message="",
        sensors=SensorInputs(1.0, 20.0, 0.5, 0.5, 2.0, 10.0, 10.0),
        container=ContainerFlow(flow=3.0, drain=drain),
        measurement=Measurements(flow=flow, temperature=temperature, conductivity=800.0, ph=ph),
        sewage=Sewage(
            discharge=100.0,
            temperature=ValueRange(minimum=5.0, maximum=35.0),
            ph=ValueRange(minimum=6.5, maximum=9.5),
        ),
    )


def export_text(lines: list[str]) -> str:
    """Join lines into an export body with header and CRLF terminators."""
    return "\r\n".join([HEADER_LINE, *lines]) + "\r\n"


def day_lines(day: str, count: int, hour: int = 8) -> list[str]:
    """count lines for day (dd-MM-yyyy), one minute apart."""
    return [
        make_line(
            timestamp=f"{hour:02d}:{i:02d}:00.000 {day}",
            temperature=f"{20 + i},0",
        )
        for i in range(count)
    ]


@pytest.fixture
def write_export(tmp_path):
    """Write an export file in the given encoding and return its path."""

    def _write(lines: list[str], encoding: str = "utf-16", name: str = "export.txt"):
        p = tmp_path / name
        p.write_bytes(export_text(lines).encode(encoding))
        return str(p)

    return _write


SAMPLE_LINES = {
    "standard": make_line(),
    "with_message": make_line(message="Störung Pumpe 2"),
    "integer_values": make_line(flow="12", temperature="23", ph="7", drain="4"),
    "period_decimal": make_line(temperature="23.5"),
    "midnight": make_line(timestamp="00:00:00.000 02-03-2024"),
    "bad_timestamp": make_line(timestamp="2024-03-01 08:15:00"),
    "bad_day": make_line(timestamp="08:15:00.000 32-03-2024"),
    "bad_number": make_line(temperature="n/a"),
    "empty_number": make_line(ph=""),
    "too_few_fields": "08:15:00.000 01-03-2024;;1,5;3,75",
    "too_many_fields": make_line() + ";1,0",
    "single_field": "Exportende",
}
