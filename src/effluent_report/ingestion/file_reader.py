"""Export file reader with encoding detection and record iteration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from effluent_report.ingestion.models import Reading
from effluent_report.ingestion.parser import RecordParser

logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\r\n"
HEADER_PREFIX = "Datum und Uhrzeit;"


class InputFileError(FileNotFoundError):
    """No input file was given or it does not exist."""


def decode_export(raw: bytes) -> str:
    """Decode export bytes, trying UTF-16 before UTF-8.

    UTF-16 is accepted only if the decoded text contains a CRLF terminator;
    anything else is decoded as UTF-8.
    """
    try:
        text = raw.decode("utf-16")
    except UnicodeDecodeError:
        text = ""
    if LINE_TERMINATOR in text:
        logger.debug("Decoded export as UTF-16")
        return text
    logger.debug("Decoded export as UTF-8")
    return raw.decode("utf-8-sig")


def iter_records(text: str) -> Iterator[tuple[int, str]]:
    """Yield (line_number, line) for every data line of the export text."""
    for line_number, line in enumerate(text.split(LINE_TERMINATOR), start=1):
        # Header line and blank lines carry no data
        if not line or line.startswith(HEADER_PREFIX):
            continue
        yield line_number, line


def check_input_path(file_path: str | Path | None) -> Path:
    """Return the input path, raising InputFileError if it is unusable."""
    if file_path is None or str(file_path).strip() == "":
        raise InputFileError(
            "Es wurde keine Datei ausgewählt, die zur Erstellung des Reports verwendet wird. "
            "Bitte geben Sie zuerst einen Dateipfad der Export-Datei an."
        )
    p = Path(file_path)
    if not p.is_file():
        raise InputFileError(
            f"Die angegebene Datei {str(p)!r} konnte nicht gefunden werden. "
            "Bitte gehen Sie sicher, dass die Datei existiert!"
        )
    return p


class FileReader:
    """Reads an export file and parses it into readings."""

    def __init__(self, file_path: str | Path | None) -> None:
        self.file_path = check_input_path(file_path)

    def read_text(self) -> str:
        return decode_export(self.file_path.read_bytes())

    def iter_readings(self) -> Iterator[Reading]:
        """Yield parsed readings; the first malformed line raises FormatError."""
        parser = RecordParser()
        for line_number, raw in iter_records(self.read_text()):
            reading = parser.parse_line(raw, line_number)
            if reading is not None:
                yield reading

    def read_readings(self) -> list[Reading]:
        readings = list(self.iter_readings())
        logger.info("Parsed %d readings from %s", len(readings), self.file_path.name)
        return readings

    def count_records(self) -> int:
        """Count data lines in the file without parsing them."""
        return sum(1 for _ in iter_records(self.read_text()))
