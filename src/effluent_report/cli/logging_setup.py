"""Logging configuration for the CLI entry points."""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Log to stderr at INFO when verbose, else at LOG_LEVEL (default WARNING).

    Raises ValueError for an unknown LOG_LEVEL.
    """
    level = "INFO" if verbose else os.environ.get("LOG_LEVEL", "WARNING").strip().upper()
    root = logging.getLogger()
    root.setLevel(level)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
