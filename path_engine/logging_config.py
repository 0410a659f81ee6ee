"""Logging setup for the path engine and its CLI.

Records go to stderr either as one JSON object per line or in a short
human-readable form. A main log file and an errors-only log file can be
added on top; both rotate.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TextIO

# Engine module (second component of the logger name) -> category
CATEGORIES = {
    "path_parser": "parser",
    "svg_import": "parser",
    "arc_math": "geometry",
    "curves": "geometry",
    "path_geometry": "geometry",
    "shapes": "shapes",
    "editing": "editing",
    "cli": "cli",
}

# Attributes present on every LogRecord; anything else arrived via extra=
RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

PLAIN_FORMAT = "%(asctime)s %(levelname)5s [%(name)s] %(message)s"


def log_category(logger_name: str) -> str:
    """Category for a logger name; loggers outside the engine are "system"."""
    package, _, rest = logger_name.partition(".")
    if package != "path_engine" or not rest:
        return "system"
    return CATEGORIES.get(rest.split(".")[0], "system")


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with extra= fields nested under "extra"."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "category": log_category(record.name),
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            entry["extra"] = extra
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Values json can't encode are logged by their str()
        return json.dumps(entry, default=str)


def _file_handler(path: Path, formatter: logging.Formatter, level: int) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def configure_logging(
    *,
    json_format: bool = False,
    level: int | str = logging.INFO,
    log_file: Path | str | None = None,
    error_log_file: Path | str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Replace the root logger's handlers.

    Args:
        json_format: Emit JSON lines instead of the plain format
        level: Minimum level, as a number or a name like "debug"
        log_file: Also write every record to this file
        error_log_file: Also write ERROR and above to this file
        stream: Stream for console output (default: sys.stderr)
    """
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    formatter = (
        StructuredFormatter()
        if json_format
        else logging.Formatter(PLAIN_FORMAT, datefmt="%H:%M:%S")
    )

    console = logging.StreamHandler(stream or sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        root.addHandler(_file_handler(Path(log_file), formatter, logging.NOTSET))
    if error_log_file:
        root.addHandler(_file_handler(Path(error_log_file), formatter, logging.ERROR))
