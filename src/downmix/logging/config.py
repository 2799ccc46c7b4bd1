"""Logging setup for a downmix run.

The console gets bare messages (``Found 6 channels for 'movie.mkv'``) or
JSON lines; a rotating log file, when configured, gets the same records
with time, logger and level added.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from downmix.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from downmix.config.models import LoggingConfig

TEXT_FORMAT = "%(message)s"
FILE_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _open_log_file(config: LoggingConfig) -> RotatingFileHandler | None:
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to config.

    Always installs a stderr handler. A log file that cannot be opened is
    reported on stderr and skipped; the run continues.

    Args:
        config: Validated logging configuration.
    """
    level = logging.getLevelName(config.level.upper())
    as_json = config.format.casefold() == "json"

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(JSONFormatter() if as_json else logging.Formatter(TEXT_FORMAT))
    root.addHandler(console)

    if not config.file:
        return

    file_handler = _open_log_file(config)
    if file_handler is None:
        return
    file_handler.setFormatter(
        JSONFormatter()
        if as_json
        else logging.Formatter(FILE_TEXT_FORMAT, datefmt=FILE_DATE_FORMAT)
    )
    root.addHandler(file_handler)
