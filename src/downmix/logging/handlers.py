"""JSON log formatting for downmix.

Each record becomes a single-line JSON object. Records logged around an
ffprobe/ffmpeg run carry the extras attached by run_command; those are
collected under ``context``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Extras attached by downmix.core.run_command
CONTEXT_FIELDS = (
    "command",
    "arg_count",
    "returncode",
    "elapsed_seconds",
    "timeout_seconds",
)


class JSONFormatter(logging.Formatter):
    """Render log records as JSON lines.

    Keys: timestamp (UTC, ISO-8601), level, logger, message, plus context
    and exception when the record has them.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {
            name: getattr(record, name)
            for name in CONTEXT_FIELDS
            if hasattr(record, name)
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
