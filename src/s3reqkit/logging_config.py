"""Logging setup for applications embedding s3reqkit.

Core modules log bucket rejections and part plans at DEBUG with the
attributes listed in ``_EXTRA_FIELDS``.  Both formatters surface them: JSON
as keys, text as trailing ``key=value`` pairs.
"""

import json
import logging
import sys
from datetime import datetime, timezone

_EXTRA_FIELDS = ("bucket", "rule", "object_size", "part_size", "part_count")

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: getattr(record, key)
        for key in _EXTRA_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects.

    Fields: timestamp, level, logger, message, plus any s3reqkit extras.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_extras(record))
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines with s3reqkit extras appended."""

    def __init__(self) -> None:
        super().__init__(_TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if extras:
            line += " " + " ".join(f"{key}={val}" for key, val in extras.items())
        return line


_FORMATTERS = {"json": JSONFormatter, "text": TextFormatter}


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Install a single stderr handler on the root logger.

    Args:
        level: Log level name; unknown names fall back to INFO.
        fmt: 'text' or 'json'; anything else is treated as 'text'.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(_FORMATTERS.get(fmt, TextFormatter)())
    root.addHandler(handler)
