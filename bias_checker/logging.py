"""
Structured logging for the bias checker.

Emits JSON lines by default so service logs can be shipped as-is; set
BIAS_CHECKER_LOG_FORMAT=text for a readable development format.

Usage:
    from bias_checker.logging import get_logger
    logger = get_logger("bias_scorer")
    logger.info("Analysis complete", extra={"overall_score": 0.4})

Submitted text is never logged, only its length.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from bias_checker.config import settings

_EXTRA_FIELDS = (
    "overall_score", "categories", "bias_level", "is_toxic", "reason",
    "blocked", "text_length", "duration_ms", "status_code", "method", "path",
    "error", "error_type",
)


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(level: str | None = None, fmt: str | None = None) -> logging.Logger:
    """Configure the package logger. Call once at app startup."""
    level = (level or settings.LOG_LEVEL).upper()
    fmt = fmt or settings.LOG_FORMAT

    root = logging.getLogger("bias_checker")
    root.setLevel(getattr(logging, level, logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the bias_checker namespace."""
    return logging.getLogger(f"bias_checker.{name}")
