"""Centralized logging configuration.

Patient records are PHI, so log output follows a few hard rules:
- Structured JSON lines on stdout, one object per record
- Only identifiers and request metadata are emitted; names, PESEL numbers, e-mails and
  search terms never reach a log record
- `extra` fields are optional; the formatter never raises on a missing key
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
from datetime import UTC, datetime
from typing import Any

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Extra attributes copied from the LogRecord when present.
_EXTRA_FIELDS = (
    "request_id",
    "status_code",
    "duration_ms",
    "error",
    "owner_id",
    "patient_id",
    "operation",
)


class JsonFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "method": getattr(record, "http_method", None),
            "path": getattr(record, "request_path", None),
        }
        for field in _EXTRA_FIELDS:
            payload[field] = getattr(record, field, None)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str | None = None) -> None:
    """Configure application logging (JSON to stdout)."""

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": "app.core.logging.JsonFormatter",
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {
                "level": (level or LOG_LEVEL).upper(),
                "handlers": ["default"],
            },
        }
    )
