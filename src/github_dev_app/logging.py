"""Structured logging configuration.

Uses standard library logging with a JSON formatter. App secrets and the
one-time manifest code are masked wherever they appear in `extra=` fields.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from pydantic import SecretStr

_REDACTED = "**********"

# extra= keys whose values are always masked, whatever their type.
_SECRET_EXTRA_KEYS: frozenset[str] = frozenset(
    {"code", "client_secret", "webhook_secret", "pem", "private_key"}
)

_RESERVED_LOG_RECORD_ATTRS: set[str] = {
    "args",
    "asctime",
    "color_message",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


def _redact(key: str, value: Any) -> Any:
    if key in _SECRET_EXTRA_KEYS or isinstance(value, SecretStr):
        return _REDACTED
    if isinstance(value, dict):
        return {k: _redact(str(k), v) for k, v in value.items()}
    return value


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for logging records."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: _redact(key, value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str) -> None:
    """Configure root logging with structured JSON output."""

    root = logging.getLogger()

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())

    # uvicorn and urllib3 are chatty at DEBUG.
    for name in ("uvicorn", "uvicorn.error", "urllib3"):
        logging.getLogger(name).setLevel(max(root.level, logging.INFO))
