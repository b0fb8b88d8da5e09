"""Structured JSON logging with per-request correlation for the stylist service.

Every record is rendered as one JSON object. Two context variables travel with
the work being done: the correlation id (taken from the ``X-Correlation-ID``
header or minted per operation) and the name of the operation currently
running. Extra fields passed to :func:`log_event` are scrubbed of wardrobe
notes, feedback comments, prices and anything that looks like an address or a
link before they reach a handler.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import logging.config
import re
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterator, Mapping

CORRELATION_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)
OPERATION: contextvars.ContextVar[str | None] = contextvars.ContextVar("operation", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}

SENSITIVE_FIELDS = frozenset(
    {"email", "notes", "comment", "image_url", "constraints", "purchase_date", "price"}
)
_EMAIL = re.compile(r"[\w.\-]+@[\w.\-]+")
_URL_PREFIXES = ("http://", "https://")


class JsonFormatter(logging.Formatter):
    """Render a record, its context and its extra fields as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = record.getMessage()
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
            "event": getattr(record, "event", message),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        operation = OPERATION.get()
        if operation:
            entry["operation"] = operation
        entry.update(
            (key, redact_for_log(value))
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES and key not in entry
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level: int | str = "INFO") -> None:
    """Send every logger to stderr through :class:`JsonFormatter`."""

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": JsonFormatter}},
            "handlers": {"stderr": {"class": "logging.StreamHandler", "formatter": "json"}},
            "root": {"level": level, "handlers": ["stderr"]},
        }
    )


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def _scrub_text(value: str) -> str:
    if value.lower().startswith(_URL_PREFIXES):
        return "[redacted-url]"
    return _EMAIL.sub("[redacted-email]", value)


def redact_for_log(value: Any) -> Any:
    """Return a JSON-safe copy of ``value`` with sensitive fields masked."""

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _scrub_text(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {
            key: "[redacted]" if key in SENSITIVE_FIELDS else redact_for_log(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [redact_for_log(item) for item in value]
    return str(value)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id``, else keep the current one, else mint a new one."""

    resolved = correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex
    if resolved != CORRELATION_ID.get():
        CORRELATION_ID.set(resolved)
    return resolved


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id, restoring the previous one on exit."""

    token = CORRELATION_ID.set(correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    """Tag every record logged inside the block with ``name`` and a correlation id."""

    token = OPERATION.set(name)
    try:
        with correlation_context(correlation_id) as scoped_id:
            yield scoped_id
    finally:
        OPERATION.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with redacted structured fields attached as record attributes."""

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


__all__ = [
    "CORRELATION_ID",
    "OPERATION",
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "redact_for_log",
    "operation_context",
]
