"""Central logging configuration for adfmd."""
from __future__ import annotations

import json
import logging
import os
import sys
import threading
import uuid
from datetime import datetime, timezone
from typing import Any


_CONFIG_LOCK = threading.Lock()
_CONFIGURED = False
_CORRELATION_ID = os.getenv("ADFMD_CORR_ID") or str(uuid.uuid4())

_RESERVED_ATTRS = frozenset(
    {
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)

logging.getLogger("adfmd").addHandler(logging.NullHandler())


def get_correlation_id() -> str:
    """Return the run-scoped correlation identifier."""

    return _CORRELATION_ID


class _CorrelationIdFilter(logging.Filter):
    """Inject the correlation identifier into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if not getattr(record, "correlation_id", None):
            record.correlation_id = _CORRELATION_ID
        return True


class _JsonFormatter(logging.Formatter):
    """Formatter that outputs structured JSON payloads."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", _CORRELATION_ID),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in payload:
                continue
            payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class _StructuredFormatter(logging.Formatter):
    """Plain-text structured formatter."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)sZ %(levelname)s %(name)s [corr=%(correlation_id)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: D401, N802
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return dt.strftime(self.datefmt or "%Y-%m-%dT%H:%M:%S")


def configure_logging(level_override: str | None = None) -> None:
    """Configure the global logging system if it has not been configured.

    Log records go to stderr so that Markdown written to stdout stays clean.
    """

    global _CONFIGURED

    with _CONFIG_LOCK:
        root = logging.getLogger()
        first_configuration = not _CONFIGURED
        if first_configuration:
            handler = logging.StreamHandler(stream=sys.stderr)
            use_json = os.getenv("ADFMD_LOG_JSON", "false").lower() == "true"
            handler.addFilter(_CorrelationIdFilter())
            handler.setFormatter(_JsonFormatter() if use_json else _StructuredFormatter())
            root.handlers = [handler]
            _CONFIGURED = True

        level: int | None = None
        if level_override:
            level = getattr(logging, level_override.upper(), None)
            if not isinstance(level, int):
                level = logging.INFO
        elif first_configuration:
            env_level = os.getenv("ADFMD_LOG_LEVEL", "WARNING").upper()
            level = getattr(logging, env_level, logging.WARNING)

        if level is not None:
            root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger; handlers are attached by :func:`configure_logging`."""

    return logging.getLogger(name)


__all__ = ["get_logger", "configure_logging", "get_correlation_id"]
