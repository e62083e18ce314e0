"""JSON logging with a per-request correlation id.

The id is set by the trace middleware in app.main and echoed back as the
X-Trace-Id header. Property ids, languages and contact clients passed via
`extra=` end up as top-level keys of the log line.
"""
import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

from app.config import settings

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

EXTRA_FIELDS = ("property_id", "language", "client", "status", "duration")

_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "multipart", "uvicorn.access")


def set_correlation_id(trace_id: str | None = None) -> str:
    """Use the caller's trace id, or mint one. Returns the id."""
    cid = trace_id or str(uuid.uuid4())
    correlation_id_var.set(cid)
    return cid


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if settings.debug:
            entry.update(module=record.module, function=record.funcName, line=record.lineno)

        cid = correlation_id_var.get("")
        if cid:
            entry["correlation_id"] = cid

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging() -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
