"""Structured Logging — JSON log lines plus one access line per HTTP request.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Request-scoped fields (method, path, status_code, duration_ms) and domain
      fields (event_id, user_id, participants_added, error_code) appear only when set
    - An exception escaping the app is still access-logged, with status 500
    - setup_logging is idempotent: calling it again replaces, never stacks, its handler
    - Request bodies are never logged (they carry passwords)

Design Decisions:
    - stdlib logging + a small JSONFormatter instead of a logging library
    - Access log as a plain ASGI http middleware registered by create_app
    - SQLAlchemy engine chatter capped at WARNING unless LOG_LEVEL=DEBUG
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import Request

ACCESS_LOGGER = "koinonia.access"

EXTRA_FIELDS = (
    "method", "path", "status_code", "duration_ms",
    "event_id", "user_id", "participants_added", "error_code",
)

_HANDLER_NAME = "koinonia"


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the koinonia handler on the root logger. Returns the handler."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)

    numeric = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric)
    logging.getLogger("sqlalchemy.engine").setLevel(
        numeric if numeric <= logging.DEBUG else logging.WARNING,
    )
    return handler


async def log_requests(request: Request, call_next):
    """http middleware: one access line per request, with timing."""
    started = time.monotonic()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed = (time.monotonic() - started) * 1000
        logging.getLogger(ACCESS_LOGGER).info(
            f"{request.method} {request.url.path} -> {status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": round(elapsed, 1),
            },
        )
