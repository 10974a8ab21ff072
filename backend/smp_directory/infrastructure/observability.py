"""Structured Logging — JSON formatter and setup for the SMP directory.

Invariants:
    - Every record carries the smp_id of this instance (SMPContextFilter)
    - Extra fields (operation, service_group_id, error_code, user_name, path)
      surface as top-level JSON keys when present
    - Calling setup_logging twice does not duplicate output

Design Decisions:
    - JSONFormatter on stdlib logging: log shippers parse one object per line
    - SQLAlchemy engine and uvicorn access logs capped at WARNING: request
      logging is done by the REST API objects with their own prefix
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "smp_id", "operation", "service_group_id", "error_code", "user_name", "path",
)
_QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")
_HANDLER_NAME = "smp-directory"


class SMPContextFilter(logging.Filter):
    """Stamps the SMP id on every record passing the handler."""

    def __init__(self, smp_id: str):
        super().__init__()
        self.smp_id = smp_id

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "smp_id", None) is None:
            record.smp_id = self.smp_id
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: record.__dict__[key]
            for key in CONTEXT_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json", smp_id: str | None = None):
    """Install the application handler on the root logger (replacing a previous one)."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(smp_id)s] %(name)s: %(message)s",
        ))
    handler.addFilter(SMPContextFilter(smp_id or "-"))

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
