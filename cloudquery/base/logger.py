"""
Structured logging for cloudquery.

Provides a pre-configured logger that emits JSON-structured log records
with query context (resource, action, target) for easy filtering in
Cloud Logging.
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cloudquery.base.query import Query

_CONTEXT_KEYS = ("request_id", "resource", "action", "target")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def new_request_id() -> str:
    """Short correlation ID shared by the log records of one query."""
    return uuid.uuid4().hex[:12]


def query_context(query: Query, request_id: str | None = None) -> dict[str, str]:
    """Log fields identifying *query*; a fresh request id unless one is given."""
    return {
        "resource": query.resource,
        "action": query.action,
        "target": query.target,
        "request_id": request_id or new_request_id(),
    }


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class QueryLogger:
    """Convenience wrapper around :mod:`logging` for query handling."""

    def __init__(self, name: str = "cloudquery", level: str | None = None) -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            resolved = (level or os.environ.get("CLOUDQUERY_LOG_LEVEL") or "INFO").upper()
            self.logger.setLevel(resolved if resolved in LOG_LEVELS else "INFO")

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        resource: str | None = None,
        action: str | None = None,
        target: str | None = None,
        request_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with query context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            resource: Resource kind of the query.
            action: Query action.
            target: Query target (e.g. 'instances.list').
            request_id: Optional correlation ID; auto-generated if omitted.
            exc_info: Whether to include exception info.
        """
        extra = {
            "resource": resource,
            "action": action,
            "target": target,
            "request_id": request_id or new_request_id(),
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


# Module-level singleton
cq_logger = QueryLogger()
