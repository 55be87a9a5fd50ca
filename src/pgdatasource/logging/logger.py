"""Structured JSON logging for data source reads.

Every record is rendered as one JSON object carrying the request context
injected by ``ContextFilter``. Fields that may hold credentials (``password``,
``dsn``, ``url``) are masked, and SQL text is cut to a fixed length so a
large generated statement cannot flood the log.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional, Set

if TYPE_CHECKING:
    from pgdatasource.settings.main import _Settings


REDACTED = "***"
MAX_STATEMENT_LOG_LENGTH = 1000

_SECRET_KEYS = frozenset({"password", "dsn", "url", "connection_string"})
_STATEMENT_KEYS = frozenset({"query", "statement"})

# Library loggers that are chatty at INFO
_LIBRARY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "opentelemetry")


def _build_reserved_keys() -> Set[str]:
    """Collect standard ``LogRecord`` attributes to avoid duplicating them."""
    probe = logging.LogRecord(
        name="pgdatasource.probe",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    reserved = set(probe.__dict__.keys())
    reserved.update({"asctime", "message"})
    return reserved


_RESERVED_LOG_RECORD_KEYS = _build_reserved_keys()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _sanitize(key: str, value: Any) -> Any:
    lowered = key.lower()
    if lowered in _SECRET_KEYS and value is not None:
        return REDACTED
    if lowered in _STATEMENT_KEYS and isinstance(value, str) and len(value) > MAX_STATEMENT_LOG_LENGTH:
        return value[:MAX_STATEMENT_LOG_LENGTH] + "..."
    if isinstance(value, dict):
        return {k: _sanitize(str(k), v) for k, v in value.items()}
    return value


class CustomJsonFormatter(logging.Formatter):
    """JSON formatter that enriches log entries with context and trace data."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {}

        for key, value in record.__dict__.items():
            if key not in _RESERVED_LOG_RECORD_KEYS:
                log_record[key] = _sanitize(key, value)

        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()

        if hasattr(record, "otelTraceID"):
            log_record["trace_id"] = record.otelTraceID

        if hasattr(record, "otelSpanID"):
            log_record["span_id"] = record.otelSpanID

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def setup_logging(
    level: Optional[str] = None,
    *,
    settings: Optional["_Settings"] = None,
    library_level: str = "WARNING",
) -> None:
    """Configure JSON logging for the package through ``dictConfig``.

    Args:
        level: Root log level. Defaults to ``settings.log_level``.
        settings: Settings to read the level and environment from.
            Defaults to ``get_settings()`` when ``level`` is not given.
        library_level: Level applied to SQLAlchemy and OpenTelemetry loggers.
    """
    from pgdatasource.logging.filters import set_logging_context

    if level is None or settings is not None:
        if settings is None:
            from pgdatasource.settings import get_settings
            settings = get_settings()
        level = level or settings.log_level
        set_logging_context(environment=settings.app_env)

    level = level.upper()
    config_dict: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "pgds_json": {
                "()": "pgdatasource.logging.logger.CustomJsonFormatter",
            }
        },
        "filters": {
            "pgds_context": {
                "()": "pgdatasource.logging.filters.ContextFilter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "pgds_json",
                "filters": ["pgds_context"],
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            name: {"level": library_level.upper()} for name in _LIBRARY_LOGGERS
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }

    logging.config.dictConfig(config_dict)
