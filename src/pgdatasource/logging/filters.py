"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
enabling correlation of logs across data source reads.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from typing import Any, Dict, List, Optional, Tuple
from pgdatasource.__version__ import __version__

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
data_source_var: ContextVar[Optional[str]] = ContextVar("data_source", default=None)

_static_environment: Optional[str] = None
_static_extra: Dict[str, Any] = {}


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records.

    Request-scoped values come from context variables; process-wide values
    are configured once through ``set_logging_context``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "request_id", request_id_var.get())
        setattr(record, "data_source", data_source_var.get())
        setattr(record, "sdk_name", "pgdatasource")
        setattr(record, "sdk_version", __version__)

        if _static_environment is not None:
            setattr(record, "environment", _static_environment)
        for key, value in _static_extra.items():
            setattr(record, key, value)

        return True


def set_logging_context(
    environment: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Configure process-wide values attached to every log record."""
    global _static_environment, _static_extra
    _static_environment = environment
    _static_extra = dict(extra or {})


RequestContextTokens = List[Tuple[ContextVar, Token]]


def set_request_context(
    request_id: Optional[str] = None,
    data_source: Optional[str] = None,
) -> RequestContextTokens:
    """Set request context variables.

    Returns:
        Tokens for ``reset_request_context``, which restores the values
        that were active before this call
    """
    tokens: RequestContextTokens = []
    if request_id is not None:
        tokens.append((request_id_var, request_id_var.set(request_id)))
    if data_source is not None:
        tokens.append((data_source_var, data_source_var.set(data_source)))
    return tokens


def reset_request_context(tokens: RequestContextTokens) -> None:
    """Restore the request context saved by ``set_request_context``."""
    for var, token in reversed(tokens):
        var.reset(token)
