"""Logging infrastructure for pgdatasource.

This module provides structured logging with JSON output and context
tracking for data source reads.
"""

from pgdatasource.logging.filters import ContextFilter
from pgdatasource.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
]
