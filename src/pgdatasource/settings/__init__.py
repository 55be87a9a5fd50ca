"""Settings module providing configuration management for pgdatasource.

Built on Pydantic Settings: values are type-checked on load and read from
environment variables or a ``.env`` file.

Configuration Sources (precedence order):
    1. Environment Variables (highest priority)
    2. ``.env`` file
    3. Default Values in code (lowest priority)

Environment Variable Naming:
    - Top level: ``APP_ENV``, ``LOG_LEVEL``
    - PostgreSQL: ``PG_HOST``, ``PG_PORT``, ``PG_USERNAME``, ``PG_PASSWORD``, ...
    - Nested form: ``POSTGRES__HOST`` also works through the aggregator

Quick Start:
    >>> from pgdatasource.settings import get_settings
    >>> settings = get_settings()
    >>> settings.postgres.url_for("analytics")
"""

from .main import _Settings, get_settings, _reload_settings
from .base import PGDSBaseSettings
from .postgres import PostgresSettings

__all__ = [
    "get_settings",
    "PGDSBaseSettings",
    "PostgresSettings",
]
