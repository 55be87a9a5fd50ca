import threading
import uuid
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from pgdatasource.common.exceptions import configuration_error
from pgdatasource.datasources import get_data_source
from pgdatasource.engine.connection import DBConnection
from pgdatasource.logging import get_logger
from pgdatasource.logging.filters import reset_request_context, set_request_context
from pgdatasource.settings import get_settings


logger = get_logger(__name__)

_connection: Optional[DBConnection] = None
_connection_lock = threading.Lock()


def get_connection() -> DBConnection:
    """Return the process-wide connection pool registry, creating it on first use.

    Raises:
        DataSourceError: CONFIG_ERROR if the settings cannot be loaded
    """
    global _connection
    with _connection_lock:
        if _connection is None:
            try:
                settings = get_settings()
            except ValidationError as exc:
                fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
                raise configuration_error(
                    f"Invalid pgdatasource settings: {fields}",
                    config_key=fields,
                    cause=exc,
                ) from exc
            _connection = DBConnection(settings.postgres)
        return _connection


def reset_connection() -> None:
    """Dispose the shared pools; the next read builds fresh ones."""
    global _connection
    with _connection_lock:
        if _connection is not None:
            _connection.dispose()
        _connection = None


def read_data_source(
    name: str,
    attributes: Optional[Mapping[str, Any]] = None,
    *,
    db: Optional[DBConnection] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Read a data source and return its full attribute state.

    Args:
        name: Registered data source name, e.g. ``postgresql_query``
        attributes: Input attributes for the data source
        db: Optional connection registry. Defaults to the shared one.
        request_id: Optional correlation id for log records

    Returns:
        Input and computed attributes plus ``id``. Nothing is returned when
        the read fails; the error propagates.

    Raises:
        DataSourceError: On unknown data sources, invalid inputs or failed reads
    """
    tokens = set_request_context(request_id=request_id or str(uuid.uuid4()), data_source=name)
    try:
        data_source = get_data_source(name)
        data = data_source.new_resource_data(attributes)
        data_source.read(db or get_connection(), data)
        return data.state()
    finally:
        reset_request_context(tokens)
