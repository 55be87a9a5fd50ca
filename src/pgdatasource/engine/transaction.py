"""Read-only unit of work scoped to one database."""

import time
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.engine import Connection, CursorResult

from pgdatasource.common.exceptions import DataSourceError, query_execution_error
from pgdatasource.engine.cursor import SQLAlchemyResultCursor
from pgdatasource.logging import get_logger
from pgdatasource.protocols.cursor import TypeNameResolver
from pgdatasource.utils.decorators import traced

logger = get_logger(__name__)


def _span_attributes(
    transaction: "ReadOnlyTransaction",
    statement: str,
    args: Optional[Sequence[Any]] = None,
) -> Dict[str, Any]:
    sanitized = (statement or "").strip()
    if len(sanitized) > 4096:
        sanitized = f"{sanitized[:4093]}..."
    return {
        "db.system": "postgresql",
        "db.name": transaction.database,
        "db.operation": "query",
        "db.statement": sanitized,
        "db.statement.args": len(args or ()),
    }


class ReadOnlyTransaction:
    """A transaction that is only ever rolled back.

    Instances are handed out by ``DBConnection.begin_transaction`` and are
    valid only inside that ``with`` block. Cursors returned by ``query``
    must be closed by the caller.

    Attributes:
        connection: SQLAlchemy connection holding the open transaction
        database: Name of the database the transaction is scoped to
    """

    def __init__(self, connection: Connection, database: str, type_resolver: TypeNameResolver):
        self.connection = connection
        self.database = database
        self._type_resolver = type_resolver

    @traced(
        span_name="pgdatasource.engine.query",
        attribute_getter=_span_attributes,
    )
    def query(self, statement: str, args: Optional[Sequence[Any]] = None) -> SQLAlchemyResultCursor:
        """Execute a statement with positional arguments.

        The statement is passed to the driver verbatim. Placeholders use the
        driver's positional paramstyle (``%s`` for psycopg2). Without
        arguments the driver receives no parameter collection at all, so a
        literal ``%`` in the statement needs no escaping.

        Args:
            statement: SQL text
            args: Positional parameter values

        Returns:
            Live cursor over the result; the caller must close it

        Raises:
            DataSourceError: QUERY_EXECUTION_ERROR if execution or type
                introspection fails. The ``phase`` detail tells the two
                apart; the driver result is closed before the error is raised.
        """
        start_time = time.time()
        payload = {"database": self.database, "arg_count": len(args or ())}

        try:
            if args:
                result = self.connection.exec_driver_sql(statement, tuple(args))
            else:
                result = self.connection.exec_driver_sql(
                    statement, execution_options={"no_parameters": True}
                )
        except Exception as exc:
            self._log_failure("Query failed", payload, start_time, exc)
            raise query_execution_error(statement, exc) from exc

        try:
            cursor = SQLAlchemyResultCursor(result, self._resolve_type_names(result))
        except Exception as exc:
            result.close()
            if isinstance(exc, DataSourceError):
                raise
            self._log_failure("Column type lookup failed", payload, start_time, exc)
            raise query_execution_error(statement, exc, phase="describe") from exc

        duration = time.time() - start_time
        logger.info(
            "Query executed",
            extra={**payload, "duration.seconds": f"{duration:.6f}"},
        )
        return cursor

    @staticmethod
    def _log_failure(message: str, payload: Dict[str, Any], start_time: float, exc: Exception) -> None:
        duration = time.time() - start_time
        logger.error(
            message,
            extra={**payload, "duration.seconds": f"{duration:.6f}", "error": str(exc)},
        )

    def _resolve_type_names(self, result: CursorResult) -> List[str]:
        if not result.returns_rows or result.cursor is None:
            return []
        description = result.cursor.description or ()
        type_codes = [column[1] for column in description]
        return self._type_resolver.resolve(self.connection, type_codes)
