"""Result materialization.

Turns a live cursor into plain, ordered data: column descriptors in
projection order and one ``{column: string}`` mapping per row in cursor
order. Every value goes through the same ``stringify_value`` function,
whatever its type, so numbers, text, timestamps, booleans and NULL all
come out as their ``str()`` form. Native typing is not preserved.
"""

from typing import Any, Dict, List, Sequence

from pgdatasource.common.exceptions import DataSourceError, scan_error
from pgdatasource.logging import get_logger
from pgdatasource.protocols.cursor import ResultCursor
from pgdatasource.results.identifiers import generate_query_id, generate_tables_id
from pgdatasource.types.filters import TableFilters
from pgdatasource.types.results import ColumnDescriptor, QueryResult, TableDescriptor, TablesResult

logger = get_logger(__name__)


def stringify_value(value: Any) -> str:
    """Canonical string form of a fetched value.

    Buffer objects (psycopg2 returns ``bytea`` as ``memoryview``) are read
    into ``bytes`` first; their own ``str()`` embeds a memory address.
    """
    if isinstance(value, memoryview):
        value = value.tobytes()
    return str(value)


def materialize_columns(cursor: ResultCursor) -> List[ColumnDescriptor]:
    """Pair column names with type names, in projection order."""
    names = cursor.column_names()
    type_names = cursor.column_type_names()
    return [
        ColumnDescriptor(name=name, type=type_names[i] if i < len(type_names) else "")
        for i, name in enumerate(names)
    ]


def _scan_row(names: Sequence[str], values: Sequence[Any]) -> Dict[str, str]:
    if len(values) != len(names):
        raise ValueError(f"expected {len(names)} values, got {len(values)}")
    return {name: stringify_value(value) for name, value in zip(names, values)}


def materialize_rows(cursor: ResultCursor, query: str) -> List[Dict[str, str]]:
    """Walk the cursor and stringify every row.

    Args:
        cursor: Live cursor positioned before the first row
        query: Statement that produced the cursor, for error context

    Returns:
        Rows in cursor order

    Raises:
        DataSourceError: SCAN_ERROR on the first row that cannot be read;
            rows read before it are discarded
    """
    names = cursor.column_names()
    rows: List[Dict[str, str]] = []
    try:
        for values in cursor:
            rows.append(_scan_row(names, values))
    except DataSourceError:
        raise
    except Exception as exc:
        raise scan_error(query, exc, row_index=len(rows)) from exc
    return rows


def materialize_query(cursor: ResultCursor, database: str, query: str) -> QueryResult:
    """Build the complete result of a free-form query read."""
    columns = materialize_columns(cursor)
    rows = materialize_rows(cursor, query)
    logger.debug("Materialized query result", extra={"columns": len(columns), "rows": len(rows)})
    return QueryResult(
        columns=columns,
        rows=rows,
        id=generate_query_id(database, query),
    )


def materialize_tables(
    cursor: ResultCursor,
    database: str,
    query: str,
    filters: TableFilters,
) -> TablesResult:
    """Build the result of a table enumeration read.

    The cursor must project schema name then table name.
    """
    tables: List[TableDescriptor] = []
    try:
        for values in cursor:
            if len(values) != 2:
                raise ValueError(f"expected 2 values, got {len(values)}")
            schema_name, table_name = values
            tables.append(TableDescriptor(schema_name=str(schema_name), table_name=str(table_name)))
    except DataSourceError:
        raise
    except Exception as exc:
        raise scan_error(query, exc, row_index=len(tables)) from exc

    return TablesResult(tables=tables, id=generate_tables_id(database, filters))
