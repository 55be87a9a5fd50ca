"""``postgresql_query`` data source."""

from typing import Any, Dict, List, Optional, Sequence

from pgdatasource.datasources.base import (
    Attribute,
    AttributeKind,
    DataSource,
    ResourceData,
    build_schema,
)
from pgdatasource.engine.connection import DBConnection
from pgdatasource.logging import get_logger
from pgdatasource.results.materializer import materialize_query
from pgdatasource.types.results import QueryResult
from pgdatasource.utils.decorators import traced

logger = get_logger(__name__)


def read_query(
    db: DBConnection,
    database: str,
    query: str,
    args: Optional[Sequence[Any]] = None,
) -> QueryResult:
    """Run a query in a rolled-back transaction and materialize its result.

    Args:
        db: Connection pool registry
        database: Target database name
        query: Statement text, passed to the driver verbatim
        args: Positional values for the statement placeholders

    Returns:
        Columns, stringified rows and the read identifier

    Raises:
        DataSourceError: CONNECTION_ERROR, QUERY_EXECUTION_ERROR or SCAN_ERROR
    """
    with db.begin_transaction(database) as txn:
        with txn.query(query, args) as cursor:
            return materialize_query(cursor, database, query)


class QueryDataSource(DataSource):
    """Execute an arbitrary query and expose its columns and rows."""

    name = "postgresql_query"
    description = "Runs a query against a PostgreSQL database and returns its columns and rows."
    schema = build_schema(
        Attribute(
            name="database",
            required=True,
            force_new=True,
            description="The PostgreSQL database which will be queried",
        ),
        Attribute(
            name="query",
            required=True,
            description="The PostgreSQL query",
        ),
        Attribute(
            name="args",
            kind=AttributeKind.LIST,
            optional=True,
            string_elements=False,
            description="The values to fill in for any positional placeholders",
        ),
        Attribute(
            name="columns",
            kind=AttributeKind.LIST,
            computed=True,
            description="The columns returned by the query, as name and type pairs",
        ),
        Attribute(
            name="rows",
            kind=AttributeKind.LIST,
            computed=True,
            description="The rows returned by the query, as column name to string maps",
        ),
    )

    @traced(
        span_name="pgdatasource.datasource.query.read",
        attribute_getter=lambda self, db, data: {
            "pgdatasource.data_source": self.name,
            "db.name": data.get("database"),
        },
    )
    def read(self, db: DBConnection, data: ResourceData) -> None:
        database: str = data.get("database")
        query: str = data.get("query")
        args = data.get("args")

        result = read_query(db, database, query, args)

        columns: List[Dict[str, str]] = [column.to_dict() for column in result.columns]
        data.set("columns", columns)
        data.set("rows", result.rows)
        data.set_id(result.id)

        logger.info(
            "Query data source read",
            extra={"database": database, "columns": len(columns), "rows": len(result.rows)},
        )
