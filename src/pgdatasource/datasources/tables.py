"""``postgresql_tables`` data source."""

from pgdatasource.datasources.base import (
    Attribute,
    AttributeKind,
    DataSource,
    ResourceData,
    build_schema,
)
from pgdatasource.engine.connection import DBConnection
from pgdatasource.logging import get_logger
from pgdatasource.query_builder.tables import build_tables_query
from pgdatasource.results.materializer import materialize_tables
from pgdatasource.types.filters import TableFilters
from pgdatasource.types.results import TablesResult
from pgdatasource.utils.decorators import traced

logger = get_logger(__name__)


def read_tables(db: DBConnection, database: str, filters: TableFilters) -> TablesResult:
    """Enumerate the tables of a database matching the filters.

    System schemas are always excluded. Tables are ordered by schema name
    then table name.

    Raises:
        DataSourceError: CONNECTION_ERROR, QUERY_EXECUTION_ERROR or SCAN_ERROR
    """
    query = build_tables_query(filters)
    with db.begin_transaction(database) as txn:
        with txn.query(query) as cursor:
            return materialize_tables(cursor, database, query, filters)


def _pattern_list(name: str, description: str) -> Attribute:
    return Attribute(name=name, kind=AttributeKind.LIST, optional=True, description=description)


class TablesDataSource(DataSource):
    """List tables in a database, filtered by schema, type and name patterns."""

    name = "postgresql_tables"
    description = "Lists the tables of a PostgreSQL database from information_schema.tables."
    schema = build_schema(
        Attribute(
            name="database",
            required=True,
            force_new=True,
            description="The PostgreSQL database which will be queried for table names",
        ),
        _pattern_list(
            "schemas",
            "The PostgreSQL schema(s) which will be queried for table names. "
            "Queries all schemas in the database by default",
        ),
        _pattern_list(
            "table_types",
            "The PostgreSQL table types which will be queried for table names. "
            "Includes all table types by default. Use 'BASE TABLE' for normal tables only",
        ),
        _pattern_list(
            "like_any_patterns",
            "Expression(s) which will be pattern matched against table names "
            "in the query using the PostgreSQL LIKE ANY operator",
        ),
        _pattern_list(
            "like_all_patterns",
            "Expression(s) which will be pattern matched against table names "
            "in the query using the PostgreSQL LIKE ALL operator",
        ),
        _pattern_list(
            "not_like_all_patterns",
            "Expression(s) which will be pattern matched against table names "
            "in the query using the PostgreSQL NOT LIKE ALL operator",
        ),
        Attribute(
            name="regex_pattern",
            optional=True,
            description="Expression which will be pattern matched against table names "
                        "in the query using the PostgreSQL ~ (regular expression match) operator",
        ),
        Attribute(
            name="tables",
            kind=AttributeKind.LIST,
            computed=True,
            description="The list of PostgreSQL tables retrieved from information_schema.tables",
        ),
    )

    @traced(
        span_name="pgdatasource.datasource.tables.read",
        attribute_getter=lambda self, db, data: {
            "pgdatasource.data_source": self.name,
            "db.name": data.get("database"),
        },
    )
    def read(self, db: DBConnection, data: ResourceData) -> None:
        database: str = data.get("database")
        filters = TableFilters(
            schemas=data.get("schemas"),
            table_types=data.get("table_types"),
            like_any_patterns=data.get("like_any_patterns"),
            like_all_patterns=data.get("like_all_patterns"),
            not_like_all_patterns=data.get("not_like_all_patterns"),
            regex_pattern=data.get("regex_pattern"),
        )

        result = read_tables(db, database, filters)

        data.set("tables", [table.to_dict() for table in result.tables])
        data.set_id(result.id)

        logger.info(
            "Tables data source read",
            extra={"database": database, "tables": len(result.tables)},
        )
