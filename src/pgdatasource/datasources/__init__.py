"""Read-only PostgreSQL data sources.

Each data source declares an attribute schema and a ``read`` operation
that fills its computed attributes from the database:

    - postgresql_query: run a query, expose ``columns`` and ``rows``
    - postgresql_tables: enumerate tables, expose ``tables``
"""

from pgdatasource.datasources.base import (
    Attribute,
    AttributeKind,
    DataSource,
    ResourceData,
    build_schema,
)
from pgdatasource.datasources.query import QueryDataSource, read_query
from pgdatasource.datasources.registry import get_data_source, get_data_source_registry
from pgdatasource.datasources.tables import TablesDataSource, read_tables

__all__ = [
    "Attribute",
    "AttributeKind",
    "DataSource",
    "ResourceData",
    "build_schema",
    "QueryDataSource",
    "TablesDataSource",
    "read_query",
    "read_tables",
    "get_data_source",
    "get_data_source_registry",
]
