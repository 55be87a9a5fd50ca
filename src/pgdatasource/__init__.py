from pgdatasource.__version__ import __version__

from pgdatasource.common.exceptions import DataSourceError, ErrorCode
from pgdatasource.logging import setup_logging
from pgdatasource.settings import get_settings

from pgdatasource.engine import DBConnection
from pgdatasource.query_builder import PatternFilterBuilder, build_tables_query
from pgdatasource.types import (
    ColumnDescriptor,
    QueryResult,
    TableDescriptor,
    TableFilters,
    TablesResult,
)
from pgdatasource.datasources import (
    DataSource,
    QueryDataSource,
    ResourceData,
    TablesDataSource,
    get_data_source,
)

from pgdatasource.api import read_data_source, read_query, read_tables


__all__ = [
    "__version__",

    # Exceptions (public API)
    "DataSourceError",
    "ErrorCode",

    "setup_logging",
    "get_settings",

    "DBConnection",
    "PatternFilterBuilder",
    "build_tables_query",

    "ColumnDescriptor",
    "QueryResult",
    "TableDescriptor",
    "TableFilters",
    "TablesResult",

    "DataSource",
    "QueryDataSource",
    "TablesDataSource",
    "ResourceData",
    "get_data_source",

    "read_data_source",
    "read_query",
    "read_tables",
]
