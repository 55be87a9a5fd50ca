from .datasources import get_connection, read_data_source, reset_connection
from pgdatasource.datasources.query import read_query
from pgdatasource.datasources.tables import read_tables

__all__ = [
    "read_data_source",
    "read_query",
    "read_tables",
    "get_connection",
    "reset_connection",
]
