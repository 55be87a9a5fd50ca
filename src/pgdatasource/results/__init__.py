"""Result materialization and identifiers."""

from pgdatasource.results.identifiers import generate_query_id, generate_tables_id
from pgdatasource.results.materializer import (
    materialize_columns,
    materialize_query,
    materialize_rows,
    materialize_tables,
    stringify_value,
)

__all__ = [
    "generate_query_id",
    "generate_tables_id",
    "materialize_columns",
    "materialize_query",
    "materialize_rows",
    "materialize_tables",
    "stringify_value",
]
