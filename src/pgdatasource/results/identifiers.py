"""Identifiers for fetched data source results.

An identifier is the plain concatenation of the parameters that define a
read, joined with ``_``. Identical parameters always give the identical
identifier. Values are not escaped, so two different parameter sets whose
concatenations coincide (a value containing the separator, for instance)
share an identifier.
"""

from pgdatasource.constants.sql import ArrayKeyword, ID_SEPARATOR
from pgdatasource.query_builder.base import format_array_literal
from pgdatasource.types.filters import TableFilters


def generate_query_id(database: str, query: str) -> str:
    """Identifier of a free-form query read: database and query text."""
    return database + ID_SEPARATOR + query


def generate_tables_id(database: str, filters: TableFilters) -> str:
    """Identifier of a table enumeration read.

    Parts, in order: database, schemas, table types, LIKE ANY, LIKE ALL and
    NOT LIKE ALL patterns (each rendered as an array literal), regex.
    """
    return ID_SEPARATOR.join([
        database,
        format_array_literal(filters.schemas, ArrayKeyword.ANY),
        format_array_literal(filters.table_types, ArrayKeyword.ANY),
        format_array_literal(filters.like_any_patterns, ArrayKeyword.ANY),
        format_array_literal(filters.like_all_patterns, ArrayKeyword.ALL),
        format_array_literal(filters.not_like_all_patterns, ArrayKeyword.ALL),
        filters.regex_pattern,
    ])
