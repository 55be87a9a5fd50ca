"""Table enumeration query composer."""

from pgdatasource.constants.sql import (
    SYSTEM_SCHEMAS,
    TABLES_CATALOG_VIEW,
    TABLE_NAME_COLUMN,
    TABLE_SCHEMA_COLUMN,
    TABLE_TYPE_COLUMN,
)
from pgdatasource.query_builder.base import quote_string
from pgdatasource.query_builder.filters import PatternFilterBuilder
from pgdatasource.types.filters import TableFilters


TABLES_BASE_QUERY = (
    f"SELECT {TABLE_SCHEMA_COLUMN}, {TABLE_NAME_COLUMN} "
    f"FROM {TABLES_CATALOG_VIEW} "
    f"WHERE {TABLE_SCHEMA_COLUMN} NOT IN ({', '.join(quote_string(s) for s in SYSTEM_SCHEMAS)})"
)

TABLES_ORDER_BY = f"ORDER BY {TABLE_SCHEMA_COLUMN}, {TABLE_NAME_COLUMN}"


def build_tables_query(filters: TableFilters) -> str:
    """Compose the table enumeration statement.

    Filters are applied in a fixed order: schemas, table types, then the
    LIKE ANY, LIKE ALL, NOT LIKE ALL and regex patterns on the table name.
    The base statement already excludes system schemas with its own WHERE,
    so every filter is joined with AND. Results are ordered by schema then
    table name so repeated reads iterate identically.

    Args:
        filters: Optional filter inputs

    Returns:
        The complete SELECT statement
    """
    builder = PatternFilterBuilder(has_preceding_clause=True)

    builder.equals_any(TABLE_SCHEMA_COLUMN, filters.schemas)
    builder.equals_any(TABLE_TYPE_COLUMN, filters.table_types)
    builder.like_any(TABLE_NAME_COLUMN, filters.like_any_patterns)
    builder.like_all(TABLE_NAME_COLUMN, filters.like_all_patterns)
    builder.not_like_all(TABLE_NAME_COLUMN, filters.not_like_all_patterns)
    builder.regex(TABLE_NAME_COLUMN, filters.regex_pattern)

    return f"{builder.apply(TABLES_BASE_QUERY)} {TABLES_ORDER_BY}"
