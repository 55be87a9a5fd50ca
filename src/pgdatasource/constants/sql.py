"""SQL keywords and catalog constants.

This module contains the fundamental SQL keywords used when composing
filter clauses, along with the catalog names the table enumeration
query is built from.

These constants are in Layer 0 as they have no dependencies on other
pgdatasource modules and can be used by any layer.
"""

from enum import Enum
from typing import Tuple


class ConcatKeyword(str, Enum):
    """Keyword used to attach a filter fragment to the query.

    The first fragment of a statement without a WHERE clause is attached
    with WHERE; every following fragment uses the conjunction.
    """

    WHERE = "WHERE"
    AND = "AND"


class ArrayKeyword(str, Enum):
    """Array comparison keyword for pattern operators.

    Values:
        ANY: Matches when at least one array element matches
        ALL: Matches when every array element matches
    """

    ANY = "ANY"
    ALL = "ALL"


class PatternOperator(str, Enum):
    """PostgreSQL pattern matching operators."""

    EQUALS = "="
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"
    REGEX = "~"


# Schemas that belong to the database engine and are never enumerated
SYSTEM_SCHEMAS: Tuple[str, ...] = ("pg_catalog", "information_schema")

TABLES_CATALOG_VIEW = "information_schema.tables"
TABLE_SCHEMA_COLUMN = "table_schema"
TABLE_NAME_COLUMN = "table_name"
TABLE_TYPE_COLUMN = "table_type"

# Separator used when concatenating data source identifiers
ID_SEPARATOR = "_"
