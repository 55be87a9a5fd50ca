"""Constants module for pgdatasource.

This module contains all constant values and enumerations used throughout
the package. As Layer 0 in the architecture, this module has no
dependencies on other pgdatasource modules.

Organization:
    - sql: SQL keywords, pattern operators and catalog names
"""

from pgdatasource.constants.sql import (
    ArrayKeyword,
    ConcatKeyword,
    PatternOperator,
    ID_SEPARATOR,
    SYSTEM_SCHEMAS,
    TABLES_CATALOG_VIEW,
    TABLE_NAME_COLUMN,
    TABLE_SCHEMA_COLUMN,
    TABLE_TYPE_COLUMN,
)

__all__ = [
    "ArrayKeyword",
    "ConcatKeyword",
    "PatternOperator",
    "ID_SEPARATOR",
    "SYSTEM_SCHEMAS",
    "TABLES_CATALOG_VIEW",
    "TABLE_NAME_COLUMN",
    "TABLE_SCHEMA_COLUMN",
    "TABLE_TYPE_COLUMN",
]
