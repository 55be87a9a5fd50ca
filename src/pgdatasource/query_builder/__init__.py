"""Query builder module for SQL generation.

Query builders are responsible for composing SQL text but do NOT execute
queries; that is handled by the engine module.

Design Principles:
    1. **SQL Generation Only**: Builders only generate SQL strings
    2. **Escaped Literals**: Filter values are quoted before embedding
    3. **Deterministic**: Same inputs always produce the same statement
"""

from pgdatasource.query_builder.base import format_array_literal, quote_string, validate_identifier
from pgdatasource.query_builder.filters import PatternFilterBuilder
from pgdatasource.query_builder.tables import TABLES_BASE_QUERY, build_tables_query

__all__ = [
    "PatternFilterBuilder",
    "TABLES_BASE_QUERY",
    "build_tables_query",
    "format_array_literal",
    "quote_string",
    "validate_identifier",
]
