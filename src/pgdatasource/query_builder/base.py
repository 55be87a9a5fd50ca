"""Literal and identifier helpers shared by the query builders.

Filter values are user input embedded directly into SQL text, so every
value goes through ``quote_string`` and every column reference through
``validate_identifier`` before it reaches a statement.
"""

import re
from typing import Iterable

from pgdatasource.constants.sql import ArrayKeyword


_IDENTIFIER_PATTERN = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)?$')


def quote_string(value: str) -> str:
    """Quote a string value for SQL.

    Args:
        value: String value to quote

    Returns:
        Properly quoted and escaped string
    """
    # Escape single quotes by doubling them
    escaped = str(value).replace("'", "''")
    return f"'{escaped}'"


def format_array_literal(values: Iterable[str], keyword: ArrayKeyword = ArrayKeyword.ANY) -> str:
    """Format values as a PostgreSQL array constructor.

    The keyword does not change the output; it documents whether the array
    is about to be compared with ANY or ALL at the call site.

    Example:
        >>> format_array_literal(["a%", "b_"])
        "array['a%','b_']"
    """
    return "array[{}]".format(",".join(quote_string(value) for value in values))


def validate_identifier(identifier: str, identifier_type: str = "column") -> str:
    """Validate a (optionally schema-qualified) column reference.

    Args:
        identifier: The identifier to validate
        identifier_type: Type of identifier for error messages

    Returns:
        The identifier unchanged

    Raises:
        ValueError: If identifier is invalid
    """
    if not identifier:
        raise ValueError(f"Empty {identifier_type} name")

    # Max identifier length in PostgreSQL is 63 bytes per part
    if len(identifier) > 127:
        raise ValueError(f"{identifier_type} name too long: {identifier}")

    if not _IDENTIFIER_PATTERN.match(identifier):
        raise ValueError(f"Invalid {identifier_type} name: {identifier}")

    return identifier
