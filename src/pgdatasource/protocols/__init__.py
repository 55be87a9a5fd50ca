"""Protocol definitions used across pgdatasource."""

from pgdatasource.protocols.cursor import ResultCursor, TypeNameResolver

__all__ = [
    "ResultCursor",
    "TypeNameResolver",
]
