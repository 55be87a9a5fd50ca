"""Cursor protocol definitions.

The result materializer only relies on these capabilities, so it can
describe and flatten any tabular result without knowing its schema ahead
of time. The SQLAlchemy-backed implementation lives in
``pgdatasource.engine.cursor``; tests use in-memory fakes.
"""

from typing import Any, Iterator, List, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ResultCursor(Protocol):
    """Protocol for a live result cursor.

    Iterating the cursor advances it and yields each row's values as a
    sequence positionally aligned with ``column_names()``. Errors raised
    while advancing or reading a row propagate to the caller.
    """

    def column_names(self) -> List[str]:
        """Column names in projection order."""
        ...

    def column_type_names(self) -> List[str]:
        """Driver-reported type names aligned with ``column_names()``."""
        ...

    def __iter__(self) -> Iterator[Sequence[Any]]:
        """Advance through the remaining rows."""
        ...

    def close(self) -> None:
        """Release the cursor. Safe to call more than once."""
        ...


@runtime_checkable
class TypeNameResolver(Protocol):
    """Protocol for resolving driver type codes into type names."""

    def resolve(self, connection: Any, type_codes: Sequence[Any]) -> List[str]:
        """Return one type name per type code, in the same order.

        Args:
            connection: Connection the statement was executed on
            type_codes: Type codes from the DB-API cursor description

        Returns:
            Type names; unknown codes resolve to an empty string
        """
        ...
