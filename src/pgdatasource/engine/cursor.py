"""SQLAlchemy-backed result cursor."""

from typing import Any, Iterator, List, Sequence

from sqlalchemy.engine import CursorResult


class SQLAlchemyResultCursor:
    """Adapt a ``CursorResult`` to the ``ResultCursor`` protocol.

    Statements that return no rows (``SET``, DDL, ...) report no columns
    and iterate nothing.
    """

    def __init__(self, result: CursorResult, type_names: Sequence[str]):
        self._result = result
        self._returns_rows = bool(result.returns_rows)
        self._columns: List[str] = list(result.keys()) if self._returns_rows else []
        self._type_names = list(type_names)

    def column_names(self) -> List[str]:
        return list(self._columns)

    def column_type_names(self) -> List[str]:
        return list(self._type_names)

    def __iter__(self) -> Iterator[Sequence[Any]]:
        if not self._returns_rows:
            return iter(())
        return (tuple(row) for row in self._result)

    def close(self) -> None:
        self._result.close()

    def __enter__(self) -> "SQLAlchemyResultCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
