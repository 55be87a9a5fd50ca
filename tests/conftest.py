"""Shared fixtures for pgdatasource tests."""

from contextlib import contextmanager
from typing import Any, List, Optional, Sequence
from unittest.mock import Mock

import pytest
from sqlalchemy import create_engine, text

from pgdatasource.engine.connection import DBConnection
from pgdatasource.engine.types import GenericTypeNameResolver
from pgdatasource.settings import PostgresSettings


class FakeCursor:
    """In-memory ResultCursor.

    ``fail_at`` makes iteration raise before yielding the row at that index.
    """

    def __init__(
        self,
        columns: Sequence[str],
        type_names: Sequence[str],
        rows: Sequence[Sequence[Any]],
        fail_at: Optional[int] = None,
    ):
        self._columns = list(columns)
        self._type_names = list(type_names)
        self._rows = [tuple(row) for row in rows]
        self._fail_at = fail_at
        self.closed = False

    def column_names(self) -> List[str]:
        return list(self._columns)

    def column_type_names(self) -> List[str]:
        return list(self._type_names)

    def __iter__(self):
        for index, row in enumerate(self._rows):
            if index == self._fail_at:
                raise RuntimeError("connection reset while reading row")
            yield row

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


@pytest.fixture
def fake_cursor_factory():
    return FakeCursor


@pytest.fixture
def mock_db():
    """DBConnection double whose transaction hands out a configurable cursor.

    Set ``mock_db.txn.query.return_value`` (or ``side_effect``) to drive reads.
    ``mock_db.opened`` records the database of every transaction opened.
    """
    db = Mock(spec=DBConnection)
    txn = Mock()
    db.txn = txn
    db.opened = []

    @contextmanager
    def begin_transaction(database):
        db.opened.append(database)
        yield txn

    db.begin_transaction.side_effect = begin_transaction
    return db


@pytest.fixture
def postgres_settings():
    return PostgresSettings(host="db.internal", port=6543, username="reader", database="postgres")


@pytest.fixture
def sqlite_engine():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE items (id INTEGER, name TEXT)"))
        conn.execute(text("INSERT INTO items VALUES (1, 'apple'), (2, 'pear')"))
    yield engine
    engine.dispose()


@pytest.fixture
def sqlite_db(postgres_settings, sqlite_engine):
    """DBConnection backed by one in-memory SQLite engine for every database name."""
    created = []

    def factory(database: str):
        created.append(database)
        return sqlite_engine

    db = DBConnection(
        postgres_settings,
        engine_factory=factory,
        type_resolver=GenericTypeNameResolver(),
    )
    db.created = created
    yield db
    db.dispose()
