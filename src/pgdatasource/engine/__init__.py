"""Execution engine: connection pools, transactions and cursors.

The engine opens a transaction on a connection to the target database,
executes statements with positional arguments and hands back live
cursors. Every transaction is rolled back when its scope exits; nothing
a read does is ever committed.
"""

from pgdatasource.engine.connection import DBConnection
from pgdatasource.engine.cursor import SQLAlchemyResultCursor
from pgdatasource.engine.transaction import ReadOnlyTransaction
from pgdatasource.engine.types import GenericTypeNameResolver, PgTypeNameResolver, resolver_for_dialect

__all__ = [
    "DBConnection",
    "ReadOnlyTransaction",
    "SQLAlchemyResultCursor",
    "PgTypeNameResolver",
    "GenericTypeNameResolver",
    "resolver_for_dialect",
]
