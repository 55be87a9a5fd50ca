"""Process-wide connection pool keyed by database name."""

import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from pgdatasource.common.exceptions import connection_error
from pgdatasource.engine.transaction import ReadOnlyTransaction
from pgdatasource.engine.types import resolver_for_dialect
from pgdatasource.logging import get_logger
from pgdatasource.protocols.cursor import TypeNameResolver
from pgdatasource.settings.postgres import PostgresSettings

logger = get_logger(__name__)


EngineFactory = Callable[[str], Engine]


class DBConnection:
    """SQLAlchemy connection pools for every database the provider reads.

    One engine (and therefore one pool) is created lazily per database name
    and reused by every read targeting that database. The engines are the
    only state shared between reads; each read opens and releases its own
    transaction.

    Example:
        >>> db = DBConnection(get_settings().postgres)
        >>> with db.begin_transaction("analytics") as txn:
        ...     with txn.query("SELECT 1 AS a") as cursor:
        ...         rows = list(cursor)
    """

    def __init__(
        self,
        settings: PostgresSettings,
        engine_factory: Optional[EngineFactory] = None,
        type_resolver: Optional[TypeNameResolver] = None,
    ):
        """Initialize the connection pool registry.

        Args:
            settings: PostgreSQL server and pool settings
            engine_factory: Optional callable creating the engine for a
                database name. Defaults to a pooled psycopg2 engine built
                from ``settings``.
            type_resolver: Optional type name resolver. Defaults to one
                matching each engine's dialect.
        """
        self.settings = settings
        self._engine_factory: EngineFactory = engine_factory or self._create_engine
        self._type_resolver = type_resolver
        self._engines: Dict[str, Engine] = {}
        self._lock = threading.Lock()

    def _create_engine(self, database: str) -> Engine:
        """Create a pooled engine for one database."""
        engine = create_engine(
            self.settings.url_for(database),
            poolclass=QueuePool,
            pool_pre_ping=True,  # Verify connections before use
            pool_size=self.settings.pool_size,
            max_overflow=self.settings.max_overflow,
            pool_timeout=self.settings.pool_timeout,
            connect_args=self.settings.connect_args(),
        )
        logger.info(
            "Created PostgreSQL engine",
            extra={"database": database, "host": self.settings.host, "port": self.settings.port},
        )
        return engine

    def resolve_database(self, database: Optional[str]) -> str:
        """Return the database name, falling back to the configured default."""
        return database or self.settings.database

    def engine_for(self, database: Optional[str]) -> Engine:
        """Get or create the engine for a database.

        Raises:
            DataSourceError: CONNECTION_ERROR if the engine cannot be created
        """
        name = self.resolve_database(database)
        with self._lock:
            engine = self._engines.get(name)
            if engine is None:
                try:
                    engine = self._engine_factory(name)
                except Exception as exc:
                    raise connection_error(
                        f"could not create engine for database {name!r}",
                        service="postgresql",
                        database=name,
                        cause=exc,
                    ) from exc
                self._engines[name] = engine
            return engine

    @contextmanager
    def begin_transaction(self, database: Optional[str]) -> Iterator[ReadOnlyTransaction]:
        """Open a transaction scoped to a database.

        The transaction is rolled back and the connection returned to the
        pool on every exit path, including errors raised inside the block.

        Args:
            database: Target database name; empty uses the default database

        Yields:
            ReadOnlyTransaction bound to the open connection

        Raises:
            DataSourceError: CONNECTION_ERROR if the connection or the
                transaction cannot be opened
        """
        name = self.resolve_database(database)
        engine = self.engine_for(name)

        try:
            connection = engine.connect()
        except Exception as exc:
            raise connection_error(
                f"could not start transaction: {exc}",
                service="postgresql",
                database=name,
                cause=exc,
            ) from exc

        try:
            transaction = connection.begin()
        except Exception as exc:
            connection.close()
            raise connection_error(
                f"could not start transaction: {exc}",
                service="postgresql",
                database=name,
                cause=exc,
            ) from exc

        resolver = self._type_resolver or resolver_for_dialect(engine.dialect.name)
        try:
            yield ReadOnlyTransaction(connection, name, resolver)
        finally:
            try:
                transaction.rollback()
            except Exception as exc:
                logger.error(
                    "could not rollback transaction",
                    extra={"database": name, "error": str(exc)},
                )
            connection.close()

    def dispose(self) -> None:
        """Close every pooled connection and forget the engines."""
        with self._lock:
            for engine in self._engines.values():
                engine.dispose()
            self._engines.clear()
