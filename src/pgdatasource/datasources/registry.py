"""Registry of the data sources the provider exposes.

Data sources are registered under their ``name`` and looked up by the same
string. The two built-in data sources are registered on import:

    - postgresql_query: arbitrary query, columns and stringified rows
    - postgresql_tables: filtered table enumeration

Registration is not thread-safe; lookups are safe for concurrent use after
initial setup.
"""

from typing import Dict, List, Type

from pgdatasource.common.exceptions import data_source_not_found_error, validation_error
from pgdatasource.datasources.base import DataSource
from pgdatasource.datasources.query import QueryDataSource
from pgdatasource.datasources.tables import TablesDataSource
from pgdatasource.logging import get_logger

logger = get_logger(__name__)


class _DataSourceRegistry:
    """Internal implementation detail. Do not use directly.

    Maps data source names to their implementation classes and hands out
    instances. Data sources hold no per-read state, so one instance per
    name is shared.

    Example:
        >>> registry = get_data_source_registry()
        >>> ds = registry.get("postgresql_query")
        >>> registry.available()
        ['postgresql_query', 'postgresql_tables']
    """

    _data_sources: Dict[str, Type[DataSource]] = {}
    _instances: Dict[str, DataSource] = {}

    @classmethod
    def register(cls, data_source: Type[DataSource]) -> Type[DataSource]:
        """Register a data source class under its ``name``.

        Usable as a class decorator.

        Raises:
            DataSourceError: VALIDATION_ERROR if the name is missing or taken
        """
        name = getattr(data_source, "name", "")
        if not name:
            raise validation_error("Data source classes must define a name", field="name")
        existing = cls._data_sources.get(name)
        if existing is not None and existing is not data_source:
            raise validation_error(f"Data source {name!r} is already registered", field="name", value=name)

        cls._data_sources[name] = data_source
        cls._instances.pop(name, None)
        logger.debug("Registered data source", extra={"data_source_name": name})
        return data_source

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a data source; unknown names are ignored."""
        cls._data_sources.pop(name, None)
        cls._instances.pop(name, None)

    @classmethod
    def get(cls, name: str) -> DataSource:
        """Get the data source registered under ``name``.

        Raises:
            DataSourceError: DATA_SOURCE_NOT_FOUND for unknown names
        """
        instance = cls._instances.get(name)
        if instance is not None:
            return instance

        data_source = cls._data_sources.get(name)
        if data_source is None:
            raise data_source_not_found_error(name, cls.available())
        instance = data_source()
        cls._instances[name] = instance
        return instance

    @classmethod
    def available(cls) -> List[str]:
        return sorted(cls._data_sources)


_DataSourceRegistry.register(QueryDataSource)
_DataSourceRegistry.register(TablesDataSource)


def get_data_source_registry() -> Type[_DataSourceRegistry]:
    """Get the data source registry class."""
    return _DataSourceRegistry


def get_data_source(name: str) -> DataSource:
    """Get a registered data source by name.

    Raises:
        DataSourceError: DATA_SOURCE_NOT_FOUND for unknown names
    """
    return _DataSourceRegistry.get(name)
