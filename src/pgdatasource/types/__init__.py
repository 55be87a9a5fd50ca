"""Type definitions for pgdatasource."""

from .base import PGDSBaseModel
from .filters import TableFilters
from .results import ColumnDescriptor, QueryResult, TableDescriptor, TablesResult

__all__ = [
    'PGDSBaseModel',
    'TableFilters',
    'ColumnDescriptor',
    'TableDescriptor',
    'QueryResult',
    'TablesResult',
]
