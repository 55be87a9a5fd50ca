"""Materialized result types.

These models are the structured output of a data source read. They are
built fresh for every read and hold plain strings only, so they can be
stored as computed attributes without further conversion.
"""

from typing import Dict, List

import pandas as pd
from pydantic import Field

from pgdatasource.types.base import PGDSBaseModel


class ColumnDescriptor(PGDSBaseModel):
    """One projected column of a result.

    Attributes:
        name: Column name as reported by the cursor
        type: Driver-reported type name (e.g. ``INT4``, ``TEXT``)
    """
    name: str
    type: str = Field(default="")


class TableDescriptor(PGDSBaseModel):
    """One table returned by the table enumeration query."""
    schema_name: str
    table_name: str


class QueryResult(PGDSBaseModel):
    """Columns and rows produced by an arbitrary query.

    Attributes:
        columns: Column descriptors in projection order
        rows: One mapping per row, column name to stringified value
        id: Identifier derived from the database and query text
    """
    columns: List[ColumnDescriptor] = Field(default_factory=list)
    rows: List[Dict[str, str]] = Field(default_factory=list)
    id: str = Field(default="")

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the rows to a DataFrame with columns in projection order.

        Values stay strings; zero rows give an empty frame that still
        carries the column labels.
        """
        names = list(dict.fromkeys(self.column_names))
        return pd.DataFrame.from_records(self.rows, columns=names)


class TablesResult(PGDSBaseModel):
    """Tables produced by the table enumeration query."""
    tables: List[TableDescriptor] = Field(default_factory=list)
    id: str = Field(default="")
