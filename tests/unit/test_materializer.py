"""Tests for result materialization."""

import datetime
from decimal import Decimal

import pytest

from pgdatasource.common.exceptions import DataSourceError, ErrorCode
from pgdatasource.results import (
    materialize_columns,
    materialize_query,
    materialize_rows,
    materialize_tables,
    stringify_value,
)
from pgdatasource.types import TableFilters


class TestStringifyValue:
    """Test canonical string forms of driver values."""

    @pytest.mark.parametrize("value,expected", [
        (1, "1"),
        ("2", "2"),
        (1.5, "1.5"),
        (Decimal("10.20"), "10.20"),
        (True, "True"),
        (None, "None"),
        (datetime.date(2024, 1, 2), "2024-01-02"),
    ])
    def test_canonical_forms(self, value, expected):
        """Test the string form of each value type."""
        assert stringify_value(value) == expected

    def test_memoryview_is_read_as_bytes(self):
        """Test that memoryview values are formatted like bytes."""
        assert stringify_value(memoryview(b"ab")) == "b'ab'"

    def test_is_deterministic(self):
        """Test that stringifying is stable across calls."""
        value = {"k": [1, 2]}
        assert stringify_value(value) == stringify_value(value)


class TestMaterializeQuery:
    """Test query result materialization."""

    def test_select_literals(self, fake_cursor_factory):
        """Test columns and rows for a literal SELECT."""
        query = "SELECT 1 as a, '2' as b;"
        cursor = fake_cursor_factory(["a", "b"], ["INT4", "TEXT"], [(1, "2")])

        result = materialize_query(cursor, "test", query)

        assert [c.to_dict() for c in result.columns] == [
            {"name": "a", "type": "INT4"},
            {"name": "b", "type": "TEXT"},
        ]
        assert result.rows == [{"a": "1", "b": "2"}]
        assert result.id == "test_SELECT 1 as a, '2' as b;"

    def test_zero_rows_still_reports_columns(self, fake_cursor_factory):
        """Test that columns are reported when no rows come back."""
        cursor = fake_cursor_factory(["val"], ["TEXT"], [])

        result = materialize_query(cursor, "test", "SELECT val FROM test_empty")

        assert [c.to_dict() for c in result.columns] == [{"name": "val", "type": "TEXT"}]
        assert result.rows == []

    def test_column_and_row_order_preserved(self, fake_cursor_factory):
        """Test that column and row order are kept."""
        cursor = fake_cursor_factory(
            ["foo", "bar"],
            ["TEXT", "INT4"],
            [("x", 1), ("y", 2), ("z", 3)],
        )

        result = materialize_query(cursor, "db", "SELECT foo, bar FROM t")

        assert result.column_names == ["foo", "bar"]
        assert [row["foo"] for row in result.rows] == ["x", "y", "z"]
        assert all(list(row) == ["foo", "bar"] for row in result.rows)

    def test_no_columns(self, fake_cursor_factory):
        """Test statements that return no columns."""
        cursor = fake_cursor_factory([], [], [])

        result = materialize_query(cursor, "db", "SET search_path TO public")

        assert result.columns == []
        assert result.rows == []

    def test_missing_type_names_default_to_empty(self, fake_cursor_factory):
        """Test that missing type names become empty strings."""
        cursor = fake_cursor_factory(["a", "b"], ["INT4"], [])

        columns = materialize_columns(cursor)

        assert [c.type for c in columns] == ["INT4", ""]

    def test_scan_failure_discards_partial_rows(self, fake_cursor_factory):
        """Test that a scan failure raises SCAN_ERROR and keeps no rows."""
        cursor = fake_cursor_factory(["a"], ["INT4"], [(1,), (2,), (3,)], fail_at=2)

        with pytest.raises(DataSourceError) as exc_info:
            materialize_rows(cursor, "SELECT a FROM t")

        error = exc_info.value
        assert error.error_code == ErrorCode.SCAN_ERROR
        assert error.message.startswith("could not scan output for query")
        assert error.details["row_index"] == 2
        assert error.details["query"] == "SELECT a FROM t"

    def test_row_width_mismatch_is_scan_error(self, fake_cursor_factory):
        """Test that a short row is a SCAN_ERROR."""
        cursor = fake_cursor_factory(["a", "b"], ["INT4", "INT4"], [(1,)])

        with pytest.raises(DataSourceError) as exc_info:
            materialize_query(cursor, "db", "SELECT a, b FROM t")

        assert exc_info.value.error_code == ErrorCode.SCAN_ERROR

    def test_duplicate_column_names_last_value_wins(self, fake_cursor_factory):
        """Test that the last value wins for duplicate column names."""
        cursor = fake_cursor_factory(["a", "a"], ["INT4", "INT4"], [(1, 2)])

        result = materialize_query(cursor, "db", "SELECT 1 AS a, 2 AS a")

        assert len(result.columns) == 2
        assert result.rows == [{"a": "2"}]

    def test_to_dataframe(self, fake_cursor_factory):
        """Test conversion of a result to a pandas DataFrame."""
        cursor = fake_cursor_factory(["foo", "bar"], ["TEXT", "INT4"], [("x", 1), ("y", 2)])
        result = materialize_query(cursor, "db", "SELECT foo, bar FROM t")

        frame = result.to_dataframe()

        assert list(frame.columns) == ["foo", "bar"]
        assert frame["bar"].tolist() == ["1", "2"]

    def test_to_dataframe_without_rows_keeps_columns(self, fake_cursor_factory):
        """Test that an empty DataFrame keeps the column names."""
        cursor = fake_cursor_factory(["val"], ["TEXT"], [])

        frame = materialize_query(cursor, "db", "SELECT val FROM t").to_dataframe()

        assert list(frame.columns) == ["val"]
        assert frame.empty


class TestMaterializeTables:
    """Test table listing materialization."""

    def test_tables_in_cursor_order(self, fake_cursor_factory):
        """Test that tables are listed in cursor order."""
        cursor = fake_cursor_factory(
            ["table_schema", "table_name"],
            ["NAME", "NAME"],
            [("public", "accounts"), ("public", "orders"), ("sales", "leads")],
        )
        filters = TableFilters(schemas=["public", "sales"])

        result = materialize_tables(cursor, "db", "SELECT ...", filters)

        assert [t.to_dict() for t in result.tables] == [
            {"schema_name": "public", "table_name": "accounts"},
            {"schema_name": "public", "table_name": "orders"},
            {"schema_name": "sales", "table_name": "leads"},
        ]
        assert result.id.startswith("db_array['public','sales']")

    def test_wrong_row_width_is_scan_error(self, fake_cursor_factory):
        """Test that table rows must have two values."""
        cursor = fake_cursor_factory(["table_name"], ["NAME"], [("accounts",)])

        with pytest.raises(DataSourceError) as exc_info:
            materialize_tables(cursor, "db", "SELECT table_name", TableFilters())

        assert exc_info.value.error_code == ErrorCode.SCAN_ERROR
        assert exc_info.value.details["row_index"] == 0
