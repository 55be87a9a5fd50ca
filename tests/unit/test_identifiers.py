"""Tests for result identifiers."""

import pytest

from pgdatasource.results import generate_query_id, generate_tables_id
from pgdatasource.types import TableFilters


class TestQueryId:
    """Test postgresql_query instance ids."""

    def test_concatenates_database_and_query(self):
        """Test that the id joins database and query with an underscore."""
        assert generate_query_id("test", "SELECT 1") == "test_SELECT 1"

    def test_is_deterministic(self):
        """Test that equal inputs give equal ids."""
        assert generate_query_id("db", "SELECT 1") == generate_query_id("db", "SELECT 1")

    def test_changes_with_inputs(self):
        """Test that different inputs give different ids."""
        base = generate_query_id("db", "SELECT 1")

        assert generate_query_id("other", "SELECT 1") != base
        assert generate_query_id("db", "SELECT 2") != base


class TestTablesId:
    """Test postgresql_tables instance ids."""

    def test_empty_filters(self):
        """Test the id with every filter empty."""
        assert generate_tables_id("db", TableFilters()) == "db_array[]_array[]_array[]_array[]_array[]_"

    def test_all_filters(self):
        """Test the id with every filter set."""
        filters = TableFilters(
            schemas=["public"],
            table_types=["BASE TABLE"],
            like_any_patterns=["a%"],
            like_all_patterns=["%b"],
            not_like_all_patterns=["tmp%"],
            regex_pattern="^a",
        )

        assert generate_tables_id("db", filters) == (
            "db_array['public']_array['BASE TABLE']_array['a%']_array['%b']_array['tmp%']_^a"
        )

    def test_is_deterministic(self):
        """Test that equal inputs give equal ids."""
        filters = TableFilters(schemas=["public"], regex_pattern="x")

        assert generate_tables_id("db", filters) == generate_tables_id("db", filters.model_copy())

    @pytest.mark.parametrize("field,value", [
        ("schemas", ["sales"]),
        ("table_types", ["VIEW"]),
        ("like_any_patterns", ["a%"]),
        ("like_all_patterns", ["a%"]),
        ("not_like_all_patterns", ["a%"]),
        ("regex_pattern", "^a"),
    ])
    def test_changes_with_each_filter(self, field, value):
        """Test that each filter changes the id."""
        base = generate_tables_id("db", TableFilters())

        assert generate_tables_id("db", TableFilters(**{field: value})) != base

    def test_same_values_in_different_filters_differ(self):
        """Test that equal values in different filters give different ids."""
        like_any = TableFilters(like_any_patterns=["a%"])
        like_all = TableFilters(like_all_patterns=["a%"])

        assert generate_tables_id("db", like_any) != generate_tables_id("db", like_all)

    def test_changes_with_database(self):
        """Test that the database changes the id."""
        assert generate_tables_id("a", TableFilters()) != generate_tables_id("b", TableFilters())
