"""Unit tests for sort resolution."""

import pytest
from sqlalchemy.dialects import sqlite

from src.directory.core.query.sorting import SORTABLE_COLUMNS, SortSpec, resolve_sort
from src.directory.entities.core.user import UserTable


class TestResolveSort:
    def test_defaults_to_insertion_order(self):
        assert resolve_sort() == SortSpec("id", "asc")

    @pytest.mark.parametrize("column", sorted(SORTABLE_COLUMNS))
    def test_allow_listed_columns(self, column):
        assert resolve_sort(column, "desc") == SortSpec(column, "desc")

    @pytest.mark.parametrize("column", ["password", "id; DROP TABLE users", "FIRST_NAME", "phone", ""])
    def test_other_columns_fall_back_to_id(self, column):
        assert resolve_sort(column, "asc").column == "id"

    @pytest.mark.parametrize("order", ["DESC", "Desc", "desc"])
    def test_direction_is_case_insensitive(self, order):
        assert resolve_sort("email", order).direction == "desc"

    @pytest.mark.parametrize("order", [None, "", "sideways", "descending"])
    def test_unknown_direction_falls_back_to_ascending(self, order):
        assert resolve_sort("email", order).direction == "asc"

    def test_unknown_column_keeps_direction(self):
        assert resolve_sort("nope", "desc") == SortSpec("id", "desc")


class TestOrderBy:
    def test_renders_direction(self):
        clause = resolve_sort("last_name", "desc").order_by(UserTable)

        sql = str(clause.compile(dialect=sqlite.dialect()))
        assert sql.endswith("last_name DESC")

    def test_ascending(self):
        clause = resolve_sort("email", "asc").order_by(UserTable)

        sql = str(clause.compile(dialect=sqlite.dialect()))
        assert sql.endswith("email ASC")
