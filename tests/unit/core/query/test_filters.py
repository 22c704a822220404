"""Unit tests for list filter construction."""

import pytest
from sqlalchemy.dialects import sqlite

from src.directory.core.query.filters import (
    SEARCH_FIELDS,
    And,
    Contains,
    Equals,
    MatchAll,
    Or,
    build_filter,
    compile_predicate,
)
from src.directory.entities.core.user import UserTable


def _record(**overrides):
    record = {
        "first_name": "Alice",
        "last_name": "Walker",
        "email": "alice@example.com",
        "gender": "FEMALE",
        "phone": "555-123-4567",
    }
    record.update(overrides)
    return record


class TestBuildFilter:
    """Raw query parameters to predicate."""

    def test_no_parameters_matches_everything(self):
        assert build_filter() == MatchAll()
        assert build_filter(None, None) == MatchAll()

    @pytest.mark.parametrize("gender", ["male", "MALE", "Male"])
    def test_gender_is_case_insensitive(self, gender):
        assert build_filter(gender=gender) == Equals("gender", "MALE")

    @pytest.mark.parametrize("gender", ["mal", "unknown", "", "  "])
    def test_unknown_gender_is_ignored(self, gender):
        assert build_filter(gender=gender) == MatchAll()

    def test_blank_search_is_ignored(self):
        assert build_filter(search="   ") == MatchAll()

    def test_search_covers_all_fields(self):
        predicate = build_filter(search="ali")

        assert isinstance(predicate, Or)
        assert {operand.field for operand in predicate.operands} == set(SEARCH_FIELDS)
        assert all(operand.term == "ali" for operand in predicate.operands)

    def test_search_is_trimmed_and_stripped_of_markup(self):
        predicate = build_filter(search="  <b>ali</b>  ")

        assert all(operand.term == "bali/b" for operand in predicate.operands)

    def test_search_of_only_markup_is_ignored(self):
        assert build_filter(search="<>") == MatchAll()

    def test_gender_and_search_are_conjoined(self):
        predicate = build_filter(gender="female", search="ali")

        assert isinstance(predicate, And)
        gender_clause, search_clause = predicate.operands
        assert gender_clause == Equals("gender", "FEMALE")
        assert isinstance(search_clause, Or)

    def test_unknown_gender_with_search_keeps_search_only(self):
        predicate = build_filter(gender="robot", search="ali")

        assert isinstance(predicate, Or)


class TestPredicateMatching:
    """In-memory evaluation of predicates."""

    def test_contains_is_case_insensitive(self):
        assert Contains("email", "EXAMPLE").matches(_record())
        assert not Contains("email", "other").matches(_record())

    def test_conjunction_requires_both(self):
        predicate = build_filter(gender="male", search="alice")

        assert not predicate.matches(_record())
        assert predicate.matches(_record(gender="MALE"))

    def test_search_matches_phone_fragment(self):
        assert build_filter(search="123-45").matches(_record())

    def test_matches_attribute_objects(self):
        row = UserTable(**_record())

        assert build_filter(gender="female", search="walk").matches(row)


class TestCompilePredicate:
    """Translation into SQLAlchemy clauses."""

    def _sql(self, predicate):
        clause = compile_predicate(predicate, UserTable)
        return clause.compile(dialect=sqlite.dialect())

    def test_match_all_compiles_to_true(self):
        assert str(self._sql(MatchAll())).lower() in {"1", "true"}

    def test_values_are_bound_parameters(self):
        compiled = self._sql(build_filter(gender="male", search="x'; DROP TABLE users;--"))

        sql = str(compiled)
        assert "DROP TABLE" not in sql
        assert "x'; DROP TABLE users;--" in compiled.params.values()
        assert "MALE" in compiled.params.values()

    def test_conjunction_of_gender_and_disjunction(self):
        sql = str(self._sql(build_filter(gender="male", search="ann")))

        assert " AND " in sql
        assert sql.count(" OR ") == len(SEARCH_FIELDS) - 1

    def test_like_wildcards_are_escaped(self):
        compiled = self._sql(Contains("email", "50%_off"))

        assert "ESCAPE" in str(compiled)
        assert "50/%/_off" in compiled.params.values()
