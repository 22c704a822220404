"""Filter construction for user list queries.

Raw ``gender`` and ``search`` query parameters are turned into a small
predicate algebra, which is then compiled into a SQLAlchemy clause. Values
only ever reach the database as bound parameters.

Recognized parameters:

========  ==========================================  ==========================
param     accepted values                             effect
========  ==========================================  ==========================
gender    male / female / other (any case)            ``gender = G``
gender    anything else, blank, missing               ignored
search    non-blank text (``<``/``>`` stripped)       case-insensitive substring
                                                      on first_name, last_name,
                                                      email or phone
search    blank, missing                              ignored
========  ==========================================  ==========================

With both present the result is ``gender = G AND (search clause)``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

import sqlalchemy as sa
from sqlalchemy.sql.elements import ColumnElement

from src.directory.core.security import sanitize_input
from src.directory.core.types import Gender

SEARCH_FIELDS: tuple[str, ...] = ("first_name", "last_name", "email", "phone")


def _field_value(record: Any, field: str) -> Any:
    if isinstance(record, dict):
        value = record.get(field)
    else:
        value = getattr(record, field, None)
    # Enum members compare by their stored value
    return getattr(value, "value", value)


@dataclass(frozen=True)
class MatchAll:
    """Matches every record."""

    def matches(self, record: Any) -> bool:
        return True


@dataclass(frozen=True)
class Equals:
    """Exact equality on one field."""

    field: str
    value: str

    def matches(self, record: Any) -> bool:
        return _field_value(record, self.field) == self.value


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match on one field."""

    field: str
    term: str

    def matches(self, record: Any) -> bool:
        value = _field_value(record, self.field)
        return value is not None and self.term.lower() in str(value).lower()


@dataclass(frozen=True)
class And:
    operands: tuple[Predicate, ...]

    def matches(self, record: Any) -> bool:
        return all(operand.matches(record) for operand in self.operands)


@dataclass(frozen=True)
class Or:
    operands: tuple[Predicate, ...]

    def matches(self, record: Any) -> bool:
        return any(operand.matches(record) for operand in self.operands)


Predicate = Union[MatchAll, Equals, Contains, And, Or]


def resolve_gender_filter(gender: str | None) -> Gender | None:
    """Recognized gender filter value, or ``None`` when absent or unknown."""
    return Gender.parse(gender)


def resolve_search_term(search: str | None) -> str | None:
    """Sanitized search term, or ``None`` when absent or blank."""
    if search is None or not search.strip():
        return None
    term = sanitize_input(search)
    return term or None


def search_predicate(term: str, fields: Sequence[str] = SEARCH_FIELDS) -> Or:
    return Or(tuple(Contains(field, term) for field in fields))


def build_filter(gender: str | None = None, search: str | None = None) -> Predicate:
    """Build the list predicate for the given raw query parameters."""
    gender_value = resolve_gender_filter(gender)
    term = resolve_search_term(search)

    clauses: list[Predicate] = []
    if gender_value is not None:
        clauses.append(Equals("gender", gender_value.value))
    if term is not None:
        clauses.append(search_predicate(term))

    if not clauses:
        return MatchAll()
    if len(clauses) == 1:
        return clauses[0]
    return And(tuple(clauses))


def compile_predicate(predicate: Predicate, table: type) -> ColumnElement[bool]:
    """Translate a predicate into a SQLAlchemy boolean clause over ``table``."""
    if isinstance(predicate, MatchAll):
        return sa.true()
    if isinstance(predicate, Equals):
        return getattr(table, predicate.field) == predicate.value
    if isinstance(predicate, Contains):
        column = getattr(table, predicate.field)
        return column.icontains(predicate.term, autoescape=True)
    if isinstance(predicate, And):
        return sa.and_(*(compile_predicate(p, table) for p in predicate.operands))
    if isinstance(predicate, Or):
        return sa.or_(*(compile_predicate(p, table) for p in predicate.operands))
    raise TypeError(f"Unsupported predicate: {predicate!r}")
