"""User repository."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import sqlalchemy as sa
from sqlmodel import Session, select

from src.directory.core.query.filters import MatchAll, Predicate, compile_predicate
from src.directory.core.query.paging import PageRequest
from src.directory.core.query.sorting import SortSpec

from .entity import User
from .table import UserTable

# Largest value a 64-bit store integer can hold
MAX_STORE_INT = 2**63 - 1


class UserRepository:
    """Data-access layer for user records."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, row: UserTable) -> User:
        return User.model_validate(row, from_attributes=True)

    def _get_row(self, user_id: int) -> UserTable | None:
        if not 0 < user_id <= MAX_STORE_INT:
            return None
        return self._session.get(UserTable, user_id)

    def get(self, user_id: int) -> User | None:
        row = self._get_row(user_id)
        if row is None:
            return None
        return self._to_entity(row)

    def get_by_email(self, email: str, exclude_id: int | None = None) -> User | None:
        """Find a user by email, case-insensitively, optionally ignoring one id."""
        statement = select(UserTable).where(sa.func.lower(UserTable.email) == email.lower())
        if exclude_id is not None:
            statement = statement.where(UserTable.id != exclude_id)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return self._to_entity(row)

    def create(self, data: dict[str, Any], user_id: int | None = None) -> User:
        """Insert a row and flush so the store assigns ``id`` and ``created_at``.

        ``user_id`` is only passed when ids come from an application-side
        sequence.
        """
        row = UserTable(id=user_id, **data)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def update(self, user_id: int, changes: dict[str, Any]) -> User | None:
        row = self._get_row(user_id)
        if row is None:
            return None
        for field, value in changes.items():
            setattr(row, field, value)
        if changes:
            self._session.add(row)
            self._session.flush()
            self._session.refresh(row)
        return self._to_entity(row)

    def delete(self, user_id: int) -> bool:
        row = self._get_row(user_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def list(
        self,
        predicate: Predicate = MatchAll(),
        sort: SortSpec | None = None,
        page: PageRequest | None = None,
    ) -> list[User]:
        """Filtered, sorted and paged scan."""
        statement = select(UserTable).where(compile_predicate(predicate, UserTable))
        if sort is not None:
            statement = statement.order_by(sort.order_by(UserTable))
            if sort.column != "id":
                # stable paging across equal sort values
                statement = statement.order_by(UserTable.id.asc())
        else:
            statement = statement.order_by(UserTable.id.asc())
        if page is not None:
            if page.offset > MAX_STORE_INT:
                return []
            statement = statement.offset(page.offset).limit(min(page.limit, MAX_STORE_INT))
        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def count(self, predicate: Predicate = MatchAll()) -> int:
        """Number of records matching ``predicate``."""
        statement = (
            select(sa.func.count())
            .select_from(UserTable)
            .where(compile_predicate(predicate, UserTable))
        )
        return self._session.exec(statement).one()

    def count_by_gender(self) -> Sequence[tuple[str, int]]:
        """Grouped ``(gender, count)`` pairs over all records."""
        statement = select(UserTable.gender, sa.func.count(UserTable.id)).group_by(
            UserTable.gender
        )
        return self._session.exec(statement).all()

    def created_at_values(self) -> list[Any]:
        """Raw creation timestamps, oldest first.

        Values are not coerced to ``datetime`` so one malformed row cannot
        fail the whole read.
        """
        column = sa.type_coerce(UserTable.created_at, sa.String)
        statement = sa.select(column).order_by(UserTable.created_at.asc())
        return list(self._session.execute(statement).scalars().all())

    def email_values(self) -> list[str]:
        statement = select(UserTable.email)
        return list(self._session.exec(statement).all())
