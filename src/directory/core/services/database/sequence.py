"""Identity sequence maintenance for the user table.

Rows inserted with explicit ids (backfills, migrations, restores) do not
advance the identity generator. The next ordinary insert then collides with
an existing id. ``SequenceGuardian`` repairs that drift in two places: once
at startup, and reactively when an insert fails on the identity column.
Repairs only ever move the generator forward.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeVar

import sqlalchemy as sa
from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from src.directory.core.errors import SequenceRepairError
from src.directory.entities.core.identity_sequence import IdentitySequenceTable
from src.directory.entities.core.user import UserTable
from src.directory.runtime.config.config_data import DatabaseConfig

T = TypeVar("T")

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)")


def violated_columns(exc: IntegrityError, table_name: str) -> set[str]:
    """Columns of ``table_name`` named by a unique-constraint violation.

    Understands PostgreSQL constraint names (``<table>_pkey``,
    ``<table>_<col>_key``, ``ix_<table>_<col>``) and SQLite messages
    (``UNIQUE constraint failed: <table>.<col>``).
    """
    orig = exc.orig
    diag = getattr(orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint is None:
        match = re.search(r'unique constraint "(?P<name>[^"]+)"', str(orig))
        if match:
            constraint = match.group("name")

    if constraint:
        if constraint == f"{table_name}_pkey":
            return {"id"}
        for prefix, suffix in ((f"ix_{table_name}_", ""), (f"{table_name}_", "_key")):
            if constraint.startswith(prefix) and constraint.endswith(suffix):
                return {constraint[len(prefix):len(constraint) - len(suffix)]}
        return set()

    match = _SQLITE_UNIQUE.search(str(orig))
    if not match:
        return set()
    columns = set()
    for qualified in match.group("columns").split(","):
        table, _, column = qualified.strip().partition(".")
        if table == table_name and column:
            columns.add(column)
    return columns


def is_identity_conflict(exc: IntegrityError, table_name: str) -> bool:
    return "id" in violated_columns(exc, table_name)


class IdentitySequence(ABC):
    """Store-side generator of user ids."""

    def __init__(self, table_name: str = UserTable.__tablename__):
        self.table_name = table_name

    @abstractmethod
    def allocate(self, session: Session) -> int | None:
        """Reserve an id for an insert, or ``None`` if the store assigns it."""

    @abstractmethod
    def peek(self, session: Session) -> int:
        """The id the next insert will receive."""

    @abstractmethod
    def advance_to(self, session: Session, next_value: int) -> int:
        """Move the generator forward to at least ``next_value``.

        Never moves it backward. Returns the resulting next value.
        """


class TableIdentitySequence(IdentitySequence):
    """Ids handed out from the ``identity_sequence`` table.

    Used for stores without native sequences (SQLite). Allocation is a single
    conditional UPDATE, so concurrent inserts never receive the same id.
    """

    def _ensure(self, session: Session) -> None:
        exists = session.get(IdentitySequenceTable, self.table_name)
        if exists is None:
            session.add(IdentitySequenceTable(name=self.table_name, next_value=1))
            session.flush()

    def allocate(self, session: Session) -> int:
        self._ensure(session)
        session.execute(
            sa.update(IdentitySequenceTable)
            .where(IdentitySequenceTable.name == self.table_name)
            .values(next_value=IdentitySequenceTable.next_value + 1)
        )
        return self.peek(session) - 1

    def peek(self, session: Session) -> int:
        self._ensure(session)
        statement = sa.select(IdentitySequenceTable.next_value).where(
            IdentitySequenceTable.name == self.table_name
        )
        return session.execute(statement).scalar_one()

    def advance_to(self, session: Session, next_value: int) -> int:
        self._ensure(session)
        session.execute(
            sa.update(IdentitySequenceTable)
            .where(IdentitySequenceTable.name == self.table_name)
            .where(IdentitySequenceTable.next_value < next_value)
            .values(next_value=next_value)
        )
        return self.peek(session)


class PostgresIdentitySequence(IdentitySequence):
    """The serial sequence PostgreSQL attaches to ``<table>.id``."""

    def _sequence_name(self, session: Session) -> str:
        name = session.execute(
            sa.text("SELECT pg_get_serial_sequence(:table_name, 'id')"),
            {"table_name": self.table_name},
        ).scalar_one_or_none()
        if name is None:
            raise RuntimeError(f"No serial sequence found for {self.table_name}.id")
        return name

    def _next_value_sql(self, sequence_name: str) -> str:
        # The name comes from pg_get_serial_sequence and is already quoted.
        return (
            "SELECT CASE WHEN is_called THEN last_value + 1 ELSE last_value END "
            f"FROM {sequence_name}"
        )

    def allocate(self, session: Session) -> None:
        return None

    def peek(self, session: Session) -> int:
        sequence_name = self._sequence_name(session)
        return session.execute(sa.text(self._next_value_sql(sequence_name))).scalar_one()

    def advance_to(self, session: Session, next_value: int) -> int:
        sequence_name = self._sequence_name(session)
        statement = sa.text(
            "SELECT setval(CAST(:sequence_name AS regclass), "
            f"GREATEST(:next_value, ({self._next_value_sql(sequence_name)})), false)"
        )
        return session.execute(
            statement, {"sequence_name": sequence_name, "next_value": next_value}
        ).scalar_one()


def build_identity_sequence(
    db_config: DatabaseConfig, engine: Engine | None = None
) -> IdentitySequence:
    """Pick the sequence implementation for the configured strategy."""
    dialect = engine.dialect.name if engine is not None else db_config.dialect
    strategy = db_config.identity_strategy
    if strategy == "auto":
        strategy = "native" if dialect == "postgresql" else "table"

    if strategy == "native":
        if dialect != "postgresql":
            raise ValueError(
                f"Native identity sequences are not supported on {dialect}; "
                "use identity_strategy 'table'"
            )
        return PostgresIdentitySequence()
    return TableIdentitySequence()


class SequenceGuardian:
    """Keeps the identity sequence ahead of the highest stored id."""

    def __init__(self, sequence: IdentitySequence, table: type[SQLModel] = UserTable):
        self._sequence = sequence
        self._table = table

    @property
    def sequence(self) -> IdentitySequence:
        return self._sequence

    @property
    def table_name(self) -> str:
        return self._table.__tablename__

    def max_id(self, session: Session) -> int:
        """Highest stored id, or 0 for an empty table."""
        highest = session.exec(select(sa.func.max(self._table.id))).one()
        return highest or 0

    def sync(self, session: Session) -> int:
        """Advance the sequence to ``max(id) + 1``; returns the resulting next value."""
        observed = self.max_id(session)
        next_value = self._sequence.advance_to(session, observed + 1)
        logger.info(
            "Identity sequence for {} synchronized (max id {}, next id {})",
            self.table_name,
            observed,
            next_value,
        )
        return next_value

    def sync_on_startup(self, session_factory: Callable[[], Session]) -> int | None:
        """Run one sync in its own transaction.

        Failures are logged and swallowed: the reactive repair still covers
        inserts if startup sync could not run.
        """
        session = session_factory()
        try:
            next_value = self.sync(session)
            session.commit()
            return next_value
        except Exception as e:
            session.rollback()
            logger.warning(
                "Could not synchronize identity sequence on startup: {}", e
            )
            return None
        finally:
            session.close()

    def repair_and_retry(self, session: Session, insert_fn: Callable[[], T]) -> T:
        """Run ``insert_fn``; on an identity conflict, repair the sequence and retry once.

        Raises:
            IntegrityError: the insert failed for any reason other than an
                identity conflict (for example a duplicate email).
            SequenceRepairError: the retried insert still collided on the
                identity column.
        """
        try:
            return insert_fn()
        except IntegrityError as e:
            if not is_identity_conflict(e, self.table_name):
                raise
            session.rollback()
            logger.warning(
                "Identity sequence for {} is behind stored data; repairing",
                self.table_name,
            )

        self.sync(session)

        try:
            return insert_fn()
        except IntegrityError as e:
            if not is_identity_conflict(e, self.table_name):
                raise
            session.rollback()
            logger.error(
                "Insert into {} still conflicts on id after sequence repair",
                self.table_name,
            )
            raise SequenceRepairError("Internal server error") from e
