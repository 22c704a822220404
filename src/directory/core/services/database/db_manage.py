"""Schema management for the directory tables."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        from src.directory.entities.core.identity_sequence import (  # noqa: F401
            IdentitySequenceTable,
        )
        from src.directory.entities.core.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        SQLModel.metadata.drop_all(self._engine)
        logger.warning("Dropped all directory tables")
