"""User database table model."""

from sqlmodel import Field

from src.directory.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    ``user`` is reserved on PostgreSQL, hence the explicit table name.
    """

    __tablename__ = "user_account"

    first_name: str
    last_name: str
    email: str = Field(unique=True, index=True)
    gender: str = Field(index=True)
    phone: str
