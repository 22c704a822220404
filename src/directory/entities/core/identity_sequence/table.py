"""Identity sequence table for stores without native sequences."""

from sqlmodel import Field, SQLModel


class IdentitySequenceTable(SQLModel, table=True):
    """Next identity value to hand out, one row per sequenced table."""

    __tablename__ = "identity_sequence"

    name: str = Field(primary_key=True)
    next_value: int = Field(default=1, nullable=False)
