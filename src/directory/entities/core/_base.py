from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(UTC)


class Entity(BaseModel):
    """Base entity with a store-assigned integer identifier."""

    id: int | None = PydanticField(
        default=None,
        description="Identifier assigned by the store on insert",
    )
    created_at: datetime | None = PydanticField(
        default=None, description="Insert timestamp assigned by the store"
    )


class EntityTable(SQLModel, table=False):
    """Base persistence model with an auto-incrementing integer primary key."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Auto-incrementing identity",
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now()},
    )
