"""User domain entity."""

from typing import Any

from pydantic import Field

from src.directory.core.types import Gender
from src.directory.entities.core._base import Entity


class User(Entity):
    """User record as exposed by the directory.

    Instances are built from table rows; the store assigns ``id`` and
    ``created_at``.
    """

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    email: str = Field(description="User's email address, lower-case")
    gender: Gender = Field(description="MALE, FEMALE or OTHER")
    phone: str = Field(description="User's phone number")

    def __eq__(self, other: Any) -> bool:
        """Compare users by identity and business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.email == other.email
            and self.gender == other.gender
            and self.phone == other.phone
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.first_name,
            self.last_name,
            self.email,
            self.gender,
            self.phone,
        ))
