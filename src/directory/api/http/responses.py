"""Response envelopes shared by every endpoint.

Successful responses are ``{success: true, message, data}``; errors are
``{success: false, message, errors?, error?}``.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from src.directory.entities.core.user import User

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str | None = None
    data: T | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    data: None = None
    errors: list[str] | None = None
    error: str | None = Field(
        default=None, description="Exception detail, outside production only"
    )


class UserListData(BaseModel):
    users: list[User]
    total: int
    page: int
    limit: int
    total_pages: int


class UserPayload(BaseModel):
    """Create/update body. Every field is optional here; the service decides
    which ones are required."""

    model_config = ConfigDict(extra="ignore")

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    gender: str | None = None
    phone: str | None = None

    def supplied(self) -> dict[str, Any]:
        """Only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)


def error_body(
    message: str,
    errors: list[str] | None = None,
    error: str | None = None,
) -> dict[str, Any]:
    return ErrorResponse(message=message, errors=errors, error=error).model_dump(
        exclude_none=True
    ) | {"data": None}
