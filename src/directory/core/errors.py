"""Domain errors raised by the directory services.

Each error carries the HTTP status it maps to; the API layer renders them
into the common ``{success, message, errors?}`` envelope.
"""

from __future__ import annotations


class DirectoryError(Exception):
    """Base class for errors reported to API callers."""

    status_code: int = 500

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class PaginationError(DirectoryError):
    """Invalid page or limit value."""

    status_code = 422


class UserValidationError(DirectoryError):
    """Create or update payload failed validation."""

    status_code = 422

    def __init__(self, errors: list[str], message: str = "Validation failed"):
        super().__init__(message, errors=errors)


class UserNotFoundError(DirectoryError):
    status_code = 404

    def __init__(self, user_id: int, message: str = "User not found"):
        super().__init__(message)
        self.user_id = user_id


class EmailConflictError(DirectoryError):
    status_code = 409

    def __init__(self, email: str, message: str = "Email already exists"):
        super().__init__(message)
        self.email = email


class SequenceRepairError(DirectoryError):
    """Insert still collided on the identity column after a repair."""

    status_code = 500
