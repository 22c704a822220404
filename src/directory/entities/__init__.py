"""Entities organized by business concept.

Each entity has its own package containing the domain model, the
persistence table and, where needed, a repository.
"""

from .core.identity_sequence import IdentitySequenceTable
from .core.user import Gender, User, UserRepository, UserTable

__all__ = [
    "Gender",
    "User",
    "UserTable",
    "UserRepository",
    "IdentitySequenceTable",
]
