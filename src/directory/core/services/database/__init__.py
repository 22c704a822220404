from .db_manage import DbManageService
from .db_session import DbSessionService
from .sequence import (
    IdentitySequence,
    PostgresIdentitySequence,
    SequenceGuardian,
    TableIdentitySequence,
    build_identity_sequence,
)

__all__ = [
    "DbManageService",
    "DbSessionService",
    "IdentitySequence",
    "PostgresIdentitySequence",
    "SequenceGuardian",
    "TableIdentitySequence",
    "build_identity_sequence",
]
