"""Identity sequence entity module."""

from .table import IdentitySequenceTable

__all__ = ["IdentitySequenceTable"]
