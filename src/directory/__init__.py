"""User directory service: list/search/CRUD over user records plus analytics."""

__version__ = "0.1.0"
