"""Database initialization script."""

from src.directory.core.services import DbManageService, DbSessionService


def init_db(reset: bool = False) -> None:
    """Create all database tables, optionally dropping them first."""
    db_manage_service = DbManageService(DbSessionService().engine)
    if reset:
        db_manage_service.drop_all()
    db_manage_service.create_all()


if __name__ == "__main__":
    init_db()
