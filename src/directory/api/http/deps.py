"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.directory.api.http.app_data import ApplicationDependencies
from src.directory.core.services import (
    AnalyticsService,
    SequenceGuardian,
    UserDirectoryService,
)
from src.directory.runtime.context import get_config


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Request-scoped database session, closed once the response is sent."""
    app_deps = get_app_dependencies(request)
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_sequence_guardian(request: Request) -> SequenceGuardian:
    """Get the identity sequence guardian."""
    return get_app_dependencies(request).sequence_guardian


def get_user_directory_service(
    db_session: Session = Depends(get_db_session),
    sequence_guardian: SequenceGuardian = Depends(get_sequence_guardian),
) -> UserDirectoryService:
    """Get the User Directory service instance."""
    return UserDirectoryService(
        db_session, sequence_guardian, query_config=get_config().query
    )


def get_analytics_service(
    db_session: Session = Depends(get_db_session),
) -> AnalyticsService:
    """Get the Analytics service instance."""
    return AnalyticsService(db_session)
