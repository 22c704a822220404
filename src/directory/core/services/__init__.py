"""Core services exports."""

# Database Services
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .database.sequence import SequenceGuardian, build_identity_sequence

# Analytics Services
from .analytics.analytics_service import AnalyticsService

# User Services
from .user.user_directory import UserDirectoryService

__all__ = [
    # Database Services
    "DbManageService",
    "DbSessionService",
    "SequenceGuardian",
    "build_identity_sequence",
    # Analytics Services
    "AnalyticsService",
    # User Services
    "UserDirectoryService",
]
