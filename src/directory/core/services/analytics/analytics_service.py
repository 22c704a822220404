from sqlmodel import Session

from src.directory.core.services.analytics.aggregations import (
    DomainCount,
    GenderDistribution,
    MonthlyCount,
    bucket_domains,
    bucket_genders,
    bucket_months,
)
from src.directory.entities.core.user import UserRepository


class AnalyticsService:
    """Read-only aggregates over the full user table.

    Every call re-reads the store; nothing is cached.
    """

    def __init__(self, db_session: Session):
        self._user_repo = UserRepository(db_session)

    def gender_distribution(self) -> GenderDistribution:
        return bucket_genders(self._user_repo.count_by_gender())

    def monthly_registrations(self) -> list[MonthlyCount]:
        return bucket_months(self._user_repo.created_at_values())

    def email_domains(self) -> list[DomainCount]:
        return bucket_domains(self._user_repo.email_values())
