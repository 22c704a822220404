"""Tests for analytics over stored users."""

from datetime import UTC, datetime

from sqlalchemy import text

from src.directory.core.services.analytics.aggregations import (
    DomainCount,
    GenderDistribution,
    MonthlyCount,
)


class TestAnalyticsService:
    def test_empty_store(self, analytics_service):
        assert analytics_service.gender_distribution() == GenderDistribution()
        assert analytics_service.monthly_registrations() == []
        assert analytics_service.email_domains() == []

    def test_gender_distribution(self, analytics_service, insert_users):
        insert_users(
            {"gender": "MALE"},
            {"gender": "FEMALE"},
            {"gender": "FEMALE"},
            {"gender": "OTHER"},
            {"gender": "legacy"},
        )

        result = analytics_service.gender_distribution()

        assert result == GenderDistribution(male=1, female=2, other=2)
        assert result.male + result.female + result.other == 5

    def test_monthly_registrations(self, analytics_service, insert_users):
        insert_users(
            {"created_at": datetime(2024, 3, 2, tzinfo=UTC)},
            {"created_at": datetime(2024, 1, 20, tzinfo=UTC)},
            {"created_at": datetime(2024, 1, 5, tzinfo=UTC)},
        )

        assert analytics_service.monthly_registrations() == [
            MonthlyCount(month="Jan 2024", count=2),
            MonthlyCount(month="Mar 2024", count=1),
        ]

    def test_unparseable_timestamp_is_skipped(self, analytics_service, session, insert_users):
        rows = insert_users({}, {})
        session.execute(
            text("UPDATE user_account SET created_at = 'not-a-date' WHERE id = :id"),
            {"id": rows[0].id},
        )
        session.commit()

        assert analytics_service.monthly_registrations() == [
            MonthlyCount(month="Jan 2024", count=1)
        ]

    def test_email_domains(self, analytics_service, insert_users):
        insert_users(
            {"email": "a@gmail.com"},
            {"email": "b@gmail.com"},
            {"email": "c@corp.example"},
        )

        assert analytics_service.email_domains() == [
            DomainCount(domain="gmail.com", count=2),
            DomainCount(domain="corp.example", count=1),
        ]

    def test_reflects_writes_immediately(self, analytics_service, user_service):
        user_service.create_user(
            {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "email": "ada@engine.org",
                "gender": "female",
                "phone": "555-123-4567",
            }
        )

        assert analytics_service.gender_distribution().female == 1
        assert analytics_service.email_domains() == [
            DomainCount(domain="engine.org", count=1)
        ]
