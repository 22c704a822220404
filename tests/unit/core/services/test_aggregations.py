"""Unit tests for analytics bucketing."""

from datetime import UTC, date, datetime

import pytest

from src.directory.core.services.analytics.aggregations import (
    DomainCount,
    GenderDistribution,
    MonthlyCount,
    bucket_domains,
    bucket_genders,
    bucket_months,
    extract_domain,
    month_label,
    parse_timestamp,
)


class TestBucketGenders:
    def test_empty(self):
        assert bucket_genders([]) == GenderDistribution(male=0, female=0, other=0)

    def test_counts(self):
        result = bucket_genders([("MALE", 3), ("FEMALE", 4), ("OTHER", 1)])

        assert result.model_dump() == {"male": 3, "female": 4, "other": 1}

    def test_unexpected_values_count_as_other(self):
        result = bucket_genders([("MALE", 1), ("OTHER", 2), ("unknown", 5), (None, 1)])

        assert result == GenderDistribution(male=1, female=0, other=8)

    def test_lower_case_values_are_recognized(self):
        assert bucket_genders([("female", 2)]).female == 2


class TestParseTimestamp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-03-05 10:11:12.000000", datetime(2024, 3, 5, 10, 11, 12)),
            ("2024-03-05T10:11:12Z", datetime(2024, 3, 5, 10, 11, 12, tzinfo=UTC)),
            (date(2023, 12, 1), datetime(2023, 12, 1)),
            (datetime(2022, 2, 2, tzinfo=UTC), datetime(2022, 2, 2, tzinfo=UTC)),
        ],
    )
    def test_parses(self, value, expected):
        assert parse_timestamp(value) == expected

    @pytest.mark.parametrize("value", [None, "", "not-a-date", "2024-13-01", 1700000000])
    def test_unusable(self, value):
        assert parse_timestamp(value) is None


class TestBucketMonths:
    def test_label(self):
        assert month_label(2024, 1) == "Jan 2024"
        assert month_label(999, 12) == "Dec 0999"

    def test_groups_and_orders_chronologically(self):
        result = bucket_months(
            [
                "2024-02-10 00:00:00",
                "2023-12-31 23:59:59",
                "2024-01-01 00:00:00",
                "2024-02-28 12:00:00",
            ]
        )

        assert result == [
            MonthlyCount(month="Dec 2023", count=1),
            MonthlyCount(month="Jan 2024", count=1),
            MonthlyCount(month="Feb 2024", count=2),
        ]

    def test_months_without_records_are_omitted(self):
        result = bucket_months(["2024-01-05", "2024-04-05"])

        assert [m.month for m in result] == ["Jan 2024", "Apr 2024"]

    def test_invalid_timestamps_are_skipped(self):
        result = bucket_months(["2024-01-05", "garbage", None])

        assert result == [MonthlyCount(month="Jan 2024", count=1)]

    def test_empty(self):
        assert bucket_months([]) == []


class TestBucketDomains:
    @pytest.mark.parametrize(
        ("email", "expected"),
        [
            ("a@Example.COM", "example.com"),
            ("no-at-sign", None),
            ("two@@signs.com", None),
            ("a@b@c.com", None),
            ("trailing@", None),
            (None, None),
        ],
    )
    def test_extract_domain(self, email, expected):
        assert extract_domain(email) == expected

    def test_most_common_first_ties_by_name(self):
        result = bucket_domains(
            [
                "a@zeta.io",
                "b@alpha.io",
                "c@gmail.com",
                "d@GMAIL.com",
                "e@gmail.com",
                "broken",
            ]
        )

        assert result == [
            DomainCount(domain="gmail.com", count=3),
            DomainCount(domain="alpha.io", count=1),
            DomainCount(domain="zeta.io", count=1),
        ]

    def test_counts_sum_to_well_formed_emails(self):
        emails = ["a@x.com", "b@y.com", "c@x.com", "bad", "d@@z.com"]

        assert sum(d.count for d in bucket_domains(emails)) == 3
