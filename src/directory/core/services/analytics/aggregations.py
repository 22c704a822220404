"""Pure bucketing functions behind the dashboard analytics.

Each function takes plain values read from the store, so they can be
exercised without a database. Malformed values are skipped and logged;
they never abort an aggregate.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import date, datetime

from loguru import logger
from pydantic import BaseModel

from src.directory.core.types import Gender

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class GenderDistribution(BaseModel):
    male: int = 0
    female: int = 0
    other: int = 0


class MonthlyCount(BaseModel):
    month: str
    count: int


class DomainCount(BaseModel):
    domain: str
    count: int


def bucket_genders(counts: Iterable[tuple[str | None, int]]) -> GenderDistribution:
    """Fold grouped ``(gender, count)`` pairs into male/female/other buckets.

    Anything other than MALE or FEMALE, including unexpected values, lands in
    ``other``.
    """
    result = GenderDistribution()
    for gender, count in counts:
        parsed = Gender.parse(gender)
        if parsed is Gender.MALE:
            result.male += count
        elif parsed is Gender.FEMALE:
            result.female += count
        else:
            if parsed is None:
                logger.warning("Unexpected gender value {!r} counted as other", gender)
            result.other += count
    return result


def parse_timestamp(value: object) -> datetime | None:
    """Best-effort conversion of a stored timestamp; ``None`` when unusable."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def month_label(year: int, month: int) -> str:
    """``"Jan 2024"`` style label."""
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year:04d}"


def bucket_months(timestamps: Iterable[object]) -> list[MonthlyCount]:
    """Count records per calendar month, oldest month first."""
    buckets: Counter[tuple[int, int]] = Counter()
    skipped = 0
    for value in timestamps:
        moment = parse_timestamp(value)
        if moment is None:
            skipped += 1
            logger.warning("Skipping record with invalid creation timestamp {!r}", value)
            continue
        buckets[(moment.year, moment.month)] += 1

    if skipped:
        logger.info("Monthly cohort skipped {} record(s) without a usable timestamp", skipped)

    return [
        MonthlyCount(month=month_label(year, month), count=count)
        for (year, month), count in sorted(buckets.items())
    ]


def extract_domain(email: object) -> str | None:
    """Lower-cased part after the single ``@``; ``None`` when malformed."""
    if not isinstance(email, str) or email.count("@") != 1:
        return None
    domain = email.split("@", 1)[1].strip().lower()
    return domain or None


def bucket_domains(emails: Iterable[object]) -> list[DomainCount]:
    """Count records per email domain, most common first.

    Ties are ordered by domain name. The full list is returned; callers
    decide how many to show.
    """
    counts: Counter[str] = Counter()
    for email in emails:
        domain = extract_domain(email)
        if domain is None:
            logger.debug("Skipping malformed email {!r}", email)
            continue
        counts[domain] += 1

    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [DomainCount(domain=domain, count=count) for domain, count in ordered]
