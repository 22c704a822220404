"""Dashboard analytics."""

from .aggregations import DomainCount, GenderDistribution, MonthlyCount
from .analytics_service import AnalyticsService

__all__ = ["AnalyticsService", "DomainCount", "GenderDistribution", "MonthlyCount"]
