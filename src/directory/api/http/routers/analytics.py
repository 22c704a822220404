"""Dashboard analytics routes."""

from fastapi import APIRouter, Depends

from src.directory.api.http.deps import get_analytics_service
from src.directory.api.http.responses import ApiResponse
from src.directory.core.services import AnalyticsService
from src.directory.core.services.analytics import (
    DomainCount,
    GenderDistribution,
    MonthlyCount,
)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/gender", response_model=ApiResponse[GenderDistribution])
def gender_analytics(
    service: AnalyticsService = Depends(get_analytics_service),
) -> ApiResponse[GenderDistribution]:
    """Number of users per gender."""
    return ApiResponse(
        message="Gender analytics retrieved successfully",
        data=service.gender_distribution(),
    )


@router.get("/monthly-users", response_model=ApiResponse[list[MonthlyCount]])
def monthly_users_analytics(
    service: AnalyticsService = Depends(get_analytics_service),
) -> ApiResponse[list[MonthlyCount]]:
    """Registrations per calendar month, oldest first."""
    return ApiResponse(
        message="Monthly users analytics retrieved successfully",
        data=service.monthly_registrations(),
    )


@router.get("/email-domains", response_model=ApiResponse[list[DomainCount]])
def email_domain_analytics(
    service: AnalyticsService = Depends(get_analytics_service),
) -> ApiResponse[list[DomainCount]]:
    """Users per email domain, most common first."""
    return ApiResponse(
        message="Email domains analytics retrieved successfully",
        data=service.email_domains(),
    )
