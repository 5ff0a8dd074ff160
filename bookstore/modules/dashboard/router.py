"""
Dashboard Router - admin dashboard figures, AI analysis and income by date range.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from bookstore.core.ai import AIClient
from .service import DashboardService
from .schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    DashboardResponse,
    IncomeRangeResponse,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(request: Request) -> DashboardService:
    """Dashboard service built once in the application lifespan."""
    return request.app.state.dashboard_service


def get_ai_client(request: Request) -> Optional[AIClient]:
    """AI client built in the application lifespan, None when no API key is set."""
    return getattr(request.app.state, "ai_client", None)


@router.get("", response_model=DashboardResponse)
@router.get("/list", response_model=DashboardResponse, include_in_schema=False)
async def get_dashboard(
    month: Optional[int] = Query(None, ge=1, le=12, description="Show daily income for this month"),
    year: Optional[int] = Query(None, ge=1, le=9999, description="Defaults to the current year"),
    category: Optional[str] = Query(None, description="Restrict the chart and top products to a book category"),
    service: DashboardService = Depends(get_dashboard_service),
):
    """
    Get all dashboard data in a single API call.

    Returns:
        - summary cards: order, member and sale counts, online/in-store/total income
        - monthlyIncome: one entry per month of the year, or per day when month is given
        - topProducts: 5 best-selling books across online orders and in-store sales
        - categories: distinct book categories for the filter
        - selectedFilters: the month/year/category actually used
    """
    return await service.get_dashboard_data(month=month, year=year, category=category)


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_dashboard(
    data: AnalyzeRequest,
    ai_client: Optional[AIClient] = Depends(get_ai_client),
):
    """
    Generate a written business analysis of dashboard data.

    The body is the payload returned by GET /dashboard.
    """
    return await DashboardService.analyze(data, ai_client)


@router.get("/income", response_model=IncomeRangeResponse)
async def get_income_by_date_range(
    start_date: str = Query(..., alias="startDate", description="Inclusive ISO date, e.g. 2024-01-01"),
    end_date: str = Query(..., alias="endDate", description="Inclusive ISO date, e.g. 2024-01-31"),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Online, in-store and total income between two inclusive dates."""
    return await service.get_income_by_date_range(start_date, end_date)
