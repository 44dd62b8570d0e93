"""
Budget and dashboard API endpoints for Finovo.

- GET /budget/analysis: 50/30/20 targets vs actual spending
- GET /dashboard/summary: Dashboard aggregates
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from finovo.app.api.v1.auth import get_user_context
from finovo.app.db.session import get_session_generator
from finovo.app.logging_config import get_logger
from finovo.app.schemas.budget import BudgetAnalysisResponse, DashboardSummary
from finovo.app.services import dashboard_service
from finovo.app.services.user_context import UserContext
from finovo.app.utils.datetime_utils import parse_month_key

logger = get_logger(__name__)

budget_router = APIRouter(prefix="/budget", tags=["budget"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@budget_router.get("/analysis", response_model=BudgetAnalysisResponse)
async def get_budget_analysis(
    month: Optional[str] = Query(None, description="Restrict expenses to a calendar month (YYYY-MM)"),
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> BudgetAnalysisResponse:
    """
    Compare spending per bucket with the 50/30/20 split of the profile income.

    Utilization percentages are null when the profile has no income.
    """
    try:
        month_start = parse_month_key(month) if month else None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await dashboard_service.budget_analysis(session, ctx, month_start)


@dashboard_router.get("/summary", response_model=DashboardSummary)
async def get_dashboard_summary(
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> DashboardSummary:
    """
    Dashboard aggregates.

    Errors:
    - 409 if the profile is incomplete (the client shows the profile setup)
    """
    if not ctx.is_profile_complete:
        raise HTTPException(status_code=409, detail="Complete your profile to see the dashboard")
    return await dashboard_service.dashboard_summary(session, ctx)
