"""
Dashboard Service

Loads a user's ledger rows and feeds them to utils.budget_math.
"""
from datetime import date
from decimal import Decimal
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from finovo.app.schemas.budget import BudgetAnalysisResponse, DashboardSummary
from finovo.app.schemas.ledger import ExpenseRead, InvestmentRead
from finovo.app.services import ledger_service
from finovo.app.services.user_context import UserContext
from finovo.app.utils import budget_math
from finovo.app.utils.datetime_utils import month_key, today_utc

logger = structlog.get_logger(__name__)

RECENT_ITEMS = 5
TREND_MONTHS = 6


def _income(ctx: UserContext) -> Optional[Decimal]:
    return ctx.profile.monthly_income if ctx.profile is not None else None


async def budget_analysis(
    session: AsyncSession,
    ctx: UserContext,
    month: Optional[date] = None,
    ) -> BudgetAnalysisResponse:
    """
    50/30/20 analysis over the user's expenses and investments.

    With `month`, only expenses of that calendar month are considered;
    investments are always counted in full. Savings-type rows only show up
    in type_totals; the analysis and category totals skip them.
    """
    expenses = await ledger_service.list_expenses(session, ctx.user_id, month=month)
    investments = await ledger_service.list_investments(session, ctx.user_id)

    return BudgetAnalysisResponse(
        month=month_key(month) if month is not None else None,
        analysis=budget_math.analyze_budget(_income(ctx), expenses, investments),
        category_totals=budget_math.category_totals(expenses),
        type_totals=budget_math.type_totals(expenses),
        )


async def dashboard_summary(
    session: AsyncSession,
    ctx: UserContext,
    today: Optional[date] = None,
    ) -> DashboardSummary:
    """
    Aggregates for the dashboard page.

    Savings-type rows are excluded from every expense figure.
    """
    today = today or today_utc()
    income = _income(ctx)
    expenses = await ledger_service.list_expenses(session, ctx.user_id, include_savings=False)
    investments = await ledger_service.list_investments(session, ctx.user_id)

    total_expenses = budget_math.total_amount(expenses)
    portfolio = budget_math.portfolio_totals(investments)
    current_savings = Decimal("0")
    if ctx.profile is not None and ctx.profile.current_savings is not None:
        current_savings = ctx.profile.current_savings

    logger.debug("Dashboard computed", user_id=ctx.user_id, expenses=len(expenses), investments=len(investments))

    return DashboardSummary(
        name=ctx.display_name,
        profile_complete=ctx.is_profile_complete,
        monthly_income=income or Decimal("0"),
        current_savings=current_savings,
        total_expenses=total_expenses,
        expense_count=len(expenses),
        monthly_savings=(income or Decimal("0")) - total_expenses,
        savings_rate=budget_math.savings_rate(income, total_expenses),
        savings_and_investments=current_savings + portfolio.invested,
        allocation=budget_math.allocate_50_30_20(income),
        portfolio=portfolio,
        category_breakdown=budget_math.category_totals(expenses),
        monthly_trend=budget_math.monthly_trend(expenses, income, today, TREND_MONTHS),
        goal_progress=budget_math.goal_progress(ctx.goals),
        recent_expenses=[ExpenseRead.model_validate(e) for e in expenses[:RECENT_ITEMS]],
        recent_investments=[InvestmentRead.model_validate(i) for i in investments[:RECENT_ITEMS]],
        )
