"""
Budget and dashboard schemas.

Results of finovo.app.utils.budget_math (50/30/20 analysis, category
breakdowns, monthly trend, goal progress) and the dashboard summary that
bundles them.
"""
from datetime import date as date_type
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from finovo.app.db.models import ExpenseType, GoalCategory, GoalPriority
from finovo.app.schemas.common import MoneyModel
from finovo.app.schemas.ledger import ExpenseRead, InvestmentRead


class BudgetAllocation(MoneyModel):
    """50/30/20 split of a monthly income."""
    needs: Decimal
    wants: Decimal
    savings: Decimal


class BudgetAnalysis(MoneyModel):
    """
    Targets vs actual spending.

    Utilization percentages are None when the matching target is zero
    (no income on the profile).
    """
    monthly_income: Decimal
    targets: BudgetAllocation
    spent_needs: Decimal
    spent_wants: Decimal
    invested: Decimal
    needs_utilization: Optional[Decimal] = None
    wants_utilization: Optional[Decimal] = None
    savings_utilization: Optional[Decimal] = None
    total_expenses: Decimal
    total_investments: Decimal
    remaining_budget: Decimal
    budget_utilization: Optional[Decimal] = None


class CategoryTotal(MoneyModel):
    category: str
    amount: Decimal


class TypeTotal(MoneyModel):
    type: ExpenseType
    amount: Decimal


class MonthlyTrendPoint(MoneyModel):
    month: str  # YYYY-MM
    expenses: Decimal
    savings: Decimal


class GoalProgressItem(MoneyModel):
    name: str
    target: Decimal
    current: Decimal
    percentage: Decimal
    category: GoalCategory
    priority: GoalPriority
    target_date: date_type


class PortfolioTotals(MoneyModel):
    invested: Decimal
    current_value: Decimal
    returns: Decimal


class DashboardSummary(MoneyModel):
    """Everything GET /dashboard/summary returns."""
    name: str
    profile_complete: bool
    monthly_income: Decimal
    current_savings: Decimal
    total_expenses: Decimal
    expense_count: int
    monthly_savings: Decimal
    savings_rate: Optional[Decimal] = None
    savings_and_investments: Decimal
    allocation: BudgetAllocation
    portfolio: PortfolioTotals
    category_breakdown: List[CategoryTotal]
    monthly_trend: List[MonthlyTrendPoint]
    goal_progress: List[GoalProgressItem]
    recent_expenses: List[ExpenseRead]
    recent_investments: List[InvestmentRead]


class BudgetAnalysisResponse(BaseModel):
    """GET /budget/analysis payload."""
    month: Optional[str] = None
    analysis: BudgetAnalysis
    category_totals: List[CategoryTotal]
    type_totals: List[TypeTotal]
