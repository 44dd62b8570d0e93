"""
Budget and dashboard analytics.

Pure aggregation over expense, investment and goal rows:
- 50/30/20 allocation of a monthly income
- Budget analysis (targets vs spending per bucket)
- Category and type breakdowns
- Savings rate and monthly trend
- Goal progress and portfolio totals

Rows are duck-typed: anything exposing the attributes below works (ORM
objects, read schemas, simple namespaces in tests).
- expenses: category, amount, type, date
- investments: amount, current_value, returns
- goals: name, target_amount, current_amount, category, priority, target_date

Rules:
- Savings-type expenses are never counted as spending
- A missing income (None) behaves as zero; ratios against it are None
- No I/O, no logging
"""
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from finovo.app.db.models import ExpenseType
from finovo.app.schemas.budget import (
    BudgetAllocation,
    BudgetAnalysis,
    CategoryTotal,
    TypeTotal,
    MonthlyTrendPoint,
    GoalProgressItem,
    PortfolioTotals,
    )
from finovo.app.utils.datetime_utils import month_key, shift_month

NEEDS_SHARE = Decimal("0.5")
WANTS_SHARE = Decimal("0.3")
SAVINGS_SHARE = Decimal("0.2")

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def _income(monthly_income: Optional[Decimal]) -> Decimal:
    return Decimal(monthly_income) if monthly_income is not None else _ZERO


def _percent(part: Decimal, whole: Decimal) -> Optional[Decimal]:
    if whole == 0:
        return None
    return part / whole * _HUNDRED


def _spending(expenses: Iterable) -> List:
    return [e for e in expenses if ExpenseType(e.type) != ExpenseType.SAVINGS]


def total_amount(rows: Iterable, attr: str = "amount") -> Decimal:
    """Sum one Decimal attribute over rows (0 for no rows)."""
    return sum((Decimal(getattr(row, attr)) for row in rows), _ZERO)


def allocate_50_30_20(monthly_income: Optional[Decimal]) -> BudgetAllocation:
    """
    Split a monthly income into needs (50%), wants (30%) and savings (20%).

    The three buckets always sum to the income.
    """
    income = _income(monthly_income)
    needs = income * NEEDS_SHARE
    wants = income * WANTS_SHARE
    return BudgetAllocation(needs=needs, wants=wants, savings=income - needs - wants)


def analyze_budget(monthly_income: Optional[Decimal], expenses: Iterable, investments: Iterable) -> BudgetAnalysis:
    """
    Compare actual spending with the 50/30/20 targets.

    Args:
        monthly_income: Income from the profile (None if not set)
        expenses: Expense rows (savings-type rows are ignored)
        investments: Investment rows; their `amount` counts as saved

    Returns:
        BudgetAnalysis
    """
    income = _income(monthly_income)
    targets = allocate_50_30_20(income)
    spending = _spending(expenses)
    investment_rows = list(investments)

    spent_needs = total_amount(e for e in spending if ExpenseType(e.type) == ExpenseType.NEED)
    spent_wants = total_amount(e for e in spending if ExpenseType(e.type) == ExpenseType.WANT)
    invested = total_amount(investment_rows)
    total_expenses = spent_needs + spent_wants

    return BudgetAnalysis(
        monthly_income=income,
        targets=targets,
        spent_needs=spent_needs,
        spent_wants=spent_wants,
        invested=invested,
        needs_utilization=_percent(spent_needs, targets.needs),
        wants_utilization=_percent(spent_wants, targets.wants),
        savings_utilization=_percent(invested, targets.savings),
        total_expenses=total_expenses,
        total_investments=invested,
        remaining_budget=income - total_expenses,
        budget_utilization=_percent(total_expenses, income),
        )


def category_totals(expenses: Iterable) -> List[CategoryTotal]:
    """Spending per category, largest first (ties by category name)."""
    totals = defaultdict(lambda: _ZERO)
    for expense in _spending(expenses):
        totals[expense.category] += Decimal(expense.amount)
    ordered = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))
    return [CategoryTotal(category=category, amount=amount) for category, amount in ordered]


def type_totals(expenses: Iterable) -> List[TypeTotal]:
    """
    Totals per expense type, one entry per ExpenseType (zeros included).

    Unlike the other helpers this reports the savings bucket too, so callers
    can show legacy savings-type rows.
    """
    totals = {t: _ZERO for t in ExpenseType}
    for expense in expenses:
        totals[ExpenseType(expense.type)] += Decimal(expense.amount)
    return [TypeTotal(type=t, amount=amount) for t, amount in totals.items()]


def savings_rate(monthly_income: Optional[Decimal], total_expenses: Decimal) -> Optional[Decimal]:
    """(income - expenses) / income * 100; None without income."""
    income = _income(monthly_income)
    return _percent(income - total_expenses, income)


def monthly_trend(
    expenses: Iterable,
    monthly_income: Optional[Decimal],
    today: date,
    months: int = 6,
    ) -> List[MonthlyTrendPoint]:
    """
    Spending and savings for the last `months` calendar months, oldest first.

    The current month (the one containing `today`) is the last point.
    """
    if months < 1:
        raise ValueError(f"months must be at least 1, got {months}")
    income = _income(monthly_income)
    per_month = defaultdict(lambda: _ZERO)
    for expense in _spending(expenses):
        per_month[month_key(expense.date)] += Decimal(expense.amount)

    points = []
    for offset in range(months - 1, -1, -1):
        key = month_key(shift_month(today, -offset))
        spent = per_month[key]
        points.append(MonthlyTrendPoint(month=key, expenses=spent, savings=income - spent))
    return points


def goal_progress(goals: Iterable) -> List[GoalProgressItem]:
    """Progress of each goal; percentage is 0 when the target is 0."""
    items = []
    for goal in goals:
        target = Decimal(goal.target_amount)
        current = Decimal(goal.current_amount)
        items.append(GoalProgressItem(
            name=goal.name,
            target=target,
            current=current,
            percentage=_percent(current, target) or _ZERO,
            category=goal.category,
            priority=goal.priority,
            target_date=goal.target_date,
            ))
    return items


def portfolio_totals(investments: Iterable) -> PortfolioTotals:
    rows = list(investments)
    return PortfolioTotals(
        invested=total_amount(rows, "amount"),
        current_value=total_amount(rows, "current_value"),
        returns=total_amount(rows, "returns"),
        )
