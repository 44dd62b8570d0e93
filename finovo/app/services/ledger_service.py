"""
Ledger Service for Finovo.

Expense and investment bookkeeping for one user at a time.

Design Notes:
- Every query and mutation filters on user_id: a row owned by someone else
  behaves exactly like a missing row (None / False)
- A transaction entered with type=savings is stored as an Investment
- Amounts are truncated to the column scale before writes
"""
from dataclasses import dataclass
from datetime import date as date_type
from decimal import Decimal
from typing import List, Literal, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from finovo.app.db.models import Expense, ExpenseType, Investment
from finovo.app.schemas.ledger import ExpenseCreate, InvestmentCreate
from finovo.app.utils.datetime_utils import shift_month
from finovo.app.utils.decimal_utils import truncate_to_db_precision

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RecordedTransaction:
    kind: Literal["expense", "investment"]
    expense: Optional[Expense] = None
    investment: Optional[Investment] = None


# =============================================================================
# EXPENSES
# =============================================================================

async def record_transaction(session: AsyncSession, user_id: str, item: ExpenseCreate) -> RecordedTransaction:
    """
    Store a user-entered transaction.

    Savings-type entries become an Investment (type=category,
    current_value=amount, returns=0, platform=description); everything else
    becomes an Expense.
    """
    amount = truncate_to_db_precision(item.amount, Expense, "amount")

    if item.type == ExpenseType.SAVINGS:
        investment = Investment(
            user_id=user_id,
            type=item.category,
            amount=amount,
            current_value=amount,
            returns=Decimal("0"),
            date=item.date,
            platform=item.description,
            )
        session.add(investment)
        await session.commit()
        await session.refresh(investment)
        logger.info("Savings recorded as investment", user_id=user_id, investment_id=investment.id, amount=str(amount))
        return RecordedTransaction(kind="investment", investment=investment)

    expense = Expense(
        user_id=user_id,
        category=item.category,
        amount=amount,
        description=item.description,
        date=item.date,
        type=item.type,
        )
    session.add(expense)
    await session.commit()
    await session.refresh(expense)
    logger.info("Expense recorded", user_id=user_id, expense_id=expense.id, type=expense.type.value, amount=str(amount))
    return RecordedTransaction(kind="expense", expense=expense)


async def list_expenses(
    session: AsyncSession,
    user_id: str,
    month: Optional[date_type] = None,
    include_savings: bool = True,
    ) -> List[Expense]:
    """
    Expenses of a user, newest first.

    Args:
        month: Any date inside the month to restrict to (None = all)
        include_savings: False drops savings-type rows
    """
    stmt = select(Expense).where(Expense.user_id == user_id)
    if month is not None:
        start = month.replace(day=1)
        stmt = stmt.where(Expense.date >= start, Expense.date < shift_month(start, 1))
    if not include_savings:
        stmt = stmt.where(Expense.type != ExpenseType.SAVINGS)
    stmt = stmt.order_by(Expense.date.desc(), Expense.id.desc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def _get_expense(session: AsyncSession, user_id: str, expense_id: int) -> Optional[Expense]:
    stmt = select(Expense).where(Expense.id == expense_id, Expense.user_id == user_id)
    result = await session.execute(stmt)
    return result.scalars().first()


async def update_expense_type(
    session: AsyncSession,
    user_id: str,
    expense_id: int,
    expense_type: ExpenseType,
    ) -> Optional[Expense]:
    """Reclassify an expense; None if it does not exist for this user."""
    expense = await _get_expense(session, user_id, expense_id)
    if expense is None:
        return None

    expense.type = expense_type
    session.add(expense)
    await session.commit()
    await session.refresh(expense)
    logger.info("Expense reclassified", user_id=user_id, expense_id=expense_id, type=expense_type.value)
    return expense


async def delete_expense(session: AsyncSession, user_id: str, expense_id: int) -> bool:
    expense = await _get_expense(session, user_id, expense_id)
    if expense is None:
        return False

    await session.delete(expense)
    await session.commit()
    logger.info("Expense deleted", user_id=user_id, expense_id=expense_id)
    return True


# =============================================================================
# INVESTMENTS
# =============================================================================

async def list_investments(session: AsyncSession, user_id: str) -> List[Investment]:
    """Investments of a user, newest first."""
    stmt = (
        select(Investment)
        .where(Investment.user_id == user_id)
        .order_by(Investment.date.desc(), Investment.id.desc())
        )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def create_investment(session: AsyncSession, user_id: str, item: InvestmentCreate) -> Investment:
    amount = truncate_to_db_precision(item.amount, Investment, "amount")
    current_value = amount if item.current_value is None else truncate_to_db_precision(
        item.current_value, Investment, "current_value"
        )
    investment = Investment(
        user_id=user_id,
        type=item.type,
        amount=amount,
        current_value=current_value,
        returns=current_value - amount,
        date=item.date,
        platform=item.platform,
        )
    session.add(investment)
    await session.commit()
    await session.refresh(investment)
    logger.info("Investment created", user_id=user_id, investment_id=investment.id, amount=str(amount))
    return investment


async def _get_investment(session: AsyncSession, user_id: str, investment_id: int) -> Optional[Investment]:
    stmt = select(Investment).where(Investment.id == investment_id, Investment.user_id == user_id)
    result = await session.execute(stmt)
    return result.scalars().first()


async def update_investment_value(
    session: AsyncSession,
    user_id: str,
    investment_id: int,
    current_value: Decimal,
    ) -> Optional[Investment]:
    """
    Mark an investment to its current value.

    returns is recomputed as current_value - amount.
    """
    investment = await _get_investment(session, user_id, investment_id)
    if investment is None:
        return None

    investment.current_value = truncate_to_db_precision(current_value, Investment, "current_value")
    investment.returns = investment.current_value - investment.amount
    session.add(investment)
    await session.commit()
    await session.refresh(investment)
    logger.info(
        "Investment revalued",
        user_id=user_id,
        investment_id=investment_id,
        current_value=str(investment.current_value),
        )
    return investment


async def delete_investment(session: AsyncSession, user_id: str, investment_id: int) -> bool:
    investment = await _get_investment(session, user_id, investment_id)
    if investment is None:
        return False

    await session.delete(investment)
    await session.commit()
    logger.info("Investment deleted", user_id=user_id, investment_id=investment_id)
    return True
