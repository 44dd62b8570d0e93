"""
Expense API endpoints for Finovo.

- GET /expenses: List expenses (optional month filter)
- POST /expenses: Record a transaction (savings-type entries become investments)
- PATCH /expenses/{id}/type: Reclassify need/want/savings
- DELETE /expenses/{id}: Delete an expense
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from finovo.app.api.v1.auth import get_user_context
from finovo.app.db.session import get_session_generator
from finovo.app.logging_config import get_logger
from finovo.app.schemas.common import MessageResponse
from finovo.app.schemas.ledger import (
    ExpenseCreate,
    ExpenseRead,
    ExpenseTypeUpdate,
    InvestmentRead,
    TransactionCreatedResponse,
    )
from finovo.app.services import ledger_service
from finovo.app.services.user_context import UserContext
from finovo.app.utils.datetime_utils import parse_month_key

logger = get_logger(__name__)

expense_router = APIRouter(prefix="/expenses", tags=["expenses"])


@expense_router.get("", response_model=List[ExpenseRead])
async def list_expenses(
    month: Optional[str] = Query(None, description="Restrict to a calendar month (YYYY-MM)"),
    include_savings: bool = Query(True, description="Include savings-type rows"),
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> List[ExpenseRead]:
    """List the user's expenses, newest first."""
    try:
        month_start = parse_month_key(month) if month else None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    expenses = await ledger_service.list_expenses(session, ctx.user_id, month_start, include_savings)
    return [ExpenseRead.model_validate(e) for e in expenses]


@expense_router.post("", response_model=TransactionCreatedResponse, status_code=201)
async def create_expense(
    payload: ExpenseCreate,
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> TransactionCreatedResponse:
    """
    Record a transaction.

    `type: savings` stores the entry as an investment; the response `kind`
    tells which one was created.
    """
    recorded = await ledger_service.record_transaction(session, ctx.user_id, payload)
    if recorded.kind == "investment":
        return TransactionCreatedResponse(kind="investment", investment=InvestmentRead.model_validate(recorded.investment))
    return TransactionCreatedResponse(kind="expense", expense=ExpenseRead.model_validate(recorded.expense))


@expense_router.patch("/{expense_id}/type", response_model=ExpenseRead)
async def update_expense_type(
    expense_id: int,
    payload: ExpenseTypeUpdate,
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> ExpenseRead:
    expense = await ledger_service.update_expense_type(session, ctx.user_id, expense_id, payload.type)
    if expense is None:
        raise HTTPException(status_code=404, detail=f"Expense {expense_id} not found")
    return ExpenseRead.model_validate(expense)


@expense_router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    expense_id: int,
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> MessageResponse:
    if not await ledger_service.delete_expense(session, ctx.user_id, expense_id):
        raise HTTPException(status_code=404, detail=f"Expense {expense_id} not found")
    return MessageResponse(message=f"Expense {expense_id} deleted")
