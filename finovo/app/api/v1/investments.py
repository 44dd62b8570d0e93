"""
Investment API endpoints for Finovo.

- GET /investments: List holdings
- POST /investments: Add a holding
- PATCH /investments/{id}: Update current value (returns recomputed)
- DELETE /investments/{id}: Remove a holding
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from finovo.app.api.v1.auth import get_user_context
from finovo.app.db.session import get_session_generator
from finovo.app.logging_config import get_logger
from finovo.app.schemas.common import MessageResponse
from finovo.app.schemas.ledger import InvestmentCreate, InvestmentRead, InvestmentValueUpdate
from finovo.app.services import ledger_service
from finovo.app.services.user_context import UserContext

logger = get_logger(__name__)

investment_router = APIRouter(prefix="/investments", tags=["investments"])


@investment_router.get("", response_model=List[InvestmentRead])
async def list_investments(
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> List[InvestmentRead]:
    investments = await ledger_service.list_investments(session, ctx.user_id)
    return [InvestmentRead.model_validate(i) for i in investments]


@investment_router.post("", response_model=InvestmentRead, status_code=201)
async def create_investment(
    payload: InvestmentCreate,
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> InvestmentRead:
    """Add a holding; current_value defaults to the invested amount."""
    investment = await ledger_service.create_investment(session, ctx.user_id, payload)
    return InvestmentRead.model_validate(investment)


@investment_router.patch("/{investment_id}", response_model=InvestmentRead)
async def update_investment_value(
    investment_id: int,
    payload: InvestmentValueUpdate,
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> InvestmentRead:
    investment = await ledger_service.update_investment_value(session, ctx.user_id, investment_id, payload.current_value)
    if investment is None:
        raise HTTPException(status_code=404, detail=f"Investment {investment_id} not found")
    return InvestmentRead.model_validate(investment)


@investment_router.delete("/{investment_id}", response_model=MessageResponse)
async def delete_investment(
    investment_id: int,
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> MessageResponse:
    if not await ledger_service.delete_investment(session, ctx.user_id, investment_id):
        raise HTTPException(status_code=404, detail=f"Investment {investment_id} not found")
    return MessageResponse(message=f"Investment {investment_id} deleted")
