"""
Ledger schemas.

DTOs for expense and investment bookkeeping.

**Naming Convention**:
- Create suffix: request body for POST
- Read suffix: row as returned to the client

**Design Notes**:
- ExpenseCreate.type == savings is stored as an Investment, see
  services.ledger_service.record_transaction
- Amounts must be at least MIN_AMOUNT so that truncation to cents never
  stores zero
"""
from datetime import date as date_type
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finovo.app.db.models import ExpenseType
from finovo.app.schemas.common import MIN_AMOUNT, MoneyModel


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


# =============================================================================
# EXPENSES
# =============================================================================

class ExpenseCreate(BaseModel):
    """New transaction entered by the user (POST /expenses)."""
    model_config = ConfigDict(extra="forbid")

    category: str = Field(..., max_length=100, description="Spending category (Food, Rent, ...)")
    amount: Decimal = Field(..., ge=MIN_AMOUNT, description="Amount in the display currency")
    description: str = Field(default="", max_length=500)
    date: date_type = Field(..., description="Date of the transaction")
    type: ExpenseType = Field(default=ExpenseType.NEED, description="Budget bucket")

    @field_validator("category")
    @classmethod
    def _category_not_blank(cls, v: str) -> str:
        return _strip_required(v)


class ExpenseRead(MoneyModel):
    model_config = ConfigDict(extra="forbid", frozen=True, from_attributes=True)

    id: int
    category: str
    amount: Decimal
    description: str
    date: date_type
    type: ExpenseType


class ExpenseTypeUpdate(BaseModel):
    """Reclassify an expense (PATCH /expenses/{id}/type)."""
    model_config = ConfigDict(extra="forbid")

    type: ExpenseType


# =============================================================================
# INVESTMENTS
# =============================================================================

class InvestmentCreate(BaseModel):
    """
    New holding (POST /investments).

    current_value defaults to amount when omitted.
    """
    model_config = ConfigDict(extra="forbid")

    type: str = Field(..., max_length=100, description="Instrument kind (Mutual Funds, Stocks, PPF, ...)")
    amount: Decimal = Field(..., ge=MIN_AMOUNT)
    current_value: Optional[Decimal] = Field(default=None, ge=0)
    date: date_type
    platform: str = Field(default="", max_length=100)

    @field_validator("type")
    @classmethod
    def _type_not_blank(cls, v: str) -> str:
        return _strip_required(v)


class InvestmentRead(MoneyModel):
    model_config = ConfigDict(extra="forbid", frozen=True, from_attributes=True)

    id: int
    type: str
    amount: Decimal
    current_value: Decimal
    returns: Decimal
    date: date_type
    platform: str


class InvestmentValueUpdate(BaseModel):
    """Mark a holding to its current value (PATCH /investments/{id})."""
    model_config = ConfigDict(extra="forbid")

    current_value: Decimal = Field(..., ge=0)


class TransactionCreatedResponse(BaseModel):
    """Result of POST /expenses: which table received the entry."""
    kind: Literal["expense", "investment"]
    expense: Optional[ExpenseRead] = None
    investment: Optional[InvestmentRead] = None
