"""
Profile and goal schemas.

DTOs for the user's financial profile and savings goals.

**Design Notes**:
- ProfileUpdate is a partial update: only fields present in the request are
  applied (model_dump(exclude_unset=True)); an explicit null clears a field
- Optional profile fields use None for "not provided yet"
"""
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finovo.app.db.models import (
    EmploymentType,
    GoalCategory,
    GoalPriority,
    InvestmentExperience,
    RiskTolerance,
    )
from finovo.app.schemas.common import MIN_AMOUNT, MoneyModel


# =============================================================================
# PROFILE
# =============================================================================

class ProfileRead(MoneyModel):
    """Profile as returned by GET /profile."""
    model_config = ConfigDict(extra="forbid", frozen=True, from_attributes=True)

    user_id: str
    name: str
    age: Optional[int] = None
    monthly_income: Optional[Decimal] = None
    current_savings: Optional[Decimal] = None
    risk_tolerance: Optional[RiskTolerance] = None
    investment_experience: Optional[InvestmentExperience] = None
    employment_type: Optional[EmploymentType] = None
    dependents: Optional[int] = None
    has_health_insurance: Optional[bool] = None
    has_life_insurance: Optional[bool] = None
    monthly_expense_target: Optional[Decimal] = None
    emergency_fund_target: Optional[Decimal] = None
    updated_at: datetime
    is_complete: bool = False


class ProfileUpdate(BaseModel):
    """Partial profile update (PATCH /profile)."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, max_length=100)
    age: Optional[int] = Field(default=None, gt=0, le=120)
    monthly_income: Optional[Decimal] = Field(default=None, ge=0)
    current_savings: Optional[Decimal] = Field(default=None, ge=0)
    risk_tolerance: Optional[RiskTolerance] = None
    investment_experience: Optional[InvestmentExperience] = None
    employment_type: Optional[EmploymentType] = None
    dependents: Optional[int] = Field(default=None, ge=0)
    has_health_insurance: Optional[bool] = None
    has_life_insurance: Optional[bool] = None
    monthly_expense_target: Optional[Decimal] = Field(default=None, ge=0)
    emergency_fund_target: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("name must not be blank")
        return v.strip() if v is not None else v


# =============================================================================
# GOALS
# =============================================================================

class GoalItem(BaseModel):
    """Single savings goal as sent by the client."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., ge=MIN_AMOUNT)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0)
    target_date: date_type
    priority: GoalPriority = GoalPriority.MEDIUM
    category: GoalCategory = GoalCategory.OTHER


class GoalRead(MoneyModel):
    """Stored goal."""
    model_config = ConfigDict(extra="forbid", frozen=True, from_attributes=True)

    id: int
    name: str
    target_amount: Decimal
    current_amount: Decimal
    target_date: date_type
    priority: GoalPriority
    category: GoalCategory


class GoalsReplaceRequest(BaseModel):
    """PUT /profile/goals: the new complete goal list."""
    model_config = ConfigDict(extra="forbid")

    goals: List[GoalItem] = Field(default_factory=list, max_length=50)
