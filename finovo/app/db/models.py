"""
Database models for Finovo.

All models use SQLModel (SQLAlchemy 2.x) with the following conventions:
- Money columns use Numeric(18, 2)
- Timestamps in UTC (created_at, updated_at)
- Rows owned by a user carry an indexed user_id foreign key
- Foreign keys enforced with PRAGMA foreign_keys=ON
- Nullable profile fields use None for "not provided yet"
"""
import uuid
from datetime import date as date_type, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Column, Numeric, Text, event
from sqlmodel import Field, SQLModel

from finovo.app.utils.datetime_utils import utcnow


def new_user_id() -> str:
    """Opaque user identifier (UUID4 hex)."""
    return uuid.uuid4().hex


# ============================================================================
# ENUMS
# ============================================================================

class RiskTolerance(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class InvestmentExperience(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class EmploymentType(str, Enum):
    SALARIED = "salaried"
    BUSINESS = "business"
    FREELANCER = "freelancer"
    STUDENT = "student"


class GoalPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class GoalCategory(str, Enum):
    HOME = "home"
    CAR = "car"
    EDUCATION = "education"
    WEDDING = "wedding"
    RETIREMENT = "retirement"
    TRAVEL = "travel"
    EMERGENCY = "emergency"
    OTHER = "other"


class ExpenseType(str, Enum):
    """
    Budget bucket of a spending entry (50/30/20 rule).

    - NEED: essentials (rent, groceries, utilities)
    - WANT: discretionary spending
    - SAVINGS: money set aside; new SAVINGS entries are recorded as investments
    """
    NEED = "need"
    WANT = "want"
    SAVINGS = "savings"


# ============================================================================
# MODELS
# ============================================================================

class User(SQLModel, table=True):
    """
    Authenticated account.

    The profile data lives in UserProfile (1-to-1, same id).
    """
    __tablename__ = "users"

    id: str = Field(default_factory=new_user_id, primary_key=True, max_length=32)
    email: str = Field(unique=True, index=True, nullable=False)
    hashed_password: str = Field(nullable=False)
    is_active: bool = Field(default=True)
    is_superuser: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class UserProfile(SQLModel, table=True):
    """
    Financial profile of a user.

    Every field except name is optional; a profile is complete when
    monthly_income, age, monthly_expense_target and emergency_fund_target
    are all present (see services.user_context.is_profile_complete).
    """
    __tablename__ = "user_profiles"

    user_id: str = Field(foreign_key="users.id", primary_key=True, max_length=32)
    name: str = Field(default="", nullable=False)

    age: Optional[int] = Field(default=None)
    monthly_income: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(18, 2)))
    current_savings: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(18, 2)))
    risk_tolerance: Optional[RiskTolerance] = Field(default=None)
    investment_experience: Optional[InvestmentExperience] = Field(default=None)
    employment_type: Optional[EmploymentType] = Field(default=None)
    dependents: Optional[int] = Field(default=None)
    has_health_insurance: Optional[bool] = Field(default=None)
    has_life_insurance: Optional[bool] = Field(default=None)
    monthly_expense_target: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(18, 2)))
    emergency_fund_target: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(18, 2)))

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class FinancialGoal(SQLModel, table=True):
    """Savings goal with a target amount and date."""
    __tablename__ = "financial_goals"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", nullable=False, index=True, max_length=32)
    name: str = Field(nullable=False)
    target_amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))
    current_amount: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(18, 2), nullable=False))
    target_date: date_type = Field(nullable=False)
    priority: GoalPriority = Field(default=GoalPriority.MEDIUM)
    category: GoalCategory = Field(default=GoalCategory.OTHER)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Expense(SQLModel, table=True):
    """Spending entry classified as need, want or savings."""
    __tablename__ = "expenses"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", nullable=False, index=True, max_length=32)
    category: str = Field(nullable=False)
    amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))
    description: str = Field(default="", sa_column=Column(Text, nullable=False))
    date: date_type = Field(nullable=False, index=True)
    type: ExpenseType = Field(default=ExpenseType.NEED)

    created_at: datetime = Field(default_factory=utcnow)


class Investment(SQLModel, table=True):
    """
    Investment holding.

    returns is current_value - amount; it is kept as a column because the
    dashboard sums it directly.
    """
    __tablename__ = "investments"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", nullable=False, index=True, max_length=32)
    type: str = Field(nullable=False, description="Instrument kind (Mutual Funds, Stocks, PPF, ...)")
    amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))
    current_value: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))
    returns: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(18, 2), nullable=False))
    date: date_type = Field(nullable=False, index=True)
    platform: str = Field(default="", nullable=False)

    created_at: datetime = Field(default_factory=utcnow)


# ============================================================================
# EVENT LISTENERS
# ============================================================================


@event.listens_for(User, "before_update")
@event.listens_for(UserProfile, "before_update")
@event.listens_for(FinancialGoal, "before_update")
def receive_before_update(mapper, connection, target):
    """Update updated_at timestamp on update."""
    target.updated_at = utcnow()
