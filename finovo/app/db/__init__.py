"""
Database module exports.
"""
from finovo.app.db.base import (
    SQLModel,
    # Enums
    RiskTolerance,
    InvestmentExperience,
    EmploymentType,
    GoalPriority,
    GoalCategory,
    ExpenseType,
    # Models
    User,
    UserProfile,
    FinancialGoal,
    Expense,
    Investment,
    )
from finovo.app.db.session import (
    get_sync_engine,
    get_async_engine,
    get_session_generator,
    ensure_database_exists,
    )

__all__ = [
    "SQLModel",
    "get_sync_engine",  # For sync scripts (CLI bootstrap, tests)
    "get_async_engine",  # For async FastAPI app
    "get_session_generator",
    "ensure_database_exists",
    # Enums
    "RiskTolerance",
    "InvestmentExperience",
    "EmploymentType",
    "GoalPriority",
    "GoalCategory",
    "ExpenseType",
    # Models
    "User",
    "UserProfile",
    "FinancialGoal",
    "Expense",
    "Investment",
    ]
