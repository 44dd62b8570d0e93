"""
Database base module.
SQLModel base classes and metadata.
Import all models here so SQLModel.metadata.create_all sees every table.
"""
from sqlmodel import SQLModel

from finovo.app.db.models import (
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

__all__ = [
    "SQLModel",
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
