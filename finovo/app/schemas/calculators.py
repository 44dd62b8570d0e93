"""
Calculator schemas.

Pydantic models for the financial calculators (SIP, EMI, retirement, goal).
Inputs are validated for shape here; the calculators in
finovo.app.utils.financial_math re-check value constraints so that direct
Python callers get the same rejections as API callers.

Result models keep full Decimal precision as attributes. JSON output is
quantized to cents; display layers round to whole units.
"""
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field, ConfigDict

from finovo.app.schemas.common import MoneyModel


# =============================================================================
# Requests
# =============================================================================

class SIPInput(BaseModel):
    """SIP calculator input."""
    model_config = ConfigDict(extra="forbid")

    monthly_amount: Decimal = Field(..., gt=0, description="Fixed monthly contribution")
    annual_return_percent: Decimal = Field(..., ge=0, description="Expected annual return in percent (12 = 12%)")
    years: int = Field(..., gt=0, le=100, description="Investment duration in years")


class EMIInput(BaseModel):
    """EMI calculator input."""
    model_config = ConfigDict(extra="forbid")

    principal: Decimal = Field(..., gt=0, description="Loan amount")
    annual_rate_percent: Decimal = Field(..., ge=0, description="Annual interest rate in percent")
    tenure_years: int = Field(..., gt=0, le=50, description="Loan tenure in years")


class RetirementInput(BaseModel):
    """
    Retirement planner input.

    The retirement_age > current_age rule is enforced by the calculator,
    which reports it as a 400 through the API.
    """
    model_config = ConfigDict(extra="forbid")

    current_age: int = Field(..., gt=0, le=120)
    retirement_age: int = Field(..., gt=0, le=120)
    monthly_expenses_today: Decimal = Field(..., gt=0, description="Current monthly expenses")
    inflation_percent: Decimal = Field(..., ge=0, description="Expected yearly inflation in percent")
    expected_return_percent: Decimal = Field(..., gt=0, description="Expected annual return in percent")


class GoalInput(BaseModel):
    """Goal-based SIP input."""
    model_config = ConfigDict(extra="forbid")

    target_amount: Decimal = Field(..., gt=0, description="Amount needed at the end of the horizon")
    years: int = Field(..., gt=0, le=100, description="Time horizon in years")
    expected_return_percent: Decimal = Field(..., ge=0, description="Expected annual return in percent")


# =============================================================================
# Results
# =============================================================================

class SIPResult(MoneyModel):
    """Invariant: future_value == total_invested + total_returns."""
    total_invested: Decimal
    future_value: Decimal
    total_returns: Decimal


class SIPScheduleRow(MoneyModel):
    """Value of the SIP at the end of a given year."""
    year: int
    investment: Decimal
    value: Decimal
    returns: Decimal


class SIPScheduleResponse(BaseModel):
    """Year-by-year SIP growth."""
    model_config = ConfigDict(extra="forbid")

    rows: List[SIPScheduleRow] = Field(..., description="One row per year, year 1 first")
    count: int


class EMIResult(MoneyModel):
    """Invariant: total_interest == total_payable - principal."""
    monthly_emi: Decimal
    total_payable: Decimal
    total_interest: Decimal


class RetirementPlan(MoneyModel):
    """
    Retirement corpus plan.

    required_corpus uses the perpetuity approximation: the yearly return of
    the corpus covers one year of inflated expenses. Corpus depletion after
    retirement is not modelled.
    """
    years_to_retirement: int
    future_monthly_expenses: Decimal
    required_corpus: Decimal
    required_monthly_sip: Decimal


class GoalSIPResult(MoneyModel):
    """Monthly contribution needed to reach a target amount."""
    required_monthly_sip: Decimal
    total_invested: Decimal
    wealth_gained: Decimal
