"""
Calculator API endpoints for Finovo.

Public (no session needed) wrappers around utils.financial_math:
- POST /calculators/sip: SIP future value
- POST /calculators/sip/schedule: Year-by-year SIP growth
- POST /calculators/emi: Loan EMI
- POST /calculators/retirement: Retirement corpus and SIP
- POST /calculators/goal: SIP needed for a target amount

Money values in responses are rounded to 2 decimals.
"""
from fastapi import APIRouter, HTTPException

from finovo.app.logging_config import get_logger
from finovo.app.schemas.calculators import (
    SIPInput,
    SIPResult,
    SIPScheduleResponse,
    EMIInput,
    EMIResult,
    RetirementInput,
    RetirementPlan,
    GoalInput,
    GoalSIPResult,
    )
from finovo.app.utils import financial_math

logger = get_logger(__name__)

calculator_router = APIRouter(prefix="/calculators", tags=["calculators"])


def _rejected(e: ValueError) -> HTTPException:
    logger.info("Calculator input rejected", error=str(e))
    return HTTPException(status_code=400, detail=str(e))


@calculator_router.post("/sip", response_model=SIPResult)
async def calculate_sip(payload: SIPInput) -> SIPResult:
    """
    Future value of a monthly SIP (contributions at the start of each month).

    **Example Request**:
    ```json
    {"monthly_amount": 5000, "annual_return_percent": 12, "years": 20}
    ```
    """
    try:
        return financial_math.compute_sip(payload.monthly_amount, payload.annual_return_percent, payload.years)
    except ValueError as e:
        raise _rejected(e)


@calculator_router.post("/sip/schedule", response_model=SIPScheduleResponse)
async def calculate_sip_schedule(payload: SIPInput) -> SIPScheduleResponse:
    """Year-by-year SIP value; the last row matches POST /calculators/sip."""
    try:
        rows = financial_math.compute_sip_schedule(payload.monthly_amount, payload.annual_return_percent, payload.years)
    except ValueError as e:
        raise _rejected(e)
    return SIPScheduleResponse(rows=rows, count=len(rows))


@calculator_router.post("/emi", response_model=EMIResult)
async def calculate_emi(payload: EMIInput) -> EMIResult:
    """
    Equated Monthly Installment of a reducing-balance loan.

    **Example Request**:
    ```json
    {"principal": 1000000, "annual_rate_percent": 8.5, "tenure_years": 20}
    ```
    """
    try:
        return financial_math.compute_emi(payload.principal, payload.annual_rate_percent, payload.tenure_years)
    except ValueError as e:
        raise _rejected(e)


@calculator_router.post("/retirement", response_model=RetirementPlan)
async def calculate_retirement(payload: RetirementInput) -> RetirementPlan:
    """
    Corpus needed at retirement (perpetuity on inflated expenses) and the
    monthly SIP that builds it.

    Errors:
    - 400 if retirement_age <= current_age
    """
    try:
        return financial_math.compute_retirement_plan(
            payload.current_age,
            payload.retirement_age,
            payload.monthly_expenses_today,
            payload.inflation_percent,
            payload.expected_return_percent,
            )
    except ValueError as e:
        raise _rejected(e)


@calculator_router.post("/goal", response_model=GoalSIPResult)
async def calculate_goal(payload: GoalInput) -> GoalSIPResult:
    """Monthly SIP needed to reach target_amount in `years` years."""
    try:
        return financial_math.compute_goal_sip(payload.target_amount, payload.years, payload.expected_return_percent)
    except ValueError as e:
        raise _rejected(e)
