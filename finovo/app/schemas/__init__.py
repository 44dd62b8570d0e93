"""
Pydantic schemas for Finovo.

Used across multiple subsystems (DB, API, Services) to validate data structures
and standardize data exchange between components.

**Organization by Domain**:
- common.py: Shared bases (MoneyModel, MessageResponse)
- calculators.py: SIP / EMI / retirement / goal inputs and results
- auth.py: Auth request/response models (Auth prefix)
- profile.py: Profile and savings goals
- ledger.py: Expenses and investments
- budget.py: 50/30/20 analysis and dashboard summary
- content.py: Educational topic catalog

**Design Notes**:
- All models use Pydantic v2; request bodies forbid unknown fields
- Results keep full Decimal precision in Python and are quantized to cents in JSON
"""
from finovo.app.schemas.common import MoneyModel, MessageResponse
from finovo.app.schemas.calculators import (
    SIPInput,
    SIPResult,
    SIPScheduleRow,
    SIPScheduleResponse,
    EMIInput,
    EMIResult,
    RetirementInput,
    RetirementPlan,
    GoalInput,
    GoalSIPResult,
    )

__all__ = [
    "MoneyModel",
    "MessageResponse",
    # Calculators
    "SIPInput",
    "SIPResult",
    "SIPScheduleRow",
    "SIPScheduleResponse",
    "EMIInput",
    "EMIResult",
    "RetirementInput",
    "RetirementPlan",
    "GoalInput",
    "GoalSIPResult",
    ]
