"""
API v1 router.
Aggregates all v1 endpoints.
"""
from fastapi import APIRouter

from finovo.app.api.v1 import auth, budget, calculators, content, expenses, investments, profile
from finovo.app.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()

# Include sub-routers
router.include_router(auth.router)
router.include_router(calculators.calculator_router)
router.include_router(profile.profile_router)
router.include_router(expenses.expense_router)
router.include_router(investments.investment_router)
router.include_router(budget.budget_router)
router.include_router(budget.dashboard_router)
router.include_router(content.content_router)


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns service status.

    Returns:
        dict: Status message
    """
    logger.debug("Health check requested")
    return {"status": "ok"}
