"""
Profile API endpoints for Finovo.

- GET /profile: Current profile (with completeness flag)
- PATCH /profile: Partial update
- GET /profile/goals: Savings goals
- PUT /profile/goals: Replace all goals
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from finovo.app.api.v1.auth import get_user_context
from finovo.app.db.models import UserProfile
from finovo.app.db.session import get_session_generator
from finovo.app.logging_config import get_logger
from finovo.app.schemas.profile import GoalRead, GoalsReplaceRequest, ProfileRead, ProfileUpdate
from finovo.app.services import profile_service
from finovo.app.services.user_context import UserContext, is_profile_complete

logger = get_logger(__name__)

profile_router = APIRouter(prefix="/profile", tags=["profile"])


def _profile_read(profile: UserProfile) -> ProfileRead:
    return ProfileRead.model_validate(profile).model_copy(update={"is_complete": is_profile_complete(profile)})


@profile_router.get("", response_model=ProfileRead)
async def get_profile(ctx: UserContext = Depends(get_user_context)) -> ProfileRead:
    return _profile_read(ctx.profile)


@profile_router.patch("", response_model=ProfileRead)
async def update_profile(
    payload: ProfileUpdate,
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> ProfileRead:
    """
    Update only the fields present in the body.

    Sending `null` for an optional field clears it.
    """
    try:
        profile = await profile_service.update_profile(session, ctx.user_id, payload.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _profile_read(profile)


@profile_router.get("/goals", response_model=List[GoalRead])
async def get_goals(ctx: UserContext = Depends(get_user_context)) -> List[GoalRead]:
    return [GoalRead.model_validate(goal) for goal in ctx.goals]


@profile_router.put("/goals", response_model=List[GoalRead])
async def replace_goals(
    payload: GoalsReplaceRequest,
    ctx: UserContext = Depends(get_user_context),
    session: AsyncSession = Depends(get_session_generator),
    ) -> List[GoalRead]:
    """Replace the whole goal list (an empty list removes every goal)."""
    goals = await profile_service.replace_goals(session, ctx.user_id, payload.goals)
    return [GoalRead.model_validate(goal) for goal in goals]
