"""
Profile Service

Profile lookup, profile updates and savings goals.

The profile row is written next to the account at sign-up, but a reader may
look for it before that write is visible (separate session, slow disk, an
account created by an older client without a profile). load_profile_with_retry
polls for the row under an explicit RetryPolicy and reports the outcome as a
value (ProfileFound / ProfileNotFound) instead of raising.
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Union

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from finovo.app.config import get_settings
from finovo.app.db.models import FinancialGoal, User, UserProfile
from finovo.app.schemas.profile import GoalItem
from finovo.app.services.user_service import default_name_for
from finovo.app.utils.datetime_utils import utcnow
from finovo.app.utils.decimal_utils import truncate_optional, truncate_to_db_precision

logger = structlog.get_logger(__name__)

SleepFn = Callable[[float], Awaitable[Any]]

# Profile columns holding money
_MONEY_FIELDS = ("monthly_income", "current_savings", "monthly_expense_target", "emergency_fund_target")


# =============================================================================
# RETRY POLICY AND OUTCOMES
# =============================================================================

@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded retry for the profile lookup.

    The delay before attempt k+1 is delay_seconds * backoff_factor**(k-1);
    there is no delay after the last attempt.
    """
    max_attempts: int = 5
    delay_seconds: float = 1.5
    backoff_factor: float = 1.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must not be negative, got {self.delay_seconds}")
        if self.backoff_factor < 1:
            raise ValueError(f"backoff_factor must be at least 1, got {self.backoff_factor}")

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        settings = get_settings()
        return cls(
            max_attempts=settings.PROFILE_LOOKUP_MAX_ATTEMPTS,
            delay_seconds=settings.PROFILE_LOOKUP_DELAY_SECONDS,
            backoff_factor=settings.PROFILE_LOOKUP_BACKOFF_FACTOR,
            )

    def delay_before(self, attempt: int) -> float:
        """Seconds to wait before `attempt` (2-based; attempt 1 never waits)."""
        if attempt <= 1:
            return 0.0
        return self.delay_seconds * self.backoff_factor ** (attempt - 2)


@dataclass(frozen=True)
class ProfileFound:
    profile: UserProfile
    attempts: int


@dataclass(frozen=True)
class ProfileNotFound:
    user_id: str
    attempts: int


ProfileLookup = Union[ProfileFound, ProfileNotFound]


# =============================================================================
# LOOKUP
# =============================================================================

async def get_profile(session: AsyncSession, user_id: str) -> Optional[UserProfile]:
    """Single lookup, no retry."""
    stmt = select(UserProfile).where(UserProfile.user_id == user_id)
    result = await session.execute(stmt)
    return result.scalars().first()


async def load_profile_with_retry(
    session: AsyncSession,
    user_id: str,
    policy: Optional[RetryPolicy] = None,
    sleep: SleepFn = asyncio.sleep,
    ) -> ProfileLookup:
    """
    Look the profile up at most policy.max_attempts times.

    Database errors propagate unchanged; only "row not there yet" is retried.

    Args:
        session: Database session
        user_id: Owner of the profile
        policy: Retry policy (default: from settings)
        sleep: Awaitable sleep, injectable for tests

    Returns:
        ProfileFound or ProfileNotFound, both carrying the attempt count
    """
    policy = policy or RetryPolicy.from_settings()

    for attempt in range(1, policy.max_attempts + 1):
        if attempt > 1:
            await sleep(policy.delay_before(attempt))
        profile = await get_profile(session, user_id)
        if profile is not None:
            if attempt > 1:
                logger.info("Profile found after retry", user_id=user_id, attempts=attempt)
            return ProfileFound(profile=profile, attempts=attempt)
        logger.debug("Profile not found yet", user_id=user_id, attempt=attempt, max_attempts=policy.max_attempts)

    logger.warning("Profile not found", user_id=user_id, attempts=policy.max_attempts)
    return ProfileNotFound(user_id=user_id, attempts=policy.max_attempts)


async def ensure_profile(
    session: AsyncSession,
    user: User,
    policy: Optional[RetryPolicy] = None,
    sleep: SleepFn = asyncio.sleep,
    ) -> UserProfile:
    """
    Return the user's profile, creating an empty one when the lookup gives up.

    The fallback name is the email local part.
    """
    outcome = await load_profile_with_retry(session, user.id, policy, sleep)
    if isinstance(outcome, ProfileFound):
        return outcome.profile

    profile = UserProfile(user_id=user.id, name=default_name_for(user.email))
    session.add(profile)
    await session.commit()
    await session.refresh(profile)
    logger.info("Profile created as fallback", user_id=user.id, attempts=outcome.attempts)
    return profile


# =============================================================================
# UPDATES
# =============================================================================

async def update_profile(session: AsyncSession, user_id: str, updates: Mapping[str, Any]) -> Optional[UserProfile]:
    """
    Apply a partial update to the profile.

    Only keys present in `updates` are written; None clears a field.
    Unknown keys raise ValueError.

    Returns:
        Updated profile, or None if the user has no profile
    """
    profile = await get_profile(session, user_id)
    if profile is None:
        return None

    for field, value in updates.items():
        if field in ("user_id", "created_at", "updated_at") or field not in UserProfile.model_fields:
            raise ValueError(f"Unknown profile field: {field}")
        if field == "name" and value is None:
            raise ValueError("name cannot be cleared")
        if field in _MONEY_FIELDS:
            value = truncate_optional(value, UserProfile, field)
        setattr(profile, field, value)

    profile.updated_at = utcnow()
    session.add(profile)
    await session.commit()
    await session.refresh(profile)

    logger.info("Profile updated", user_id=user_id, fields=sorted(updates))
    return profile


async def list_goals(session: AsyncSession, user_id: str) -> List[FinancialGoal]:
    """Goals of a user ordered by target date."""
    stmt = (
        select(FinancialGoal)
        .where(FinancialGoal.user_id == user_id)
        .order_by(FinancialGoal.target_date, FinancialGoal.id)
        )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def replace_goals(session: AsyncSession, user_id: str, goals: List[GoalItem]) -> List[FinancialGoal]:
    """
    Replace all goals of a user with `goals` in one transaction.

    On any error the previous goals are kept.
    """
    try:
        await session.execute(delete(FinancialGoal).where(FinancialGoal.user_id == user_id))
        for item in goals:
            session.add(FinancialGoal(
                user_id=user_id,
                name=item.name,
                target_amount=truncate_to_db_precision(item.target_amount, FinancialGoal, "target_amount"),
                current_amount=truncate_to_db_precision(item.current_amount, FinancialGoal, "current_amount"),
                target_date=item.target_date,
                priority=item.priority,
                category=item.category,
                ))
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    logger.info("Goals replaced", user_id=user_id, count=len(goals))
    return await list_goals(session, user_id)
