"""
User Service

Business logic for user management, used by both API and CLI.
Every account is created together with its (empty) UserProfile row.
"""
from typing import Optional

from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

import structlog

from finovo.app.db.models import User, UserProfile
from finovo.app.services.auth_service import hash_password, delete_user_sessions
from finovo.app.utils.datetime_utils import utcnow

logger = structlog.get_logger(__name__)


def normalize_email(email: str) -> str:
    """Emails are stored and looked up lowercase, without surrounding spaces."""
    return email.strip().lower()


def default_name_for(email: str) -> str:
    """Display name used when sign-up gives none: the email local part."""
    return normalize_email(email).split("@", 1)[0]


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    """
    Get user by email (case-insensitive).

    Returns:
        User or None if not found
    """
    stmt = select(User).where(User.email == normalize_email(email))
    result = await session.execute(stmt)
    return result.scalars().first()


async def get_user_by_id(session: AsyncSession, user_id: str) -> Optional[User]:
    stmt = select(User).where(User.id == user_id)
    result = await session.execute(stmt)
    return result.scalars().first()


async def list_users(session: AsyncSession) -> list[User]:
    """List all users, oldest first."""
    stmt = select(User).order_by(User.created_at, User.email)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def create_user(
    session: AsyncSession,
    email: str,
    password: str,
    name: str = "",
    is_superuser: bool = False,
    is_active: bool = True,
) -> tuple[Optional[User], Optional[str]]:
    """
    Create a new user and its profile row in a single commit.

    Args:
        session: Database session
        email: Email address (unique, case-insensitive)
        password: Plain text password (will be hashed)
        name: Display name; the email local part when blank
        is_superuser: Whether user is superuser
        is_active: Whether user is active

    Returns:
        Tuple of (User, None) on success or (None, error_message) on failure
    """
    email = normalize_email(email)
    existing = await get_user_by_email(session, email)
    if existing:
        return None, "Email already registered"

    user = User(
        email=email,
        hashed_password=hash_password(password),
        is_active=is_active,
        is_superuser=is_superuser,
    )
    profile = UserProfile(user_id=user.id, name=name.strip() or default_name_for(email))

    session.add(user)
    session.add(profile)
    await session.commit()
    await session.refresh(user)

    logger.info("User created", user_id=user.id, email=email, is_superuser=is_superuser)
    return user, None


async def reset_password(
    session: AsyncSession,
    email: str,
    new_password: str,
) -> tuple[bool, Optional[str]]:
    """
    Reset a user's password and drop their sessions.

    Returns:
        Tuple of (success, error_message)
    """
    user = await get_user_by_email(session, email)
    if not user:
        return False, f"User '{email}' not found"

    user.hashed_password = hash_password(new_password)
    user.updated_at = utcnow()
    session.add(user)
    await session.commit()

    delete_user_sessions(user.id)

    logger.info("Password reset", user_id=user.id, email=user.email)
    return True, None


async def set_user_active(
    session: AsyncSession,
    email: str,
    active: bool,
) -> tuple[bool, Optional[str]]:
    """
    Activate or deactivate a user. Deactivation also drops their sessions.

    Returns:
        Tuple of (success, error_message)
    """
    user = await get_user_by_email(session, email)
    if not user:
        return False, f"User '{email}' not found"

    user.is_active = active
    user.updated_at = utcnow()
    session.add(user)
    await session.commit()

    if not active:
        delete_user_sessions(user.id)

    status = "activated" if active else "deactivated"
    logger.info(f"User {status}", user_id=user.id, email=user.email)
    return True, None
