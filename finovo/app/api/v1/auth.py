"""
Authentication API Endpoints

Provides registration, login, logout, and session management, plus the
dependencies other routers use to resolve the signed-in user.
"""
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Response, Request, Depends
from sqlalchemy.ext.asyncio import AsyncSession

import structlog

from finovo.app.config import get_settings
from finovo.app.db.session import get_session_generator
from finovo.app.db.models import User, UserProfile
from finovo.app.schemas.auth import (
    AuthLoginRequest,
    AuthLoginResponse,
    AuthLogoutResponse,
    AuthMeResponse,
    AuthUserResponse,
    AuthRegisterRequest,
    AuthRegisterResponse,
)
from finovo.app.services.auth_service import (
    verify_password,
    create_session,
    get_user_id_from_session,
    delete_session,
)
from finovo.app.services import profile_service, user_service
from finovo.app.services.user_context import UserContext, is_profile_complete

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

# Session cookie configuration
SESSION_COOKIE_NAME = "session"
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "lax"
SESSION_COOKIE_SECURE = False  # Set to True in production with HTTPS

LOGIN_FAILED_MESSAGE = "Invalid email or password. Please check your credentials and try again."


def get_session_cookie(request: Request) -> str | None:
    """Extract session cookie from request."""
    return request.cookies.get(SESSION_COOKIE_NAME)


def _user_response(user: User, profile: Optional[UserProfile]) -> AuthUserResponse:
    return AuthUserResponse(
        id=user.id,
        email=user.email,
        name=profile.name if profile is not None else "",
        is_active=user.is_active,
        is_superuser=user.is_superuser,
        profile_complete=is_profile_complete(profile),
        created_at=user.created_at,
    )


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_session_generator)
) -> User:
    """
    Dependency to get current authenticated user.
    Raises 401 if not authenticated.
    """
    session_id = get_session_cookie(request)

    if not session_id:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user_id = get_user_id_from_session(session_id)

    if not user_id:
        raise HTTPException(status_code=401, detail="Session expired or invalid")

    user = await user_service.get_user_by_id(session, user_id)

    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    if not user.is_active:
        raise HTTPException(status_code=401, detail="User account is disabled")

    return user


async def get_user_context(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session_generator)
) -> UserContext:
    """
    Dependency building the per-request UserContext.

    The profile is loaded with the bounded retry and created empty if it
    never shows up.
    """
    profile = await profile_service.ensure_profile(session, user)
    goals = await profile_service.list_goals(session, user.id)
    return UserContext(user=user, profile=profile, goals=tuple(goals))


@router.post("/login", response_model=AuthLoginResponse)
async def login(
    request: AuthLoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_session_generator)
):
    """
    Authenticate user and create session.

    Unknown email and wrong password produce the same message.
    Returns user info and sets session cookie.
    """
    user = await user_service.get_user_by_email(session, request.email)

    if not user or not verify_password(request.password, user.hashed_password):
        logger.warning("Login failed", email=request.email, user_found=user is not None)
        raise HTTPException(status_code=401, detail=LOGIN_FAILED_MESSAGE)

    if not user.is_active:
        logger.warning("Login failed: user inactive", email=request.email)
        raise HTTPException(status_code=401, detail="Account is disabled")

    expire_hours = get_settings().SESSION_EXPIRE_HOURS
    session_id = create_session(user.id, expire_hours)

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_id,
        max_age=expire_hours * 60 * 60,
        httponly=SESSION_COOKIE_HTTPONLY,
        samesite=SESSION_COOKIE_SAMESITE,
        secure=SESSION_COOKIE_SECURE,
    )

    logger.info("User logged in", user_id=user.id, email=user.email)

    profile = await profile_service.get_profile(session, user.id)
    return AuthLoginResponse(user=_user_response(user, profile), message="Login successful")


@router.post("/logout", response_model=AuthLogoutResponse)
async def logout(
    request: Request,
    response: Response,
):
    """
    Logout current user and destroy session.
    """
    session_id = get_session_cookie(request)

    if session_id:
        delete_session(session_id)

    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=SESSION_COOKIE_HTTPONLY,
        samesite=SESSION_COOKIE_SAMESITE,
        secure=SESSION_COOKIE_SECURE,
    )

    return AuthLogoutResponse(message="Logged out successfully")


@router.get("/me", response_model=AuthMeResponse)
async def get_me(ctx: UserContext = Depends(get_user_context)):
    """
    Get current authenticated user info, including profile completeness.
    """
    return AuthMeResponse(user=_user_response(ctx.user, ctx.profile))


@router.post("/register", response_model=AuthRegisterResponse, status_code=201)
async def register(
    request: AuthRegisterRequest,
    session: AsyncSession = Depends(get_session_generator)
):
    """
    Register a new user together with an empty profile.

    The client logs in afterwards.
    """
    user, error = await user_service.create_user(
        session,
        email=request.email,
        password=request.password,
        name=request.name,
        is_superuser=False,
        is_active=True,
    )

    if not user:
        raise HTTPException(status_code=400, detail=error)

    logger.info("User registered", user_id=user.id, email=user.email)

    profile = await profile_service.get_profile(session, user.id)
    return AuthRegisterResponse(user=_user_response(user, profile), message="Registration successful")
