"""
Authentication Service

Provides password hashing/verification and session management.
Sessions live in process memory and are lost on restart.
"""
import secrets
from datetime import timedelta
from typing import Optional

import bcrypt
import structlog

from finovo.app.config import get_settings
from finovo.app.utils.datetime_utils import utcnow

logger = structlog.get_logger(__name__)

# bcrypt cost factor 12, passwords are cut at bcrypt's 72-byte limit
BCRYPT_ROUNDS = 12
BCRYPT_MAX_BYTES = 72


# =============================================================================
# Password Hashing
# =============================================================================

def _password_bytes(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode('utf-8'))
    except ValueError as e:
        logger.warning("Password verification failed", error=str(e))
        return False


# =============================================================================
# Session Management (In-Memory)
# =============================================================================

# Session storage: {session_id: {"user_id": str, "created_at": datetime, "expires_at": datetime}}
_sessions: dict[str, dict] = {}

SESSION_ID_LENGTH = 64  # 256 bits of entropy


def create_session(user_id: str, expire_hours: Optional[int] = None) -> str:
    """
    Create a new session for a user.

    Args:
        user_id: ID of the authenticated user
        expire_hours: Lifetime override (default: settings.SESSION_EXPIRE_HOURS)

    Returns:
        Session ID (to be stored in cookie)
    """
    if expire_hours is None:
        expire_hours = get_settings().SESSION_EXPIRE_HOURS
    session_id = secrets.token_urlsafe(SESSION_ID_LENGTH)
    now = utcnow()

    _sessions[session_id] = {
        "user_id": user_id,
        "created_at": now,
        "expires_at": now + timedelta(hours=expire_hours),
        }

    logger.info("Session created", user_id=user_id, session_id=session_id)
    return session_id


def get_session(session_id: str) -> Optional[dict]:
    """
    Get session data if valid and not expired.

    Expired sessions are removed on access.
    """
    session = _sessions.get(session_id)
    if not session:
        return None

    if utcnow() > session["expires_at"]:
        delete_session(session_id)
        return None

    return session


def get_user_id_from_session(session_id: str) -> Optional[str]:
    session = get_session(session_id)
    return session["user_id"] if session else None


def delete_session(session_id: str) -> bool:
    """
    Delete a session (logout).

    Returns:
        True if session was deleted, False if not found
    """
    if _sessions.pop(session_id, None) is not None:
        logger.info("Session deleted", session_id=session_id)
        return True
    return False


def delete_user_sessions(user_id: str) -> int:
    """
    Delete all sessions for a user (password reset, deactivation).

    Returns:
        Number of sessions deleted
    """
    to_delete = [sid for sid, data in _sessions.items() if data["user_id"] == user_id]
    for sid in to_delete:
        del _sessions[sid]

    if to_delete:
        logger.info("User sessions deleted", user_id=user_id, count=len(to_delete))
    return len(to_delete)


def cleanup_expired_sessions() -> int:
    """Remove all expired sessions. Returns how many were removed."""
    now = utcnow()
    to_delete = [sid for sid, data in _sessions.items() if now > data["expires_at"]]
    for sid in to_delete:
        del _sessions[sid]

    if to_delete:
        logger.info("Expired sessions cleaned up", count=len(to_delete))
    return len(to_delete)


def get_active_session_count() -> int:
    return len(_sessions)
