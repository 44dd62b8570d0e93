"""
Tests for user_service and auth_service.

Covers account creation (with its profile row), lookups, password reset,
activation and the in-memory session store.
"""
import sys
from datetime import timedelta
from pathlib import Path

import pytest
import pytest_asyncio

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Setup test database BEFORE importing app modules
from finovo.test_scripts.test_db_config import setup_test_database, initialize_test_database

setup_test_database()

from sqlalchemy.ext.asyncio import AsyncSession

from finovo.app.db.session import get_async_engine
from finovo.app.services import auth_service, profile_service, user_service
from finovo.app.utils.datetime_utils import utcnow
from finovo.test_scripts.test_utils import unique_email


# ============================================================================
# PYTEST FIXTURES
# ============================================================================

@pytest.fixture(scope="module")
def engine():
    """Create tables once, then hand out the async engine."""
    assert initialize_test_database(), "Refusing to run against a non-test database"
    return get_async_engine()


@pytest_asyncio.fixture
async def session(engine):
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session
        await session.rollback()


# ============================================================================
# USER SERVICE
# ============================================================================

class TestCreateUser:

    @pytest.mark.asyncio
    async def test_create_user_also_creates_profile(self, session):
        email = unique_email("create")

        user, error = await user_service.create_user(session, email, "password123", name="Asha")

        assert error is None
        assert user.id and len(user.id) == 32
        profile = await profile_service.get_profile(session, user.id)
        assert profile is not None
        assert profile.name == "Asha"
        assert profile.monthly_income is None

    @pytest.mark.asyncio
    async def test_default_name_is_email_local_part(self, session):
        email = unique_email("noname")

        user, _ = await user_service.create_user(session, email, "password123")

        profile = await profile_service.get_profile(session, user.id)
        assert profile.name == email.split("@")[0]

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected_case_insensitively(self, session):
        email = unique_email("dup")
        await user_service.create_user(session, email, "password123")

        user, error = await user_service.create_user(session, email.upper(), "password456")

        assert user is None
        assert error == "Email already registered"

    @pytest.mark.asyncio
    async def test_password_is_hashed(self, session):
        user, _ = await user_service.create_user(session, unique_email("hash"), "password123")

        assert user.hashed_password != "password123"
        assert auth_service.verify_password("password123", user.hashed_password)
        assert not auth_service.verify_password("wrong-password", user.hashed_password)


class TestUserLookups:

    @pytest.mark.asyncio
    async def test_get_by_email_and_id(self, session):
        email = unique_email("lookup")
        user, _ = await user_service.create_user(session, email, "password123")

        assert (await user_service.get_user_by_email(session, f"  {email.upper()} ")).id == user.id
        assert (await user_service.get_user_by_id(session, user.id)).email == email
        assert await user_service.get_user_by_id(session, "0" * 32) is None

    @pytest.mark.asyncio
    async def test_list_users_contains_new_user(self, session):
        user, _ = await user_service.create_user(session, unique_email("list"), "password123")

        users = await user_service.list_users(session)

        assert user.id in {u.id for u in users}


class TestAccountMaintenance:

    @pytest.mark.asyncio
    async def test_reset_password_drops_sessions(self, session):
        email = unique_email("reset")
        user, _ = await user_service.create_user(session, email, "password123")
        session_id = auth_service.create_session(user.id)

        success, error = await user_service.reset_password(session, email, "newpassword1")

        assert success and error is None
        assert auth_service.get_session(session_id) is None
        refreshed = await user_service.get_user_by_email(session, email)
        assert auth_service.verify_password("newpassword1", refreshed.hashed_password)

    @pytest.mark.asyncio
    async def test_reset_password_unknown_user(self, session):
        success, error = await user_service.reset_password(session, unique_email("ghost"), "whatever1")

        assert not success
        assert "not found" in error

    @pytest.mark.asyncio
    async def test_deactivate_and_activate(self, session):
        email = unique_email("active")
        user, _ = await user_service.create_user(session, email, "password123")
        auth_service.create_session(user.id)

        assert (await user_service.set_user_active(session, email, False)) == (True, None)
        assert (await user_service.get_user_by_email(session, email)).is_active is False
        assert auth_service.delete_user_sessions(user.id) == 0

        assert (await user_service.set_user_active(session, email, True)) == (True, None)
        assert (await user_service.get_user_by_email(session, email)).is_active is True


# ============================================================================
# SESSION STORE
# ============================================================================

class TestSessionStore:

    def test_session_round_trip(self):
        session_id = auth_service.create_session("a" * 32)

        assert auth_service.get_user_id_from_session(session_id) == "a" * 32
        assert auth_service.delete_session(session_id) is True
        assert auth_service.get_user_id_from_session(session_id) is None
        assert auth_service.delete_session(session_id) is False

    def test_expired_session_is_removed_on_access(self):
        session_id = auth_service.create_session("b" * 32)
        auth_service._sessions[session_id]["expires_at"] = utcnow() - timedelta(seconds=1)

        assert auth_service.get_session(session_id) is None
        assert session_id not in auth_service._sessions

    def test_cleanup_expired_sessions(self):
        live = auth_service.create_session("c" * 32)
        stale = auth_service.create_session("c" * 32)
        auth_service._sessions[stale]["expires_at"] = utcnow() - timedelta(hours=1)

        assert auth_service.cleanup_expired_sessions() >= 1
        assert auth_service.get_session(live) is not None
        auth_service.delete_user_sessions("c" * 32)

    def test_malformed_hash_does_not_verify(self):
        assert auth_service.verify_password("password123", "not-a-bcrypt-hash") is False
