"""
Test Database Configuration

Manages test database setup and teardown.
Tests use a separate database to avoid corrupting development data.

Every test module calls setup_test_database() BEFORE importing app modules,
because the engines are created from settings at import time.
"""
import os
from pathlib import Path

# Project root and default test database (absolute, so the working directory does not matter)
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_TEST_DB_PATH = PROJECT_ROOT / "finovo" / "data" / "sqlite" / "test_app.db"

# Use environment override if present (allows CI or user to change path)
TEST_DATABASE_URL = os.environ.get("FINOVO_TEST_DATABASE_URL", f"sqlite:///{DEFAULT_TEST_DB_PATH}")

# sqlite:////abs/path -> /abs/path ; sqlite:///./rel/path -> rel/path
if TEST_DATABASE_URL.startswith("sqlite:///"):
    TEST_DB_PATH = Path(TEST_DATABASE_URL.replace("sqlite:///", "", 1))
else:
    TEST_DB_PATH = Path(TEST_DATABASE_URL)

DB_DIR = TEST_DB_PATH.parent


def setup_test_database() -> Path:
    """
    Configure environment to use test database.
    Must be called BEFORE importing any app modules that use DATABASE_URL.

    Returns:
        Path: Path to test database
    """
    DB_DIR.mkdir(parents=True, exist_ok=True)

    os.environ["DATABASE_URL"] = TEST_DATABASE_URL
    os.environ["TEST_DATABASE_URL"] = TEST_DATABASE_URL
    os.environ["LOG_TO_FILE"] = "0"

    # Same effect as the --test flag
    from finovo.app.config import set_test_mode
    set_test_mode(True)

    return TEST_DB_PATH


def cleanup_test_database():
    """Remove test database after tests complete."""
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


def verify_test_database() -> tuple[bool, str]:
    """
    Verify that we're using the test database.

    Returns:
        tuple: (is_test_db, database_url)
    """
    from finovo.app.config import get_settings

    db_url = get_settings().DATABASE_URL
    return db_url == TEST_DATABASE_URL, db_url


def initialize_test_database(print_func=None) -> bool:
    """
    Initialize test database with safety checks.

    1. Verifies we're using test database (not development)
    2. Creates missing tables (via ensure_database_exists)

    Returns:
        bool: True if initialization successful and using test DB
    """
    from finovo.app.db.session import ensure_database_exists

    if print_func is None:
        print_func = print

    is_test, db_url = verify_test_database()
    if not is_test:
        print_func("⚠️  DANGER: Not using test database!")
        print_func(f"Current DATABASE_URL: {db_url}")
        print_func(f"Expected: {TEST_DATABASE_URL}")
        return False

    print_func(f"✅ Using test database: {db_url}")
    ensure_database_exists()
    return True
