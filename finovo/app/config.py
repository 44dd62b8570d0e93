"""
Application configuration module.
Loads environment variables and provides application-wide settings.
"""
import os
from pathlib import Path

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

# Get project root (two levels up from this file)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Global flag to indicate test mode (set via --test flag or FINOVO_TEST_MODE env var)
_test_mode = os.environ.get("FINOVO_TEST_MODE", "").lower() in ("1", "true", "yes")


def set_test_mode(enabled: bool = True):
    """
    Enable/disable test mode globally.
    When enabled, DATABASE_URL will automatically use TEST_DATABASE_URL.

    Args:
        enabled: True to enable test mode, False to disable
    """
    global _test_mode
    _test_mode = enabled
    os.environ["FINOVO_TEST_MODE"] = "1" if enabled else "0"


def is_test_mode() -> bool:
    """Check if test mode is enabled."""
    return _test_mode


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env file.
    (Note: Environment variables take precedence over .env file)
    """
    # Database
    DATABASE_URL: str = "sqlite:///./finovo/data/sqlite/app.db"
    TEST_DATABASE_URL: str = "sqlite:///./finovo/data/sqlite/test_app.db"  # Same dir as app.db

    # API
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Finovo"
    VERSION: str = "0.1.0"

    # Server
    PORT: int = 8000  # Main server port (production/development)
    TEST_PORT: int = 8001  # Test server port (used during automated tests)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True

    # Display
    CURRENCY: str = "INR"  # Currency label used when printing amounts

    # Auth
    SESSION_EXPIRE_HOURS: int = 24

    # Profile lookup after sign-up (row may appear after the account)
    PROFILE_LOOKUP_MAX_ATTEMPTS: int = 5
    PROFILE_LOOKUP_DELAY_SECONDS: float = 1.5
    PROFILE_LOOKUP_BACKOFF_FACTOR: float = 1.0

    # CORS (for frontend development)
    BACKEND_CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    model_config = ConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        case_sensitive=True,
        env_file_encoding='utf-8',
        extra="ignore",
        )


def get_settings() -> Settings:
    """
    Get settings instance.

    In test mode, DATABASE_URL is automatically overridden with TEST_DATABASE_URL.

    Returns:
        Settings: Application settings
    """
    settings = Settings()

    # Override DATABASE_URL if in test mode
    if is_test_mode():
        settings.DATABASE_URL = settings.TEST_DATABASE_URL

    return settings
