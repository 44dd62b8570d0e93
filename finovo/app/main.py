"""
Finovo FastAPI application.
Main entry point for the backend API.
"""
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from finovo.app.config import get_settings, set_test_mode, is_test_mode

# Check for --test flag in command line arguments
# This must be done before any imports that might use settings
if "--test" in sys.argv:
    set_test_mode(True)
    print("[Finovo] Test mode enabled (--test flag detected)")
    sys.argv.remove("--test")  # Remove flag so uvicorn doesn't complain

from finovo.app.api.v1.router import router as api_v1_router  # noqa: E402
from finovo.app.db.session import ensure_database_exists  # noqa: E402
from finovo.app.logging_config import configure_logging, get_logger  # noqa: E402

# Get settings after test mode is set
settings = get_settings()

configure_logging(settings.LOG_LEVEL, enable_file_logging=settings.LOG_TO_FILE)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan context manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(
        "Starting Finovo",
        version=settings.VERSION,
        database_url=settings.DATABASE_URL.split("///")[-1],  # Hide full path in logs
        test_mode=is_test_mode(),
        )

    ensure_database_exists()

    yield
    # Shutdown
    logger.info("Shutting down Finovo")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    lifespan=lifespan,
    )

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    )

# Mount API v1 router
app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """
    Root endpoint.
    Provides basic API information.
    """
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "currency": settings.CURRENCY,
        "docs": f"{settings.API_V1_PREFIX}/docs",
        }


if __name__ == "__main__":
    import uvicorn

    # python -m finovo.app.main [--test]
    uvicorn.run(app, host="0.0.0.0", port=settings.TEST_PORT if is_test_mode() else settings.PORT)
