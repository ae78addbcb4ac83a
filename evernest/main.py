"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from alembic import command
from alembic.config import Config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from evernest import __version__
from evernest.api import health_router, profile_router, stories_router, users_router
from evernest.config import get_app_config, get_settings
from evernest.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)
settings = get_settings()
app_config = get_app_config()


def run_migrations() -> None:
    """Run alembic migrations on startup."""
    if settings.is_testing:
        logger.info("Skipping migrations in test mode")
        return

    try:
        alembic_cfg = Config("alembic.ini")
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations completed successfully")
    except Exception as e:
        logger.error(f"Failed to run migrations: {e}")
        raise


def create_rate_limiter() -> RateLimiter:
    """Build the story creation limiter from config.yaml."""
    limits = app_config.rate_limit
    return RateLimiter(
        max_requests=int(limits.get("max_requests", 5)),
        window_seconds=float(limits.get("window_seconds", 60)),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    run_migrations()
    yield


app = FastAPI(
    title="EverNest API",
    description="Personalized bedtime stories for expectant and new parents",
    version=__version__,
    lifespan=lifespan,
)

# One limiter per process; counters are not shared between workers
app.state.rate_limiter = create_rate_limiter()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict to specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(users_router)
app.include_router(profile_router)
app.include_router(stories_router)


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": "EverNest API",
        "version": __version__,
        "docs": "/docs",
    }
