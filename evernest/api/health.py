"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from evernest.database import get_db
from evernest.services.generator import StoryGenerator, get_story_generator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/db")
def db_health_check(db: Session = Depends(get_db)) -> dict[str, str]:
    """Database health check endpoint."""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return {"status": "unhealthy", "database": "unavailable"}


@router.get("/health/llm")
async def llm_health_check(
    generator: StoryGenerator = Depends(get_story_generator),
) -> dict[str, str | bool]:
    """Check if the story generation provider is configured and reachable."""
    is_available = await generator.health_check()
    return {
        "status": "healthy" if is_available else "unavailable",
        "model": generator.model,
        "configured": generator.is_configured,
        "available": is_available,
    }
