"""Shared FastAPI dependencies: identity, services and rate limiting."""

import logging

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from evernest.config import get_settings
from evernest.database import get_db
from evernest.models.user import User
from evernest.services.generator import StoryGenerator, get_story_generator
from evernest.services.rate_limiter import RateLimiter, client_id_from_headers
from evernest.services.story_repository import StoryRepository
from evernest.services.story_service import StoryService

logger = logging.getLogger(__name__)


def get_current_user(
    x_user_id: int | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the user set by the upstream auth layer in the X-User-Id header."""
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    user = db.query(User).filter(User.id == x_user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def get_story_service(
    db: Session = Depends(get_db),
    generator: StoryGenerator = Depends(get_story_generator),
) -> StoryService:
    return StoryService(StoryRepository(db), generator)


def get_rate_limiter(request: Request) -> RateLimiter:
    """The process-wide limiter created at startup."""
    return request.app.state.rate_limiter


def get_client_id(request: Request) -> str:
    if get_settings().trust_proxy_headers:
        return client_id_from_headers(request.headers.get("x-forwarded-for"))
    return request.client.host if request.client else client_id_from_headers(None)


def enforce_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> None:
    """Reject the request with 429 when the client is over its limit."""
    client_id = get_client_id(request)
    if limiter.allow(client_id):
        return

    retry_after = limiter.retry_after(client_id)
    logger.warning(f"Rate limit exceeded for client {client_id}; retry in {retry_after}s")
    raise HTTPException(
        status_code=429,
        detail={
            "error": "Too many requests",
            "message": "Please wait a moment before creating another story.",
        },
        headers={"Retry-After": str(retry_after)},
    )
