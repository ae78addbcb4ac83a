"""Story API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from evernest.api.dependencies import enforce_rate_limit, get_current_user, get_story_service
from evernest.config import get_app_config
from evernest.models.user import User as UserModel
from evernest.schemas.story import (
    CreateStoryResponse,
    DuplicateCheck,
    DuplicateCheckRequest,
    Story,
    StoryCreate,
    StoryList,
)
from evernest.services.errors import GenerationError
from evernest.services.fingerprint import compute_config_hash
from evernest.services.story_service import StoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/stories", tags=["stories"])


@router.post("/", response_model=CreateStoryResponse, dependencies=[Depends(enforce_rate_limit)])
async def create_story(
    request: StoryCreate,
    user: UserModel = Depends(get_current_user),
    service: StoryService = Depends(get_story_service),
) -> CreateStoryResponse:
    """Generate a story, or return the existing one for an identical request."""
    profile_id = user.profile.id if user.profile else None
    try:
        result = await service.create_story(user.id, request.config, profile_id=profile_id)
    except GenerationError as e:
        logger.error(f"Story generation failed for user {user.id} ({e.reason}): {e.detail}")
        raise HTTPException(status_code=502, detail=e.user_message) from e

    return CreateStoryResponse(
        story=Story.model_validate(result.story),
        is_duplicate=result.is_duplicate,
        existing_story_id=result.existing_story_id,
    )


@router.get("/", response_model=StoryList)
def list_stories(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    favorites: bool = False,
    user: UserModel = Depends(get_current_user),
    service: StoryService = Depends(get_story_service),
) -> StoryList:
    """List the current user's stories, newest first."""
    library = get_app_config().library
    if page_size is None:
        page_size = library.get("default_page_size", 20)
    page_size = min(page_size, library.get("max_page_size", 100))

    stories, total = service.get_user_stories(
        user.id, page=page, page_size=page_size, favorites_only=favorites
    )
    return StoryList(
        stories=[Story.model_validate(s) for s in stories],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("/check-duplicate", response_model=DuplicateCheck)
def check_duplicate(
    request: DuplicateCheckRequest,
    user: UserModel = Depends(get_current_user),
    service: StoryService = Depends(get_story_service),
) -> DuplicateCheck:
    """Report whether this config already produced a story for the user."""
    return service.check_for_duplicate(user.id, compute_config_hash(request.config))


@router.get("/{story_id}", response_model=Story)
def get_story(
    story_id: int,
    user: UserModel = Depends(get_current_user),
    service: StoryService = Depends(get_story_service),
) -> Story:
    """Get one of the current user's stories."""
    story = service.get_story_by_id(user.id, story_id)
    if not story:
        raise HTTPException(status_code=404, detail="Story not found")
    return Story.model_validate(story)


@router.patch("/{story_id}", response_model=Story)
def toggle_favorite(
    story_id: int,
    user: UserModel = Depends(get_current_user),
    service: StoryService = Depends(get_story_service),
) -> Story:
    """Flip a story's favorite flag."""
    story = service.toggle_favorite(user.id, story_id)
    if not story:
        raise HTTPException(status_code=404, detail="Story not found")
    return Story.model_validate(story)


@router.delete("/{story_id}", status_code=204)
def delete_story(
    story_id: int,
    user: UserModel = Depends(get_current_user),
    service: StoryService = Depends(get_story_service),
) -> None:
    """Delete a story."""
    if not service.delete_story(user.id, story_id):
        raise HTTPException(status_code=404, detail="Story not found")
