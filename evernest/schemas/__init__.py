"""Pydantic schemas for request/response validation."""

from evernest.schemas.profile import (
    FamilyHistory,
    FamilyHistoryEntry,
    Profile,
    ProfileUpdate,
    ProfileUpsert,
)
from evernest.schemas.story import (
    CreateStoryResponse,
    DuplicateCheck,
    DuplicateCheckRequest,
    Story,
    StoryCreate,
    StoryGenerationConfig,
    StoryList,
)
from evernest.schemas.user import User, UserCreate, UserUpdate

__all__ = [
    "CreateStoryResponse",
    "DuplicateCheck",
    "DuplicateCheckRequest",
    "FamilyHistory",
    "FamilyHistoryEntry",
    "Profile",
    "ProfileUpdate",
    "ProfileUpsert",
    "Story",
    "StoryCreate",
    "StoryGenerationConfig",
    "StoryList",
    "User",
    "UserCreate",
    "UserUpdate",
]
