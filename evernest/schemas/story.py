"""Story schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from evernest.models.enums import AgeGroup, ChildStatus, FaithPreference, StoryLength, StoryTheme
from evernest.services.text import estimate_reading_time

NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s\-']+$")
NAME_MAX_LENGTH = 50


def _check_name(value: str, label: str) -> str:
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(f"{label} usually isn't that long")
    if not NAME_PATTERN.match(value):
        raise ValueError("Name contains invalid characters")
    return value


class StoryGenerationConfig(BaseModel):
    """Everything needed to request one story."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    theme: StoryTheme
    length: StoryLength
    faith_preference: FaithPreference
    parent_one_name: str
    parent_two_name: str | None = None
    baby_nickname: str | None = None
    due_date: str | None = Field(default=None, max_length=20)
    child_status: ChildStatus = ChildStatus.PRENATAL
    age_group: AgeGroup | None = None

    @field_validator("parent_one_name")
    @classmethod
    def validate_parent_one_name(cls, v: str) -> str:
        if not v:
            raise ValueError("Parent name is required")
        return _check_name(v, "Parent name")

    @field_validator("parent_two_name", "baby_nickname", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("parent_two_name")
    @classmethod
    def validate_parent_two_name(cls, v: str | None) -> str | None:
        return _check_name(v, "Parent name") if v is not None else None

    @field_validator("baby_nickname")
    @classmethod
    def validate_baby_nickname(cls, v: str | None) -> str | None:
        return _check_name(v, "Baby nickname") if v is not None else None


class StoryCreate(BaseModel):
    """Request body for generating a story."""

    config: StoryGenerationConfig


class Story(BaseModel):
    """Schema for story output."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    profile_id: int | None = None
    title: str
    content: str
    theme: StoryTheme
    length: StoryLength
    faith_preference: FaithPreference
    parent_one_name: str
    parent_two_name: str | None = None
    baby_nickname: str | None = None
    due_date: str | None = None
    child_status: ChildStatus
    age_group: AgeGroup | None = None
    word_count: int
    is_favorite: bool
    created_at: datetime

    @computed_field
    @property
    def estimated_reading_minutes(self) -> int:
        return estimate_reading_time(self.word_count)


class CreateStoryResponse(BaseModel):
    """Result of a story creation request."""

    story: Story
    is_duplicate: bool
    existing_story_id: int | None = None


class StoryList(BaseModel):
    """Paginated slice of a user's library."""

    stories: list[Story]
    total: int
    page: int
    page_size: int


class DuplicateCheckRequest(BaseModel):
    """Request body for a duplicate check."""

    config: StoryGenerationConfig


class DuplicateCheck(BaseModel):
    """Whether a config already produced a story for the user."""

    config_hash: str
    is_duplicate: bool
    existing_story_id: int | None = None
