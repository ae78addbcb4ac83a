"""Profile and family history schemas."""

import uuid
from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from evernest.models.enums import (
    AgeGroup,
    ChildStatus,
    FaithPreference,
    FontSize,
    StoryLength,
    StoryTheme,
)


class ProfileBase(BaseModel):
    """Base profile schema."""

    parent_one_name: str = Field(min_length=1, max_length=50)
    parent_two_name: str | None = Field(default=None, max_length=50)
    baby_nickname: str | None = Field(default=None, max_length=50)
    due_date: date | None = None
    birth_date: date | None = None
    faith_preference: FaithPreference = FaithPreference.NON_RELIGIOUS
    default_theme: StoryTheme | None = None
    default_length: StoryLength | None = None
    child_status: ChildStatus = ChildStatus.PRENATAL
    age_group: AgeGroup | None = None
    dark_mode: bool = False
    font_size: FontSize = FontSize.NORMAL


class ProfileUpsert(ProfileBase):
    """Schema for creating or replacing a profile."""

    pass


class ProfileUpdate(BaseModel):
    """Schema for partially updating a profile."""

    parent_one_name: str | None = Field(default=None, min_length=1, max_length=50)
    parent_two_name: str | None = Field(default=None, max_length=50)
    baby_nickname: str | None = Field(default=None, max_length=50)
    due_date: date | None = None
    birth_date: date | None = None
    faith_preference: FaithPreference | None = None
    default_theme: StoryTheme | None = None
    default_length: StoryLength | None = None
    child_status: ChildStatus | None = None
    age_group: AgeGroup | None = None
    dark_mode: bool | None = None
    font_size: FontSize | None = None


class Profile(ProfileBase):
    """Schema for profile output."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class FamilyHistoryEntry(BaseModel):
    """One relative's health note."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    relation: str = Field(min_length=1, max_length=100)
    condition: str = Field(min_length=1, max_length=255)
    notes: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("relation", "condition")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class FamilyHistory(BaseModel):
    """Full family history list."""

    entries: list[FamilyHistoryEntry]
