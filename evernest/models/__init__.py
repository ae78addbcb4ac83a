"""SQLAlchemy ORM models."""

from evernest.models.profile import UserProfile
from evernest.models.story import Story
from evernest.models.user import User

__all__ = [
    "Story",
    "User",
    "UserProfile",
]
