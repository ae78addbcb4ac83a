"""User profile model holding family details and reader settings."""

from datetime import date

from sqlalchemy import JSON, Boolean, Date, ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from evernest.database import Base
from evernest.models.enums import ChildStatus, FaithPreference, FontSize
from evernest.models.mixins import TimestampMixin


class UserProfile(Base, TimestampMixin):
    """Per-user family profile and preferences."""

    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), unique=True, nullable=False)
    parent_one_name: Mapped[str] = mapped_column(String(50), nullable=False)
    parent_two_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    baby_nickname: Mapped[str | None] = mapped_column(String(50), nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    faith_preference: Mapped[str] = mapped_column(
        String(50), default=FaithPreference.NON_RELIGIOUS.value
    )
    default_theme: Mapped[str | None] = mapped_column(String(50), nullable=True)
    default_length: Mapped[str | None] = mapped_column(String(50), nullable=True)
    child_status: Mapped[str] = mapped_column(String(20), default=ChildStatus.PRENATAL.value)
    age_group: Mapped[str | None] = mapped_column(String(20), nullable=True)
    dark_mode: Mapped[bool] = mapped_column(Boolean, default=False)
    font_size: Mapped[str] = mapped_column(String(20), default=FontSize.NORMAL.value)
    family_history: Mapped[list | None] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), nullable=True
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="profile")  # noqa: F821
    stories: Mapped[list["Story"]] = relationship(back_populates="profile")  # noqa: F821

    def __repr__(self) -> str:
        return f"<UserProfile(id={self.id}, user_id={self.user_id})>"
