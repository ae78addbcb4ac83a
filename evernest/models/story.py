"""Story model for generated bedtime stories."""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from evernest.database import Base
from evernest.models.enums import ChildStatus
from evernest.models.mixins import TimestampMixin


class Story(Base, TimestampMixin):
    """A generated story, owned by exactly one user.

    The generation config is echoed onto the row so the library can be
    filtered and displayed without re-deriving it, and ``config_hash`` ties
    the row back to the request that produced it.
    """

    __tablename__ = "stories"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    profile_id: Mapped[int | None] = mapped_column(ForeignKey("user_profiles.id"), nullable=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    theme: Mapped[str] = mapped_column(String(50), nullable=False)
    length: Mapped[str] = mapped_column(String(20), nullable=False)
    faith_preference: Mapped[str] = mapped_column(String(50), nullable=False)
    parent_one_name: Mapped[str] = mapped_column(String(50), nullable=False)
    parent_two_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    baby_nickname: Mapped[str | None] = mapped_column(String(50), nullable=True)
    due_date: Mapped[str | None] = mapped_column(String(20), nullable=True)
    child_status: Mapped[str] = mapped_column(String(20), default=ChildStatus.PRENATAL.value)
    age_group: Mapped[str | None] = mapped_column(String(20), nullable=True)

    config_hash: Mapped[str] = mapped_column(String(32), nullable=False)
    word_count: Mapped[int] = mapped_column(Integer, default=0)
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relationships
    user: Mapped["User"] = relationship(back_populates="stories")  # noqa: F821
    profile: Mapped["UserProfile"] = relationship(back_populates="stories")  # noqa: F821

    __table_args__ = (
        UniqueConstraint("user_id", "config_hash", name="uq_stories_user_config_hash"),
        Index("idx_stories_user_id", "user_id"),
        Index("idx_stories_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Story(id={self.id}, user_id={self.user_id}, config_hash='{self.config_hash}')>"
