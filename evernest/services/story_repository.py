"""Persistence for stories."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from evernest.models.story import Story
from evernest.services.errors import DuplicateStoryError

logger = logging.getLogger(__name__)


class StoryRepository:
    """Story queries on top of a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_user_and_fingerprint(self, user_id: int, config_hash: str) -> Story | None:
        return (
            self.db.query(Story)
            .filter(Story.user_id == user_id)
            .filter(Story.config_hash == config_hash)
            .first()
        )

    def find_by_id(self, story_id: int) -> Story | None:
        return self.db.query(Story).filter(Story.id == story_id).first()

    def find_for_user(self, user_id: int, story_id: int) -> Story | None:
        return (
            self.db.query(Story)
            .filter(Story.id == story_id)
            .filter(Story.user_id == user_id)
            .first()
        )

    def insert(self, story: Story) -> Story:
        """Persist a new story.

        Raises:
            DuplicateStoryError: if the user already has a story with this config_hash
        """
        self.db.add(story)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Insert conflict for user {story.user_id}, hash {story.config_hash}: {e.orig}")
            raise DuplicateStoryError(story.user_id, story.config_hash) from e
        self.db.refresh(story)
        return story

    def update_favorite(self, story_id: int, value: bool) -> Story | None:
        story = self.find_by_id(story_id)
        if not story:
            return None
        story.is_favorite = value
        self.db.commit()
        self.db.refresh(story)
        return story

    def delete(self, story_id: int) -> bool:
        story = self.find_by_id(story_id)
        if not story:
            return False
        self.db.delete(story)
        self.db.commit()
        return True

    def list_by_user(
        self,
        user_id: int,
        page: int = 1,
        page_size: int = 20,
        favorites_only: bool = False,
    ) -> tuple[list[Story], int]:
        """Return one page of a user's stories, newest first, and the total count."""
        query = self.db.query(Story).filter(Story.user_id == user_id)
        if favorites_only:
            query = query.filter(Story.is_favorite.is_(True))

        total = query.count()
        stories = (
            query.order_by(Story.created_at.desc(), Story.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return stories, total
