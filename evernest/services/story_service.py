"""Story creation and library management."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from evernest.models.story import Story
from evernest.schemas.story import DuplicateCheck, StoryGenerationConfig
from evernest.services.errors import DuplicateStoryError, InvalidStoryConfigError, UnauthorizedError
from evernest.services.fingerprint import compute_config_hash
from evernest.services.generator import StoryGenerator
from evernest.services.prompt_builder import build_prompt
from evernest.services.story_repository import StoryRepository
from evernest.services.text import count_words, normalize_punctuation_spacing

logger = logging.getLogger(__name__)


@dataclass
class CreateStoryResult:
    """Outcome of a create_story call."""

    story: Story
    is_duplicate: bool
    existing_story_id: int | None = None


class StoryService:
    """Coordinates fingerprinting, generation and persistence of stories."""

    def __init__(self, repository: StoryRepository, generator: StoryGenerator) -> None:
        self.repository = repository
        self.generator = generator

    def check_for_duplicate(self, user_id: int, config_hash: str) -> DuplicateCheck:
        """Check if the user already has a story generated from this config hash."""
        existing = self.repository.find_by_user_and_fingerprint(user_id, config_hash)
        return DuplicateCheck(
            config_hash=config_hash,
            is_duplicate=existing is not None,
            existing_story_id=existing.id if existing else None,
        )

    async def create_story(
        self,
        user_id: int | None,
        config: StoryGenerationConfig | Mapping[str, Any],
        profile_id: int | None = None,
    ) -> CreateStoryResult:
        """Return the user's story for a config, generating it on first request.

        An existing story with the same fingerprint is returned as a duplicate
        without calling the generator. Otherwise the generator runs once and
        the result is stored; nothing is written if generation fails.

        Raises:
            UnauthorizedError: if no user id was supplied
            InvalidStoryConfigError: if the config is not valid
            GenerationError: if the provider call fails
        """
        if not user_id:
            raise UnauthorizedError("A signed-in user is required to create stories")
        config = self._validate(config)

        config_hash = compute_config_hash(config)
        existing = self.repository.find_by_user_and_fingerprint(user_id, config_hash)
        if existing:
            logger.info(f"Returning existing story {existing.id} for user {user_id} (hash {config_hash})")
            return CreateStoryResult(story=existing, is_duplicate=True, existing_story_id=existing.id)

        prompt = build_prompt(config)
        generated = await self.generator.generate(prompt)
        content = normalize_punctuation_spacing(generated.content)

        story = Story(
            user_id=user_id,
            profile_id=profile_id,
            title=generated.title.strip(),
            content=content,
            theme=config.theme.value,
            length=config.length.value,
            faith_preference=config.faith_preference.value,
            parent_one_name=config.parent_one_name,
            parent_two_name=config.parent_two_name,
            baby_nickname=config.baby_nickname,
            due_date=config.due_date,
            child_status=config.child_status.value,
            age_group=config.age_group.value if config.age_group else None,
            config_hash=config_hash,
            word_count=count_words(content),
        )

        try:
            story = self.repository.insert(story)
        except DuplicateStoryError:
            # A concurrent identical request stored its story first
            winner = self.repository.find_by_user_and_fingerprint(user_id, config_hash)
            if winner is None:
                raise
            logger.info(f"Lost insert race for user {user_id}; returning story {winner.id}")
            return CreateStoryResult(story=winner, is_duplicate=True, existing_story_id=winner.id)

        logger.info(f"Created story {story.id} for user {user_id} ({story.word_count} words)")
        return CreateStoryResult(story=story, is_duplicate=False)

    def get_user_stories(
        self,
        user_id: int,
        page: int = 1,
        page_size: int = 20,
        favorites_only: bool = False,
    ) -> tuple[list[Story], int]:
        """List a user's stories, newest first."""
        return self.repository.list_by_user(
            user_id, page=page, page_size=page_size, favorites_only=favorites_only
        )

    def get_story_by_id(self, user_id: int, story_id: int) -> Story | None:
        return self.repository.find_for_user(user_id, story_id)

    def toggle_favorite(self, user_id: int, story_id: int) -> Story | None:
        story = self.repository.find_for_user(user_id, story_id)
        if not story:
            return None
        return self.repository.update_favorite(story.id, not story.is_favorite)

    def delete_story(self, user_id: int, story_id: int) -> bool:
        story = self.repository.find_for_user(user_id, story_id)
        if not story:
            return False
        return self.repository.delete(story.id)

    @staticmethod
    def _validate(config: StoryGenerationConfig | Mapping[str, Any]) -> StoryGenerationConfig:
        if isinstance(config, StoryGenerationConfig):
            return config
        try:
            return StoryGenerationConfig.model_validate(dict(config))
        except ValidationError as e:
            raise InvalidStoryConfigError(e.errors()) from e
