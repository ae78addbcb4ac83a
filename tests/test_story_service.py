"""Tests for the story creation service."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import BASE_CONFIG, make_story
from evernest.models.story import Story
from evernest.schemas.story import StoryGenerationConfig
from evernest.services.errors import (
    DuplicateStoryError,
    GenerationError,
    InvalidStoryConfigError,
    UnauthorizedError,
)
from evernest.services.fingerprint import compute_config_hash
from evernest.services.generator import GeneratedStory
from evernest.services.story_repository import StoryRepository
from evernest.services.story_service import StoryService


@pytest.fixture
def generator() -> AsyncMock:
    generator = AsyncMock()
    generator.generate.return_value = GeneratedStory(
        title="  Little Star  ", content="Sleep now.The stars are near ."
    )
    return generator


@pytest.fixture
def service(db_session, generator) -> StoryService:
    return StoryService(StoryRepository(db_session), generator)


class TestCreateStory:
    """Tests for StoryService.create_story."""

    @pytest.mark.asyncio
    async def test_creates_new_story(self, service, generator, user, db_session):
        result = await service.create_story(user.id, BASE_CONFIG)

        assert result.is_duplicate is False
        assert result.existing_story_id is None
        story = result.story
        assert story.id is not None
        assert story.title == "Little Star"
        assert story.content == "Sleep now. The stars are near."
        assert story.word_count == 6
        assert story.config_hash == compute_config_hash(StoryGenerationConfig(**BASE_CONFIG))
        assert story.is_favorite is False
        generator.generate.assert_awaited_once()
        assert db_session.query(Story).count() == 1

    @pytest.mark.asyncio
    async def test_prompt_comes_from_config(self, service, generator, user):
        await service.create_story(user.id, {**BASE_CONFIG, "theme": "family_legacy"})
        prompt = generator.generate.await_args.args[0]
        assert "Family Legacy" in prompt
        assert "Mom and Dad" in prompt

    @pytest.mark.asyncio
    async def test_returns_existing_story(self, service, generator, user, db_session):
        existing = make_story(db_session, user.id)

        result = await service.create_story(user.id, {**BASE_CONFIG, "parent_one_name": "MOM "})

        assert result.is_duplicate is True
        assert result.existing_story_id == existing.id
        assert result.story.id == existing.id
        generator.generate.assert_not_awaited()
        assert db_session.query(Story).count() == 1

    @pytest.mark.asyncio
    async def test_accepts_validated_config(self, service, user):
        result = await service.create_story(user.id, StoryGenerationConfig(**BASE_CONFIG), profile_id=None)
        assert result.story.parent_two_name == "Dad"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", [None, 0])
    async def test_requires_user(self, service, generator, user_id):
        with pytest.raises(UnauthorizedError):
            await service.create_story(user_id, BASE_CONFIG)
        generator.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_config(self, service, generator, user, db_session):
        with pytest.raises(InvalidStoryConfigError) as exc_info:
            await service.create_story(user.id, {**BASE_CONFIG, "theme": "dragons", "parent_one_name": ""})

        error = exc_info.value
        fields = {err["loc"][0] for err in error.errors}
        assert fields == {"theme", "parent_one_name"}
        assert str(error).startswith("Invalid input:")
        generator.generate.assert_not_awaited()
        assert db_session.query(Story).count() == 0

    @pytest.mark.asyncio
    async def test_invalid_config_touches_no_storage(self, generator):
        repository = MagicMock(spec=StoryRepository)
        service = StoryService(repository, generator)

        with pytest.raises(InvalidStoryConfigError):
            await service.create_story(1, {**BASE_CONFIG, "parent_one_name": ""})
        assert repository.method_calls == []
        generator.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_generation_failure_stores_nothing(self, service, generator, user, db_session):
        generator.generate.side_effect = GenerationError("timeout", "read timed out")

        with pytest.raises(GenerationError):
            await service.create_story(user.id, BASE_CONFIG)
        assert db_session.query(Story).count() == 0

    @pytest.mark.asyncio
    async def test_lost_insert_race_returns_winner(self, generator):
        """Test a concurrent identical request that stored first wins."""
        winner = Story(id=7, user_id=1, config_hash="abc")
        repository = MagicMock(spec=StoryRepository)
        repository.find_by_user_and_fingerprint.side_effect = [None, winner]
        repository.insert.side_effect = DuplicateStoryError(1, "abc")
        service = StoryService(repository, generator)

        result = await service.create_story(1, BASE_CONFIG)

        assert result.is_duplicate is True
        assert result.existing_story_id == 7
        assert result.story is winner
        generator.generate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_insert_conflict_without_winner_propagates(self, generator):
        repository = MagicMock(spec=StoryRepository)
        repository.find_by_user_and_fingerprint.return_value = None
        repository.insert.side_effect = DuplicateStoryError(1, "abc")
        service = StoryService(repository, generator)

        with pytest.raises(DuplicateStoryError):
            await service.create_story(1, BASE_CONFIG)

    def test_unique_constraint_rejects_second_insert(self, user, db_session):
        """Test the database refuses two stories with one fingerprint for a user."""
        make_story(db_session, user.id)
        repository = StoryRepository(db_session)
        duplicate = Story(
            user_id=user.id,
            title="Again",
            content="Again.",
            theme="nature_calm",
            length="short",
            faith_preference="non_religious",
            parent_one_name="Mom",
            config_hash=compute_config_hash(StoryGenerationConfig(**BASE_CONFIG)),
            word_count=1,
        )

        with pytest.raises(DuplicateStoryError):
            repository.insert(duplicate)
        assert db_session.query(Story).count() == 1


class TestLibrary:
    """Tests for listing and managing stored stories."""

    def test_check_for_duplicate(self, service, user, db_session):
        config_hash = compute_config_hash(StoryGenerationConfig(**BASE_CONFIG))
        assert service.check_for_duplicate(user.id, config_hash).is_duplicate is False

        story = make_story(db_session, user.id)
        result = service.check_for_duplicate(user.id, config_hash)
        assert result.is_duplicate is True
        assert result.existing_story_id == story.id
        assert result.config_hash == config_hash

    def test_get_user_stories(self, service, user, db_session):
        first = make_story(db_session, user.id, theme="love_bonding")
        second = make_story(db_session, user.id, theme="rhythm_sound")

        stories, total = service.get_user_stories(user.id)
        assert total == 2
        assert [s.id for s in stories] == [second.id, first.id]

    def test_toggle_favorite_and_delete(self, service, user, db_session):
        story_id = make_story(db_session, user.id).id

        assert service.toggle_favorite(user.id, story_id).is_favorite is True
        assert service.toggle_favorite(user.id + 1, story_id) is None

        assert service.delete_story(user.id + 1, story_id) is False
        assert service.delete_story(user.id, story_id) is True
        assert service.get_story_by_id(user.id, story_id) is None
