"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GEMINI_API_KEY"] = ""

from evernest.api.dependencies import get_rate_limiter
from evernest.database import Base, get_db
from evernest.main import app
from evernest.models.story import Story
from evernest.models.user import User
from evernest.schemas.story import StoryGenerationConfig
from evernest.services.errors import GenerationError
from evernest.services.fingerprint import compute_config_hash
from evernest.services.generator import GeneratedStory, get_story_generator
from evernest.services.rate_limiter import RateLimiter

BASE_CONFIG = {
    "theme": "nature_calm",
    "length": "short",
    "faith_preference": "non_religious",
    "parent_one_name": "Mom",
    "parent_two_name": "Dad",
    "baby_nickname": "Bean",
}

GENERATED_CONTENT = (
    "Once upon a time,the moon hummed softly .The stars listened.\n\n"
    "Little Bean floated in a warm and gentle sea of love."
)


class FakeStoryGenerator:
    """Stands in for the Gemini client and records every prompt it receives."""

    model = "fake-model"
    is_configured = True

    def __init__(self) -> None:
        self.prompts: list[str] = []
        self.error: GenerationError | None = None
        self.title = "The Quiet Moon"
        self.content = GENERATED_CONTENT

    async def generate(self, prompt: str) -> GeneratedStory:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return GeneratedStory(title=self.title, content=self.content)

    async def health_check(self) -> bool:
        return True


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def engine():
    """Create a private in-memory database for one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Create a new database session for a test."""
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def fake_generator() -> FakeStoryGenerator:
    return FakeStoryGenerator()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(max_requests=5, window_seconds=60, clock=clock)


@pytest.fixture
def client(
    db_session: Session,
    fake_generator: FakeStoryGenerator,
    rate_limiter: RateLimiter,
) -> Generator[TestClient, None, None]:
    """Create a test client with database, generator and limiter overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_story_generator] = lambda: fake_generator
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user(db_session: Session) -> User:
    """A stored user."""
    user = User(email="parent@example.com", name="Parent")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(user: User) -> dict[str, str]:
    """Headers the upstream auth layer sets for ``user``."""
    return {"X-User-Id": str(user.id)}


def make_story(db_session: Session, user_id: int, **config_overrides) -> Story:
    """Store a story directly, bypassing generation and rate limiting."""
    config = StoryGenerationConfig(**{**BASE_CONFIG, **config_overrides})
    story = Story(
        user_id=user_id,
        title=f"A story for {config.parent_one_name}",
        content="Soft and sleepy words.",
        theme=config.theme.value,
        length=config.length.value,
        faith_preference=config.faith_preference.value,
        parent_one_name=config.parent_one_name,
        parent_two_name=config.parent_two_name,
        baby_nickname=config.baby_nickname,
        due_date=config.due_date,
        child_status=config.child_status.value,
        age_group=config.age_group.value if config.age_group else None,
        config_hash=compute_config_hash(config),
        word_count=4,
    )
    db_session.add(story)
    db_session.commit()
    db_session.refresh(story)
    return story
