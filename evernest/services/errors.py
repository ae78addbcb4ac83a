"""Service-level exceptions."""

from typing import Any

GENERATION_FAILED_MESSAGE = "Failed to generate a calm story. Please try again gently."


class StoryServiceError(Exception):
    """Base class for story service errors."""


class UnauthorizedError(StoryServiceError):
    """No authenticated user was supplied."""


class InvalidStoryConfigError(StoryServiceError):
    """A story config failed validation."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) for e in errors)
        super().__init__(f"Invalid input: {fields}" if fields else "Invalid input")


class GenerationError(StoryServiceError):
    """The text generation provider failed.

    ``reason`` is a short machine-readable category and ``detail`` carries the
    provider's own message. Only ``user_message`` is safe to show to users.
    """

    user_message = GENERATION_FAILED_MESSAGE

    def __init__(self, reason: str, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason}: {detail}" if detail else reason)


class DuplicateStoryError(StoryServiceError):
    """A story with the same fingerprint already exists for the user."""

    def __init__(self, user_id: int, config_hash: str) -> None:
        self.user_id = user_id
        self.config_hash = config_hash
        super().__init__(f"Story {config_hash} already exists for user {user_id}")
