"""Story generation via the Gemini REST API."""

import json
import logging
from typing import Any

import httpx
from pydantic import BaseModel

from evernest.config import get_app_config, get_settings
from evernest.services.errors import GenerationError

logger = logging.getLogger(__name__)

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {
            "type": "STRING",
            "description": "The gentle title of the story.",
        },
        "content": {
            "type": "STRING",
            "description": "The full text of the story, formatted with paragraphs.",
        },
    },
    "required": ["title", "content"],
}


class GeneratedStory(BaseModel):
    """Title and body returned by the provider."""

    title: str
    content: str


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def _status_reason(status_code: int) -> str:
    if status_code in (401, 403):
        return "auth"
    if status_code == 429:
        return "quota"
    if status_code == 404:
        return "not_found"
    return "provider"


class StoryGenerator:
    """Client for generating stories with Gemini."""

    def __init__(self) -> None:
        self.settings = get_settings()
        generation = get_app_config().generation
        self.api_key = self.settings.gemini_api_key
        self.base_url = self.settings.gemini_base_url.rstrip("/")
        self.model = self.settings.gemini_model
        self.timeout = self.settings.generation_timeout_seconds
        self.temperature = generation.get("temperature", 0.7)
        self.max_output_tokens = generation.get("max_output_tokens", 2048)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _model_url(self) -> str:
        return f"{self.base_url}/v1beta/models/{self.model}"

    def _headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self.api_key or ""}

    async def generate(self, prompt: str) -> GeneratedStory:
        """Generate a story for a prompt.

        Raises:
            GenerationError: on any provider, network or parsing failure
        """
        if not self.is_configured:
            raise GenerationError("not_configured", "GEMINI_API_KEY is not configured")

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
            },
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self._model_url()}:generateContent",
                    json=payload,
                    headers=self._headers(),
                )
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Gemini request timed out after {self.timeout}s: {e}")
            raise GenerationError("timeout", str(e)) from e
        except httpx.HTTPStatusError as e:
            reason = _status_reason(e.response.status_code)
            logger.error(f"Gemini returned HTTP {e.response.status_code} ({reason}): {e.response.text}")
            raise GenerationError(reason, e.response.text) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Gemini: {e}")
            raise GenerationError("provider", str(e)) from e

        return self._parse(data)

    def _parse(self, data: dict[str, Any]) -> GeneratedStory:
        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError):
            text = ""

        if not text.strip():
            logger.warning(f"Gemini returned an empty response: {data}")
            raise GenerationError("empty", "Received empty response from AI.")

        try:
            result = json.loads(_strip_code_fences(text))
            story = GeneratedStory.model_validate(result)
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            logger.warning(f"Failed to parse Gemini response as a story: {e}")
            raise GenerationError("malformed", str(e)) from e

        if not story.content.strip():
            raise GenerationError("empty", "Story content was empty.")
        return story

    async def health_check(self) -> bool:
        """Check if Gemini is reachable and the model exists."""
        if not self.is_configured:
            return False
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.get(self._model_url(), headers=self._headers())
                response.raise_for_status()
                return True
        except httpx.HTTPError:
            return False


def get_story_generator() -> StoryGenerator:
    """Get a story generator instance."""
    return StoryGenerator()
