"""Generative model clients.

The app only depends on the `ModelClient` protocol; `VertexGeminiClient`
is the production implementation backed by the google-genai SDK in
Vertex AI mode.
"""
from __future__ import annotations
import logging
from typing import Any, Protocol

from google import genai
from google.genai import types

from omniauthor_api.common.config import Settings
from omniauthor_api.common.errors import GenerationError

LOGGER = logging.getLogger("omniauthor.model")


class ModelClient(Protocol):
    async def generate_content(self, prompt: str) -> str:
        """Return the model's text for `prompt`; raise on any failure."""
        ...


def extract_text(response: Any) -> str:
    """
    Pull the first candidate's first text part out of a model response.

    Args:
        response: A `GenerateContentResponse` (or anything shaped like one).

    Raises:
        GenerationError: if the response has no candidate, part, or text.
    """
    candidates = getattr(response, "candidates", None)
    if not candidates:
        raise GenerationError("Model returned no candidates")
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None)
    if not parts:
        raise GenerationError("Model candidate has no content parts")
    text = getattr(parts[0], "text", None)
    if text is None:
        raise GenerationError("Model candidate part has no text")
    return text


class VertexGeminiClient:
    """Gemini on Vertex AI; one SDK client shared by all requests."""

    def __init__(self, settings: Settings, client: Any | None = None) -> None:
        self.model_id = settings.model_id
        self._client = client or genai.Client(
            vertexai=True,
            project=settings.project,
            location=settings.location,
        )
        params = settings.generation
        self._config = types.GenerateContentConfig(
            max_output_tokens=params.max_output_tokens,
            temperature=params.temperature,
            top_p=params.top_p,
        )

    async def generate_content(self, prompt: str) -> str:
        LOGGER.debug("Calling %s (%d prompt chars)", self.model_id, len(prompt))
        response = await self._client.aio.models.generate_content(
            model=self.model_id,
            contents=prompt,
            config=self._config,
        )
        return extract_text(response)
