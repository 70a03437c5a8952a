# =============================================================================
# vocab/llm.py  —  Model Client (Google Gemini via google-genai)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends one prompt to Gemini and returns the raw text of the answer.
#   Nothing else: no retries, no parsing, no pacing.  Those belong to the
#   pipelines that call it.
#
# THE CONTRACT:
#   generate(prompt, GenerationOptions) -> str
#
#   Failures come back as exactly two exception types:
#     ModelUnavailableError  — the SDK call raised (network, auth, quota...)
#     EmptyResponseError     — the call succeeded but produced no text
#
# CONCURRENCY:
#   GeminiClient holds the SDK handle and nothing else.  It is never mutated
#   after construction, so one instance can serve every tool call.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from google import genai
from google.genai import types

from vocab.errors import EmptyResponseError, ModelUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOptions:
    """Per-call knobs for one generate() request."""

    model: str
    temperature: float
    max_output_tokens: int
    json_output: bool = True    # Ask the service for application/json

    def __post_init__(self) -> None:
        if not self.model:
            raise ValueError("model must be a non-empty identifier")
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be within [0, 1], got {self.temperature}")
        if self.max_output_tokens <= 0:
            raise ValueError(f"max_output_tokens must be positive, got {self.max_output_tokens}")


class ModelClient(Protocol):
    """Anything that can turn a prompt into text."""

    def generate(self, prompt: str, options: GenerationOptions) -> str:
        ...


class GeminiClient:
    """ModelClient backed by the google-genai SDK."""

    def __init__(self, api_key: str, client: Optional[genai.Client] = None):
        self._client = client if client is not None else genai.Client(api_key=api_key)

    def generate(self, prompt: str, options: GenerationOptions) -> str:
        if not prompt:
            raise ValueError("prompt must be non-empty")

        config = types.GenerateContentConfig(
            temperature=options.temperature,
            max_output_tokens=options.max_output_tokens,
            response_mime_type="application/json" if options.json_output else None,
        )

        logger.debug("Gemini request (%s): %s", options.model, prompt)
        try:
            response = self._client.models.generate_content(
                model=options.model,
                contents=prompt,
                config=config,
            )
        except Exception as exc:
            raise ModelUnavailableError(f"Gemini API request failed: {exc}") from exc

        text = response.text
        logger.debug("Gemini raw response: %s", text)
        if not text:
            raise EmptyResponseError("Gemini API returned empty response")
        return text
