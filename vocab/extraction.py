# =============================================================================
# vocab/extraction.py  —  Extraction Pipeline
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Pulls level-appropriate vocabulary candidates out of a free text with a
#   SINGLE model call:
#
#     text ──truncate(8000)──▶ prompt ──Gemini (t=0.3)──▶ JSON array
#          ──coerce + trim to max_items──▶ list[LexicalItemInput]
#
# FAILURE MODEL:
#   Unlike expansion there is no batch to salvage: a service error or a
#   malformed envelope fails the whole call.
# =============================================================================

import logging

from vocab.config import Settings
from vocab.llm import GenerationOptions, ModelClient
from vocab.models import ExtractionOutcome, ProficiencyLevel
from vocab.parsing import parse_extraction_response
from vocab.prompts import build_extraction_prompt

logger = logging.getLogger(__name__)

EXTRACT_TEMPERATURE = 0.3
DEFAULT_MAX_ITEMS = 20
MIN_ITEMS = 1
MAX_ITEMS = 100


class ExtractionPipeline:
    """Extracts vocabulary candidates from text through a ModelClient."""

    def __init__(self, client: ModelClient, model: str, max_output_tokens: int):
        self._client = client
        self._options = GenerationOptions(
            model=model,
            temperature=EXTRACT_TEMPERATURE,
            max_output_tokens=max_output_tokens,
            json_output=True,
        )

    @classmethod
    def from_settings(cls, client: ModelClient, settings: Settings) -> "ExtractionPipeline":
        return cls(client, model=settings.extract_model, max_output_tokens=settings.extract_max_tokens)

    def extract(
        self,
        text: str,
        level: ProficiencyLevel,
        max_items: int = DEFAULT_MAX_ITEMS,
    ) -> ExtractionOutcome:
        """Extract at most ``max_items`` candidates at ``level`` from ``text``.

        Raises:
            ModelServiceError: Gemini failed or returned nothing.
            MalformedResponseError: the answer was not a JSON array.
        """
        prompt = build_extraction_prompt(text, level, max_items)
        raw = self._client.generate(prompt, self._options)
        items = parse_extraction_response(raw, max_items=max_items)

        logger.debug("Extracted %d candidates from %d characters", len(items), len(text))
        return ExtractionOutcome(items=items, source_length=len(text))
