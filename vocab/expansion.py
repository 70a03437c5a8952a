# =============================================================================
# vocab/expansion.py  —  Expansion Pipeline
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   For every input lemma: build a prompt, ask Gemini, parse the JSON, keep
#   only allowed topics, and collect the result (or the failure).
#
# THE BATCH LOOP:
#
#   for each item, in input order:
#       expand_item(item)      → results  (success)
#                              → failures (any exception, batch continues)
#       on_progress(i, total)
#       pause(0.5s)            ← skipped after the last item
#
#   One request is in flight at a time.  The pause is a fixed self-throttle,
#   applied whether or not the previous item succeeded; it is a step of the
#   loop, not of the model client.
# =============================================================================

import logging
import time
from typing import Callable, Optional, Sequence

from vocab.config import Settings
from vocab.llm import GenerationOptions, ModelClient
from vocab.models import BatchOutcome, ItemFailure, LexicalItemExpanded, LexicalItemInput
from vocab.parsing import parse_expansion_response
from vocab.prompts import build_expansion_prompt

logger = logging.getLogger(__name__)

EXPAND_TEMPERATURE = 0.7
REQUEST_DELAY_SECONDS = 0.5

ProgressCallback = Callable[[int, int], None]


class ExpansionPipeline:
    """Expands lexical items one by one through a ModelClient."""

    def __init__(
        self,
        client: ModelClient,
        model: str,
        max_output_tokens: int,
        delay_seconds: float = REQUEST_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._client = client
        self._options = GenerationOptions(
            model=model,
            temperature=EXPAND_TEMPERATURE,
            max_output_tokens=max_output_tokens,
            json_output=True,
        )
        self._delay_seconds = delay_seconds
        self._sleep = sleep

    @classmethod
    def from_settings(cls, client: ModelClient, settings: Settings, **kwargs) -> "ExpansionPipeline":
        return cls(
            client,
            model=settings.expand_model,
            max_output_tokens=settings.expand_max_tokens,
            **kwargs,
        )

    def expand_item(self, item: LexicalItemInput) -> LexicalItemExpanded:
        """Expand a single item.  Raises on service or parse failure."""
        prompt = build_expansion_prompt(item)
        text = self._client.generate(prompt, self._options)
        fields = parse_expansion_response(text)

        return LexicalItemExpanded(
            lemma=item.lemma,
            definition_en=fields.definition_en,
            translation_zh=fields.translation_zh,
            examples_en=fields.examples_en,
            synonyms=fields.synonyms,
            ielts_topics=fields.ielts_topics,
        )

    def _pace(self) -> None:
        if self._delay_seconds > 0:
            self._sleep(self._delay_seconds)

    def expand_batch(
        self,
        items: Sequence[LexicalItemInput],
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchOutcome:
        """Expand every item in order, recording failures instead of raising."""
        outcome = BatchOutcome(total=len(items))

        for index, item in enumerate(items):
            try:
                outcome.results.append(self.expand_item(item))
            except Exception as exc:
                logger.warning('Failed to expand vocab item "%s": %s', item.lemma, exc)
                outcome.failures.append(ItemFailure(item=item, error=str(exc)))

            if on_progress is not None:
                on_progress(index + 1, outcome.total)

            if index < len(items) - 1:
                self._pace()

        return outcome
