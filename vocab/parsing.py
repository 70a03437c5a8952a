# =============================================================================
# vocab/parsing.py  —  Response Parser
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the semi-structured text a model sends back into typed values, in
#   two separate passes:
#
#   1. STRUCTURE (strict)
#      strip_code_fence()   → remove a ```json ... ``` wrapper if present
#      parse_json_envelope() → json.loads, MalformedResponseError on failure
#      The top-level shape must also match (object for expansion, array for
#      extraction).  A mismatch is a MalformedResponseError.
#
#   2. FIELDS (permissive)
#      coerce_expansion() / coerce_extraction() never raise.  A missing or
#      mistyped field becomes a default (expansion) or is left out
#      (extraction).
# =============================================================================

import json
import re
from dataclasses import dataclass
from typing import Any, Optional

from vocab.errors import MalformedResponseError
from vocab.models import (
    LexicalItemInput,
    ProficiencyLevel,
    Topic,
    lookup_topic,
    normalize_lemma,
)

MAX_TOPICS = 3
MAX_EXAMPLES = 3

# Opening fence with an optional language tag, and the closing fence.
_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, if there is one."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_json_envelope(text: str) -> Any:
    """Strip any code fence from ``text`` and parse what is left as JSON.

    Raises:
        MalformedResponseError: the remaining text is not valid JSON.
    """
    cleaned = strip_code_fence(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Failed to parse LLM response: {exc}") from exc


def _type_name(value: Any) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if value is None:
        return "null"
    return type(value).__name__


# -----------------------------------------------------------------------------
# Expansion: one JSON object per lemma
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ExpansionFields:
    """Coerced fields of one expansion response."""

    definition_en: str = ""
    translation_zh: str = ""
    examples_en: tuple[str, ...] = ()
    synonyms: tuple[str, ...] = ()
    ielts_topics: tuple[Topic, ...] = ()


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [element for element in value if isinstance(element, str)]


def filter_topics(labels: list[str]) -> tuple[Topic, ...]:
    """Keep labels that are exactly a Topic, in order, without duplicates."""
    topics: list[Topic] = []
    for label in labels:
        topic = lookup_topic(label)
        if topic is not None and topic not in topics:
            topics.append(topic)
    return tuple(topics[:MAX_TOPICS])


def coerce_expansion(value: Any) -> ExpansionFields:
    """Coerce a parsed expansion response into ExpansionFields.

    Raises:
        MalformedResponseError: ``value`` is not a JSON object.
    """
    if not isinstance(value, dict):
        raise MalformedResponseError(
            f"Failed to parse LLM response: expected object, got {_type_name(value)}"
        )

    return ExpansionFields(
        definition_en=_string(value.get("definition_en")),
        translation_zh=_string(value.get("translation_zh")),
        examples_en=tuple(_strings(value.get("examples_en"))[:MAX_EXAMPLES]),
        synonyms=tuple(_strings(value.get("synonyms"))),
        ielts_topics=filter_topics(_strings(value.get("ielts_topics"))),
    )


def parse_expansion_response(text: str) -> ExpansionFields:
    return coerce_expansion(parse_json_envelope(text))


# -----------------------------------------------------------------------------
# Extraction: one JSON array of candidates
# -----------------------------------------------------------------------------
def _optional_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def coerce_candidate(element: Any) -> Optional[LexicalItemInput]:
    """Turn one array element into a LexicalItemInput, or None to drop it."""
    if not isinstance(element, dict):
        return None
    lemma = element.get("lemma")
    if not isinstance(lemma, str) or not lemma.strip():
        return None
    return LexicalItemInput(
        lemma=normalize_lemma(lemma),
        pos=_optional_string(element.get("pos")),
        level=ProficiencyLevel.parse(element.get("level")),
        context=_optional_string(element.get("context")),
    )


def coerce_extraction(value: Any, max_items: Optional[int] = None) -> list[LexicalItemInput]:
    """Coerce a parsed extraction response into at most ``max_items`` items.

    Raises:
        MalformedResponseError: ``value`` is not a JSON array.
    """
    if not isinstance(value, list):
        raise MalformedResponseError(
            f"Failed to parse extraction response: expected array, got {_type_name(value)}"
        )

    items = [item for item in map(coerce_candidate, value) if item is not None]
    if max_items is not None:
        items = items[:max_items]
    return items


def parse_extraction_response(text: str, max_items: Optional[int] = None) -> list[LexicalItemInput]:
    return coerce_extraction(parse_json_envelope(text), max_items)
