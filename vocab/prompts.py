# =============================================================================
# vocab/prompts.py  —  Prompt builders for both pipelines
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the exact text sent to Gemini for:
#     - expansion   (one prompt per lemma)
#     - extraction  (one prompt per source text)
#
# PROMPT STRUCTURE (both prompts):
#   1. ROLE + TASK         what the model is and what it must produce
#   2. INPUT               the lemma / the (possibly truncated) article
#   3. CLOSED VOCABULARY   allowed topics or levels, embedded verbatim
#   4. OUTPUT FORMAT       a literal JSON example of the expected shape
#   5. RULES               "JSON only", "choose from the list", ...
#
# The model is asked for JSON, and the service is ALSO asked for JSON output
# (see GenerationOptions.json_output).  The parser still tolerates a fenced
# answer because not every model honours that flag.
# =============================================================================

from vocab.models import (
    EXTRACTION_PARTS_OF_SPEECH,
    LexicalItemInput,
    ProficiencyLevel,
    Topic,
)

MAX_SOURCE_CHARS = 8000
TRUNCATION_MARKER = "\n...[truncated]"


def truncate_source(text: str, limit: int = MAX_SOURCE_CHARS) -> str:
    """Cut ``text`` to ``limit`` characters and mark the cut, if it is longer."""
    if len(text) > limit:
        return text[:limit] + TRUNCATION_MARKER
    return text


# =============================================================================
# Expansion prompt
# =============================================================================
def build_expansion_prompt(item: LexicalItemInput) -> str:
    """Build the prompt that expands one lemma into learning material."""
    details = [f"Word/phrase: {item.lemma}"]
    if item.pos:
        details.append(f"Part of speech: {item.pos}")
    if item.level is not None:
        details.append(f"CEFR level: {item.level.value}")
    if item.context:
        details.append(f"Context from the source text: {item.context}")

    details_block = "\n".join(details)
    topics_list = ", ".join(Topic.values())

    return f"""Please expand the learning material for the following English vocabulary item.

{details_block}

Provide:
1. An English-English definition (concise and clear).
2. A Traditional Chinese translation (concise and precise).
3. 2-3 example sentences set in realistic IELTS contexts (common speaking or writing topics).
4. 2-4 synonyms, as appropriate.
5. 1-3 of the most relevant IELTS topic labels, chosen ONLY from this list:
   {topics_list}

Respond in JSON with exactly this shape:
{{
  "definition_en": "A clear definition in English",
  "translation_zh": "繁體中文翻譯",
  "examples_en": [
    "Example sentence 1 in an IELTS context.",
    "Example sentence 2 in an IELTS context."
  ],
  "synonyms": ["synonym1", "synonym2"],
  "ielts_topics": ["Topic1", "Topic2"]
}}

Important:
- examples_en must contain 2-3 sentences that reflect real IELTS exam situations.
- ielts_topics must be chosen from the list above; do not invent new labels.
- The response must be valid JSON.
- Do not include any other text or explanation."""


# =============================================================================
# Extraction prompt
# =============================================================================
def build_extraction_prompt(text: str, level: ProficiencyLevel, max_items: int) -> str:
    """Build the prompt that pulls level-appropriate vocabulary out of ``text``.

    ``text`` is truncated to MAX_SOURCE_CHARS here, so callers pass the
    original article.
    """
    source = truncate_source(text)
    pos_values = ", ".join(EXTRACTION_PARTS_OF_SPEECH)
    lvl = level.value

    return f"""You are an expert IELTS English teacher. From the article below, extract English words and phrases suitable for learners at CEFR level {lvl}.

## Extraction rules
- Only select vocabulary that matches level {lvl} (neither too easy nor too hard).
- Prefer vocabulary that is useful in IELTS writing or speaking, i.e. formal argumentative contexts.
- Include multi-word expressions such as verb phrases and noun phrases (e.g. "take into account", "in terms of").
- For each item, give the original sentence from the article it appears in as "context".
- Exclude proper nouns: names of people and places, and abbreviations.
- Extract at most {max_items} items.
- Give each lemma in its base form (verbs in the infinitive, nouns in the singular).

## Output format
Respond with a JSON array in this format:
[
  {{
    "lemma": "resilience",
    "pos": "noun",
    "level": "{lvl}",
    "context": "The resilience of local communities was put to the test."
  }}
]

Allowed pos values: {pos_values}

## Article
{source}"""
