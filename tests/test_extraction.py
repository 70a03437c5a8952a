import json

import pytest

from vocab.errors import MalformedResponseError, ModelUnavailableError
from vocab.extraction import EXTRACT_TEMPERATURE
from vocab.models import LexicalItemInput, ProficiencyLevel
from vocab.prompts import MAX_SOURCE_CHARS, TRUNCATION_MARKER, truncate_source

ARTICLE = (
    "Urban planners must take into account the needs of commuters. "
    "Public transport can mitigate congestion. "
    "Resilient cities adapt to change."
)


def _candidates(count: int) -> str:
    return json.dumps([{"lemma": f"Word{i}", "pos": "noun", "level": "B2"} for i in range(count)])


def test_truncate_source_leaves_short_text_alone() -> None:
    assert truncate_source("short") == "short"
    exact = "x" * MAX_SOURCE_CHARS
    assert truncate_source(exact) == exact


def test_long_text_is_truncated_but_source_length_is_original(extraction_pipeline, fake_client):
    fake_client.queue("[]")
    text = "a" * 10_000

    outcome = extraction_pipeline.extract(text, ProficiencyLevel.B2)

    prompt = fake_client.prompts[0]
    assert ("a" * 8000 + TRUNCATION_MARKER) in prompt
    assert "a" * 8001 not in prompt
    assert outcome.source_length == 10_000
    assert outcome.items == []
    assert outcome.total == 0


def test_prompt_instructs_level_and_limit(extraction_pipeline, fake_client):
    fake_client.queue("[]")

    extraction_pipeline.extract(ARTICLE, ProficiencyLevel.C1, max_items=7)

    prompt, options = fake_client.calls[0]
    assert "CEFR level C1" in prompt
    assert "at most 7 items" in prompt
    assert "base form" in prompt
    assert "proper nouns" in prompt
    assert ARTICLE in prompt
    assert options.temperature == EXTRACT_TEMPERATURE
    assert options.max_output_tokens == 4096
    assert options.json_output is True


def test_extract_returns_normalized_candidates(extraction_pipeline, fake_client):
    fake_client.queue(
        "```json\n"
        + json.dumps(
            [
                {
                    "lemma": "Take Into Account",
                    "pos": "phrase",
                    "level": "B2",
                    "context": "Urban planners must take into account the needs of commuters.",
                },
                {"lemma": "Mitigate"},
                {"lemma": ""},
            ]
        )
        + "\n```"
    )

    outcome = extraction_pipeline.extract(ARTICLE, ProficiencyLevel.B2)

    assert outcome.items == [
        LexicalItemInput(
            lemma="take into account",
            pos="phrase",
            level=ProficiencyLevel.B2,
            context="Urban planners must take into account the needs of commuters.",
        ),
        LexicalItemInput(lemma="mitigate"),
    ]
    assert outcome.total == 2
    assert outcome.source_length == len(ARTICLE)


def test_model_over_delivery_is_trimmed_to_max_items(extraction_pipeline, fake_client):
    fake_client.queue(_candidates(8))

    outcome = extraction_pipeline.extract(ARTICLE, ProficiencyLevel.B2, max_items=5)

    assert outcome.total == 5
    assert [item.lemma for item in outcome.items] == ["word0", "word1", "word2", "word3", "word4"]


def test_max_items_one_yields_at_most_one(extraction_pipeline, fake_client):
    fake_client.queue(_candidates(3))

    outcome = extraction_pipeline.extract(ARTICLE, ProficiencyLevel.B1, max_items=1)

    assert len(outcome.items) <= 1


def test_extraction_makes_a_single_model_call(extraction_pipeline, fake_client):
    fake_client.queue(_candidates(4))

    extraction_pipeline.extract(ARTICLE, ProficiencyLevel.B2)

    assert len(fake_client.calls) == 1


@pytest.mark.parametrize(
    "failure, expected",
    [
        (ModelUnavailableError("Gemini API request failed: quota"), ModelUnavailableError),
        ('{"lemma": "resilience"}', MalformedResponseError),
        ("no json here", MalformedResponseError),
    ],
)
def test_failures_are_fatal_to_the_call(extraction_pipeline, fake_client, failure, expected):
    fake_client.queue(failure)

    with pytest.raises(expected):
        extraction_pipeline.extract(ARTICLE, ProficiencyLevel.B2)
