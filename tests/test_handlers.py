import json

import pytest

from vocab.errors import ModelUnavailableError
from vocab_mcp import handlers


class PipelineSpy:
    """Pipeline factory that records whether it was ever asked for a pipeline."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        raise AssertionError("pipeline must not be built for invalid arguments")


# -----------------------------------------------------------------------------
# expand_vocab
# -----------------------------------------------------------------------------
def test_expand_vocab_success_envelope(expansion_pipeline, fake_client, expansion_response):
    fake_client.queue(expansion_response(ielts_topics=["Society", "Politics"]))

    response = handlers.expand_vocab({"items": [{"lemma": "resilience"}]}, lambda: expansion_pipeline)

    assert response.is_error is False
    assert response.payload["success"] == 1
    assert response.payload["total"] == 1
    assert response.payload["items"][0]["ielts_topics"] == ["Society"]
    assert "errors" not in response.payload


def test_expand_vocab_partial_failure(expansion_pipeline, fake_client, expansion_response):
    fake_client.queue(expansion_response(), ModelUnavailableError("Gemini API request failed: timeout"))

    response = handlers.expand_vocab(
        {"items": [{"lemma": "resilience"}, {"lemma": "sustainable", "level": "B2"}]},
        lambda: expansion_pipeline,
    )

    assert response.is_error is False
    assert response.payload["success"] == 1
    assert response.payload["total"] == 2
    assert response.payload["errors"] == [
        'Failed to expand "sustainable": Gemini API request failed: timeout'
    ]


def test_expand_vocab_normalizes_lemmas(expansion_pipeline, fake_client, expansion_response):
    fake_client.queue(expansion_response())

    response = handlers.expand_vocab({"items": [{"lemma": "  Resilience "}]}, lambda: expansion_pipeline)

    assert response.payload["items"][0]["lemma"] == "resilience"


@pytest.mark.parametrize(
    "arguments, fragment",
    [
        ({"items": []}, "items"),
        ({}, "items"),
        ({"items": [{"lemma": ""}]}, "lemma is required"),
        ({"items": [{"lemma": "   "}]}, "lemma is required"),
        ({"items": [{"pos": "noun"}]}, "lemma"),
        ({"items": [{"lemma": "ok", "level": "B7"}]}, "level"),
    ],
)
def test_expand_vocab_validation_error_envelope(arguments, fragment):
    spy = PipelineSpy()
    response = handlers.expand_vocab(arguments, spy)

    assert spy.calls == 0

    assert response.is_error is True
    assert set(response.payload) == {"error", "success", "total"}
    assert response.payload["success"] == 0
    assert response.payload["total"] == 0
    assert fragment in response.payload["error"]


def test_expand_vocab_unexpected_failure_still_yields_envelope():
    def broken_pipeline():
        raise RuntimeError("pipeline exploded")

    response = handlers.expand_vocab({"items": [{"lemma": "x"}]}, broken_pipeline)

    assert response.is_error is True
    assert response.payload == {"error": "pipeline exploded", "success": 0, "total": 0}


# -----------------------------------------------------------------------------
# extract_vocab_from_text
# -----------------------------------------------------------------------------
def test_extract_success_envelope(extraction_pipeline, fake_client):
    fake_client.queue('[{"lemma": "Mitigate", "pos": "verb", "context": "We mitigate risk."}]')

    response = handlers.extract_vocab_from_text(
        {"text": "We mitigate risk.", "level": "B2"}, lambda: extraction_pipeline
    )

    assert response.is_error is False
    assert response.payload == {
        "items": [{"lemma": "mitigate", "pos": "verb", "context": "We mitigate risk."}],
        "total": 1,
        "source_length": len("We mitigate risk."),
    }


def test_extract_defaults_max_items_to_twenty(extraction_pipeline, fake_client):
    fake_client.queue("[]")

    handlers.extract_vocab_from_text({"text": "Some text.", "level": "A2"}, lambda: extraction_pipeline)

    assert "at most 20 items" in fake_client.prompts[0]


def test_extract_trims_over_delivery(extraction_pipeline, fake_client):
    fake_client.queue(json.dumps([{"lemma": f"w{i}"} for i in range(8)]))

    response = handlers.extract_vocab_from_text(
        {"text": "Some text.", "level": "B2", "max_items": 5}, lambda: extraction_pipeline
    )

    assert response.payload["total"] == 5
    assert len(response.payload["items"]) == 5


@pytest.mark.parametrize(
    "arguments, fragment",
    [
        ({"text": "", "level": "B2"}, "text"),
        ({"text": "Some text."}, "level"),
        ({"text": "Some text.", "level": "D1"}, "level"),
        ({"text": "Some text.", "level": "B2", "max_items": 0}, "max_items"),
        ({"text": "Some text.", "level": "B2", "max_items": 101}, "max_items"),
    ],
)
def test_extract_validation_error_envelope(arguments, fragment):
    spy = PipelineSpy()
    response = handlers.extract_vocab_from_text(arguments, spy)

    assert spy.calls == 0

    assert response.is_error is True
    assert set(response.payload) == {"error"}
    assert fragment in response.payload["error"]


def test_extract_model_failure_is_fatal(extraction_pipeline, fake_client):
    fake_client.queue(ModelUnavailableError("Gemini API request failed: quota exceeded"))

    response = handlers.extract_vocab_from_text({"text": "Some text.", "level": "B2"}, lambda: extraction_pipeline)

    assert response.is_error is True
    assert response.payload == {"error": "Gemini API request failed: quota exceeded"}


def test_extract_malformed_envelope_is_fatal(extraction_pipeline, fake_client):
    fake_client.queue('{"lemma": "resilience"}')

    response = handlers.extract_vocab_from_text({"text": "Some text.", "level": "B2"}, lambda: extraction_pipeline)

    assert response.is_error is True
    assert "expected array, got object" in response.payload["error"]
