import json

import pytest

from vocab.config import Settings
from vocab.expansion import ExpansionPipeline
from vocab.extraction import ExtractionPipeline


class FakeModelClient:
    """ModelClient that replays scripted answers and records every call.

    Each scripted entry is either the text to return or an exception to raise.
    """

    def __init__(self, responses=()):
        self._responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self._responses.extend(responses)

    @property
    def prompts(self):
        return [prompt for prompt, _ in self.calls]

    def generate(self, prompt, options):
        self.calls.append((prompt, options))
        if not self._responses:
            raise AssertionError("FakeModelClient ran out of scripted responses")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def expansion_json(**overrides) -> str:
    payload = {
        "definition_en": "The ability to recover quickly from difficulties.",
        "translation_zh": "韌性",
        "examples_en": [
            "Community resilience is vital after natural disasters.",
            "Her resilience impressed the interview panel.",
        ],
        "synonyms": ["toughness", "adaptability"],
        "ielts_topics": ["Society", "Environment"],
    }
    payload.update(overrides)
    return json.dumps(payload, ensure_ascii=False)


@pytest.fixture()
def expansion_response():
    """Builder for a well-formed expansion answer; keyword args override fields."""
    return expansion_json


@pytest.fixture()
def settings() -> Settings:
    return Settings(api_key="test-key")


@pytest.fixture()
def fake_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture()
def sleeps() -> list:
    return []


@pytest.fixture()
def expansion_pipeline(fake_client, settings, sleeps) -> ExpansionPipeline:
    return ExpansionPipeline.from_settings(fake_client, settings, sleep=sleeps.append)


@pytest.fixture()
def extraction_pipeline(fake_client, settings) -> ExtractionPipeline:
    return ExtractionPipeline.from_settings(fake_client, settings)
