import json

import pytest

from textlens.core.keywords import KeywordExtractor
from textlens.core.pipeline.services import Services
from textlens.infrastructure.storage.memory import InMemoryAnalysisStore
from textlens.prompts.registry import PromptRegistry


VALID_REPLY = json.dumps({
    "summary": "Climate policy is changing fast.",
    "title": "Climate Policy Review",
    "topics": ["climate", "policy", "energy"],
    "sentiment": "positive",
})


class FakeLLM:
    """Records prompts and replays a canned reply (or raises)."""

    def __init__(self, reply: str = VALID_REPLY, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def meta(self):
        return {
            "backend": "ollama",
            "model": "fake",
            "profile": "test",
            "json_mode": True,
        }


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def store():
    return InMemoryAnalysisStore()


@pytest.fixture
def services(fake_llm, store):
    return Services(
        llm=fake_llm,
        store=store,
        keywords=KeywordExtractor(),
        prompts=PromptRegistry(),
    )
