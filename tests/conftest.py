"""Shared test fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from research_assistant.annotation.annotators import LocalAnnotator
from research_assistant.annotation.heuristics import HeuristicAnnotator
from research_assistant.config.settings import Settings
from research_assistant.generation.providers import ProviderRegistry
from research_assistant.pipeline.research_pipeline import ResearchPipeline
from research_assistant.storage.sqlite_citation_store import SQLiteCitationStore
from research_assistant.storage.sqlite_message_store import SQLiteMessageStore

SAMPLE_COMPLETION = (
    "Transformers changed NLP [CITATION]{Attention Is All You Need}|"
    "{https://arxiv.org/abs/1706.03762}|{The Transformer relies entirely on attention}. "
    "Later work scaled them up [CITATION]{Scaling Laws}|{https://arxiv.org/abs/2001.08361}|"
    "{Loss scales as a power law with model size}."
)


class FakeLLM:
    """Fake completion provider that records prompts and returns a canned reply."""

    def __init__(self, reply: str = SAMPLE_COMPLETION, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ) -> str:
        self.calls.append(
            {"prompt": prompt, "system": system, "temperature": temperature, "max_tokens": max_tokens}
        )
        if self.error is not None:
            raise self.error
        return self.reply


class FailingAnnotator:
    async def annotate(self, content: str):
        raise RuntimeError("scorer unavailable")


@pytest.fixture
def settings():
    """Test settings with temp paths."""
    tmp = tempfile.mkdtemp()
    return Settings(
        google_api_key="test-key",
        sqlite_db_path=str(Path(tmp) / "test_research.db"),
        api_keys="test-api-key",
        jwt_secret="test-secret",
    )


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def registry(fake_llm):
    providers = ProviderRegistry()
    providers.register("google", fake_llm)
    return providers


@pytest.fixture
async def message_store(settings):
    store = SQLiteMessageStore(settings.sqlite_db_path)
    await store.initialize()
    return store


@pytest.fixture
async def citation_store(settings):
    store = SQLiteCitationStore(settings.sqlite_db_path)
    await store.initialize()
    return store


@pytest.fixture
def pipeline(registry, message_store, citation_store, settings):
    return ResearchPipeline(
        providers=registry,
        annotator=LocalAnnotator(HeuristicAnnotator(settings)),
        message_store=message_store,
        citation_store=citation_store,
        settings=settings,
    )
