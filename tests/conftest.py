# tests/conftest.py - v2
"""Shared test fixtures: fake embedding provider, fake clock, sample references.

No network access and no real sleeps; all provider I/O is faked.
"""

from __future__ import annotations

import pytest

from originality_guard.core.models import ReferenceContent
from originality_guard.embeddings.base_provider import BaseEmbeddingProvider
from originality_guard.embeddings.cache import EmbeddingCache
from originality_guard.embeddings.client import EmbeddingClient
from originality_guard.embeddings.models import ProviderResponse


# === Fakes ===


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def fake_vector(text: str) -> list[float]:
    """Deterministic 3-d vector derived from the text."""
    return [float(len(text)), float(text.count("a")) + 1.0, float(len(text.split()))]


class FakeProvider(BaseEmbeddingProvider):
    """Records calls; raises queued errors before answering."""

    def __init__(self, total_tokens: int | None = None) -> None:
        self.calls: list[list[str]] = []
        self.errors: list[Exception] = []
        self.total_tokens = total_tokens

    async def embed(self, texts: list[str], model: str) -> ProviderResponse:
        self.calls.append(list(texts))
        if self.errors:
            raise self.errors.pop(0)
        return ProviderResponse(
            embeddings=[fake_vector(t) for t in texts],
            total_tokens=self.total_tokens,
        )

    @property
    def provider_name(self) -> str:
        return "fake"


class SleepRecorder:
    """Async sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# === FIXTURES ===


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def embedding_cache(fake_clock: FakeClock) -> EmbeddingCache:
    return EmbeddingCache(ttl_s=60.0, clock=fake_clock)


@pytest.fixture
def embedding_client(
    fake_provider: FakeProvider,
    embedding_cache: EmbeddingCache,
    sleep_recorder: SleepRecorder,
) -> EmbeddingClient:
    return EmbeddingClient(
        provider=fake_provider, cache=embedding_cache, sleep=sleep_recorder,
    )


@pytest.fixture
def lighthouse_text() -> str:
    return (
        "The old lighthouse keeper climbed the spiral stairs every evening "
        "to light the great lamp that guided ships past the jagged rocks."
    )


@pytest.fixture
def bakery_text() -> str:
    return (
        "Fresh bread cooled on wooden racks while customers queued outside "
        "the tiny bakery, chatting about weekend plans and rainy weather."
    )


@pytest.fixture
def lighthouse_reference(lighthouse_text: str) -> ReferenceContent:
    return ReferenceContent(
        id="ref_lighthouse",
        title="The Lighthouse",
        content=lighthouse_text,
        category="story",
    )
