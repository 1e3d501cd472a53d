# tests/integration/test_int_originality_flow.py - v1
"""End-to-end: context prompt, generation, embedding-backed checks, regeneration."""

from __future__ import annotations

import pytest

from originality_guard.config.settings import Settings
from originality_guard.core.guard import OriginalityGuard
from originality_guard.core.models import OriginalityConfig
from originality_guard.core.prompts import (
    build_context_summary,
    enhance_prompt_with_context,
    generate_improvement_prompt,
)
from originality_guard.embeddings.base_provider import BaseEmbeddingProvider
from originality_guard.embeddings.cache import EmbeddingCache
from originality_guard.embeddings.client_factory import create_embedding_client
from originality_guard.embeddings.models import ProviderResponse
from originality_guard.pipeline.regeneration import generate_original_content

TOPICS = ("lighthouse", "lamp", "ships", "bread", "bakery", "customers")


class TopicProvider(BaseEmbeddingProvider):
    """Embeds texts as keyword-presence vectors over a fixed vocabulary."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    async def embed(self, texts: list[str], model: str) -> ProviderResponse:
        self.calls.append(list(texts))
        return ProviderResponse(
            embeddings=[
                [1.0 if topic in text.lower() else 0.0 for topic in TOPICS]
                for text in texts
            ],
            total_tokens=len(texts) * 20,
        )

    @property
    def provider_name(self) -> str:
        return "topic"


class Scripted:
    def __init__(self, *outputs: str) -> None:
        self.outputs = list(outputs)
        self.prompts: list[str] = []

    async def __call__(self, prompt: str, temperature: float) -> str:
        self.prompts.append(prompt)
        return self.outputs.pop(0)


@pytest.fixture
def provider() -> TopicProvider:
    return TopicProvider()


@pytest.fixture
def guard(provider) -> OriginalityGuard:
    settings = Settings(_env_file=None)
    client = create_embedding_client(
        settings, provider=provider, cache=EmbeddingCache(ttl_s=60.0),
    )
    return OriginalityGuard(client=client, config=settings.originality_config())


@pytest.mark.asyncio
class TestOriginalityFlow:
    async def test_regenerates_until_original(
        self, guard, provider, lighthouse_text, bakery_text, lighthouse_reference
    ):
        prompt = enhance_prompt_with_context(
            "Write a short story", build_context_summary([lighthouse_reference]),
        )
        assert "Context 1 (story)" in prompt

        generate = Scripted(lighthouse_text, bakery_text)
        outcome = await generate_original_content(
            generate, prompt, [lighthouse_reference], guard=guard,
        )

        assert outcome.passed is True
        assert outcome.attempts == 2
        check = outcome.result.similarity_checks[0]
        assert check.cosine_source == "embedding"
        assert check.cosine_similarity == pytest.approx(0.0)
        assert check.risk_level == "low"
        # Reference embedding is served from cache on the second attempt
        assert provider.calls == [[lighthouse_text], [bakery_text]]
        assert generate.prompts[1].startswith(prompt)

    async def test_leaky_text_gets_source_instructions(
        self, guard, bakery_text, lighthouse_reference
    ):
        leaky = bakery_text + " See https://example.com/bakery for details."
        result = await guard.check(leaky, [lighthouse_reference])
        assert result.is_original is False
        assert result.source_leakage_detected is True

        improved = generate_improvement_prompt(result, "Write a short story")
        assert "- Do not include any URLs, citations, or references" in improved

    async def test_policy_overrides_relax_thresholds(
        self, guard, lighthouse_text, lighthouse_reference
    ):
        relaxed = OriginalityConfig.from_policy(
            {"max_similarity_threshold": 1.5, "max_jaccard_threshold": 1.5, "min_originality_score": 1}
        )
        result = await guard.check(lighthouse_text, [lighthouse_reference], config=relaxed)
        assert result.is_original is True
        assert result.similarity_checks[0].risk_level == "critical"
