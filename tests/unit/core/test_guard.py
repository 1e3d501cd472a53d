# tests/unit/core/test_guard.py - v1
"""Tests for core/guard.py: on-demand embedding before scoring."""

from __future__ import annotations

import pytest

from originality_guard.core.guard import OriginalityGuard
from originality_guard.core.models import OriginalityConfig, ReferenceContent
from originality_guard.embeddings.base_provider import (
    BaseEmbeddingProvider,
    parse_embedding_payload,
)
from originality_guard.embeddings.client import EmbeddingClient
from originality_guard.embeddings.errors import ExhaustedRetriesError, ProviderAuthError
from originality_guard.embeddings.models import ProviderResponse


class NullVectorProvider(BaseEmbeddingProvider):
    """Answers every call with a payload whose vectors contain null."""

    def __init__(self) -> None:
        self.calls = 0

    async def embed(self, texts: list[str], model: str) -> ProviderResponse:
        self.calls += 1
        payload = {"data": [{"embedding": [None]} for _ in texts]}
        return parse_embedding_payload(payload, expected=len(texts))

    @property
    def provider_name(self) -> str:
        return "null"


@pytest.mark.asyncio
class TestOriginalityGuard:
    async def test_embeds_generated_and_references(
        self, embedding_client, fake_provider, lighthouse_text, bakery_text
    ):
        refs = [
            ReferenceContent(id="a", content=bakery_text),
            ReferenceContent(id="b", content="Reference with stored vector", embedding=[1.0, 1.0, 1.0]),
            ReferenceContent(id="c", content=lighthouse_text),
        ]
        guard = OriginalityGuard(client=embedding_client)
        result = await guard.check(lighthouse_text, refs)

        # The generated text is cached, so the batch only fetches the bakery text
        assert fake_provider.calls == [[lighthouse_text], [bakery_text]]
        assert [c.cosine_source for c in result.similarity_checks] == ["embedding"] * 3
        # Same text, same fake vector
        assert result.similarity_checks[2].cosine_similarity == pytest.approx(1.0)

    async def test_supplied_embedding_skips_client(
        self, embedding_client, fake_provider, lighthouse_text
    ):
        refs = [ReferenceContent(id="a", content=lighthouse_text, embedding=[1.0, 0.0])]
        guard = OriginalityGuard(client=embedding_client)
        result = await guard.check(lighthouse_text, refs, generated_embedding=[1.0, 0.0])
        assert fake_provider.calls == []
        assert result.similarity_checks[0].cosine_source == "embedding"

    async def test_semantic_disabled_skips_client(
        self, embedding_client, fake_provider, lighthouse_text
    ):
        guard = OriginalityGuard(
            client=embedding_client, config=OriginalityConfig(enable_semantic_checks=False)
        )
        result = await guard.check(lighthouse_text, [ReferenceContent(id="a", content=lighthouse_text)])
        assert fake_provider.calls == []
        assert result.cosine_similarity == 0.0

    async def test_no_references_skips_client(self, embedding_client, fake_provider, bakery_text):
        result = await OriginalityGuard(client=embedding_client).check(bakery_text, [])
        assert fake_provider.calls == []
        assert result.is_original is True

    async def test_without_client_uses_fallback(self, lighthouse_text):
        result = await OriginalityGuard().check(
            lighthouse_text, [ReferenceContent(id="a", content=lighthouse_text)]
        )
        assert result.similarity_checks[0].cosine_source == "term_frequency"

    async def test_provider_failure_falls_back(
        self, embedding_client, fake_provider, lighthouse_text
    ):
        fake_provider.errors.append(ProviderAuthError("Invalid API key"))
        result = await OriginalityGuard(client=embedding_client).check(
            lighthouse_text, [ReferenceContent(id="a", content=lighthouse_text)]
        )
        assert len(fake_provider.calls) == 1
        assert result.similarity_checks[0].cosine_source == "term_frequency"

    async def test_strict_mode_propagates(self, embedding_client, fake_provider, lighthouse_text):
        fake_provider.errors.append(ProviderAuthError("Invalid API key"))
        guard = OriginalityGuard(client=embedding_client, strict=True)
        with pytest.raises(ProviderAuthError):
            await guard.check(lighthouse_text, [ReferenceContent(id="a", content=lighthouse_text)])

    async def test_per_call_config_overrides(self, lighthouse_text):
        guard = OriginalityGuard()
        strict = OriginalityConfig(min_originality_score=101)
        result = await guard.check("Plain words", [], config=strict)
        assert result.is_original is False

    async def test_malformed_vectors_fall_back_after_retries(
        self, embedding_cache, sleep_recorder, lighthouse_text
    ):
        provider = NullVectorProvider()
        client = EmbeddingClient(provider=provider, cache=embedding_cache, sleep=sleep_recorder)
        result = await OriginalityGuard(client=client).check(
            "a generated story", [ReferenceContent(id="a", content=lighthouse_text)]
        )
        assert provider.calls == 3
        assert sleep_recorder.delays == [1.0, 2.0]
        assert result.similarity_checks[0].cosine_source == "term_frequency"

    async def test_malformed_vectors_strict_raises(
        self, embedding_cache, sleep_recorder, lighthouse_text
    ):
        client = EmbeddingClient(
            provider=NullVectorProvider(), cache=embedding_cache, sleep=sleep_recorder,
        )
        guard = OriginalityGuard(client=client, strict=True)
        with pytest.raises(ExhaustedRetriesError):
            await guard.check("a generated story", [ReferenceContent(id="a", content=lighthouse_text)])

    async def test_embed_without_client_raises(self, lighthouse_text):
        with pytest.raises(RuntimeError, match="no embedding client"):
            await OriginalityGuard()._embed(lighthouse_text, [])
