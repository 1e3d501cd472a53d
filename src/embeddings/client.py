# src/embeddings/client.py - v1
"""Embedding acquisition with caching, retries and order-preserving batching.

generate_embedding validates input, consults the cache, then calls the
provider with bounded retries. generate_embeddings_batch splits oversized
inputs into chunks, fetches only cache misses in a single provider call per
chunk and scatters results back by original index.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import replace
from typing import Awaitable, Callable

from originality_guard.embeddings.base_provider import BaseEmbeddingProvider
from originality_guard.embeddings.cache import (
    EmbeddingCache,
    get_default_cache,
    make_cache_key,
)
from originality_guard.embeddings.errors import EmbeddingValidationError
from originality_guard.embeddings.models import EmbeddingResult
from originality_guard.embeddings.retry import RetryPolicy, with_retry

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "text-embedding-3-small"
MAX_TEXT_CHARS = 8000
DEFAULT_BATCH_SIZE = 100

# USD per 1K tokens
EMBEDDING_PRICING: dict[str, float] = {
    "text-embedding-3-small": 0.00002,
    "text-embedding-3-large": 0.00013,
    "text-embedding-ada-002": 0.0001,
}
DEFAULT_PRICE_PER_1K = EMBEDDING_PRICING[DEFAULT_MODEL]


def calculate_embedding_cost(
    tokens: int, model: str, pricing: dict[str, float] | None = None
) -> float:
    """Estimated USD cost; unknown models use the default price."""
    table = pricing or EMBEDDING_PRICING
    return tokens / 1000 * table.get(model, DEFAULT_PRICE_PER_1K)


def estimate_tokens(text: str) -> int:
    return math.ceil(len(text) / 4)


def validate_text(text: str) -> None:
    """Raise EmbeddingValidationError for empty or oversized input."""
    if not text:
        raise EmbeddingValidationError("Text input is required for embedding generation")
    if len(text) > MAX_TEXT_CHARS:
        raise EmbeddingValidationError(
            f"Text input is too long (max {MAX_TEXT_CHARS} characters)"
        )


class EmbeddingClient:
    """Cached, retrying front-end to an embedding provider."""

    def __init__(
        self,
        provider: BaseEmbeddingProvider,
        cache: EmbeddingCache | None = None,
        default_model: str = DEFAULT_MODEL,
        retry_policy: RetryPolicy | None = None,
        cache_enabled: bool = True,
        batch_size: int = DEFAULT_BATCH_SIZE,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._provider = provider
        self._cache = cache if cache is not None else get_default_cache()
        self._default_model = default_model
        self._retry_policy = retry_policy or RetryPolicy()
        self._cache_enabled = cache_enabled
        self._batch_size = batch_size
        self._sleep = sleep

    @property
    def cache(self) -> EmbeddingCache:
        return self._cache

    @property
    def default_model(self) -> str:
        return self._default_model

    async def generate_embedding(
        self,
        text: str,
        *,
        model: str | None = None,
        use_cache: bool | None = None,
        max_retries: int | None = None,
    ) -> EmbeddingResult:
        """Embed a single text.

        Raises:
            EmbeddingValidationError: Empty or oversized text (never retried).
            ProviderAuthError: Credential, quota or billing failure (never retried).
            ExhaustedRetriesError: Every attempt failed with a retryable error.
        """
        model = model or self._default_model
        use_cache = self._cache_enabled if use_cache is None else use_cache
        validate_text(text)

        key = make_cache_key(model, text)
        if use_cache:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug("Embedding cache hit (model=%s)", model)
                return cached

        async def _attempt() -> EmbeddingResult:
            response = await self._provider.embed([text], model)
            tokens = response.total_tokens or estimate_tokens(text)
            return EmbeddingResult(
                embedding=response.embeddings[0],
                tokens_used=tokens,
                model=model,
                cost_estimate=calculate_embedding_cost(tokens, model),
            )

        result = await with_retry(
            _attempt, policy=self._policy(max_retries), sleep=self._sleep,
        )
        if use_cache:
            self._cache.put(key, result)
        return result

    async def generate_embeddings_batch(
        self,
        texts: list[str],
        *,
        model: str | None = None,
        batch_size: int | None = None,
        use_cache: bool | None = None,
        max_retries: int | None = None,
    ) -> list[EmbeddingResult]:
        """Embed many texts; output length and order always match the input."""
        model = model or self._default_model
        use_cache = self._cache_enabled if use_cache is None else use_cache
        if not texts:
            return []
        for text in texts:
            validate_text(text)

        batch_size = max(1, batch_size or self._batch_size)
        if len(texts) > batch_size:
            results: list[EmbeddingResult] = []
            for start in range(0, len(texts), batch_size):
                results.extend(
                    await self.generate_embeddings_batch(
                        texts[start:start + batch_size],
                        model=model,
                        batch_size=batch_size,
                        use_cache=use_cache,
                        max_retries=max_retries,
                    )
                )
            return results

        slots: list[EmbeddingResult | None] = [None] * len(texts)
        missing: list[int] = []
        for index, text in enumerate(texts):
            cached = self._cache.get(make_cache_key(model, text)) if use_cache else None
            if cached is not None:
                slots[index] = cached
            else:
                missing.append(index)

        if missing:
            logger.debug(
                "Embedding batch: %d cached, %d to fetch (model=%s)",
                len(texts) - len(missing), len(missing), model,
            )
            to_fetch = [texts[i] for i in missing]
            try:
                response = await with_retry(
                    lambda: self._provider.embed(to_fetch, model),
                    policy=self._policy(max_retries),
                    operation="Batch embedding generation",
                    sleep=self._sleep,
                )
            except Exception:
                logger.error("Batch embedding generation failed (%d texts)", len(to_fetch))
                raise

            for position, index in enumerate(missing):
                text = texts[index]
                if response.total_tokens:
                    tokens = math.ceil(response.total_tokens / len(missing))
                else:
                    tokens = estimate_tokens(text)
                result = EmbeddingResult(
                    embedding=response.embeddings[position],
                    tokens_used=tokens,
                    model=model,
                    cost_estimate=calculate_embedding_cost(tokens, model),
                )
                slots[index] = result
                if use_cache:
                    self._cache.put(make_cache_key(model, text), result)

        return [result for result in slots if result is not None]

    def _policy(self, max_retries: int | None) -> RetryPolicy:
        if max_retries is None:
            return self._retry_policy
        return replace(self._retry_policy, max_attempts=max_retries)
