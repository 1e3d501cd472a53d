# src/embeddings/client_factory.py - v1
"""Factory: build an EmbeddingClient from application settings."""

from __future__ import annotations

import logging

from originality_guard.config.settings import Settings
from originality_guard.embeddings.base_provider import BaseEmbeddingProvider
from originality_guard.embeddings.cache import EmbeddingCache, get_default_cache
from originality_guard.embeddings.client import EmbeddingClient
from originality_guard.embeddings.retry import RetryPolicy

logger = logging.getLogger(__name__)


def create_embedding_client(
    settings: Settings | None = None,
    provider: BaseEmbeddingProvider | None = None,
    cache: EmbeddingCache | None = None,
) -> EmbeddingClient:
    """Wire provider, cache and retry policy from settings.

    Args:
        settings: Application settings (defaults loaded from .env).
        provider: Override the provider (defaults to OpenAI).
        cache: Override the cache. When omitted, the process-wide cache is
            used if its TTL matches the configured one, otherwise a
            dedicated cache is created.
    """
    settings = settings or Settings()

    if provider is None:
        from originality_guard.embeddings.openai_provider import OpenAIEmbeddingProvider

        provider = OpenAIEmbeddingProvider(
            api_key=settings.openai_api_key,
            base_url=settings.embedding_base_url,
            timeout_s=settings.embedding_timeout_s,
        )

    if cache is None:
        shared = get_default_cache()
        if shared.ttl == settings.embedding_cache_ttl_s:
            cache = shared
        else:
            cache = EmbeddingCache(ttl_s=settings.embedding_cache_ttl_s)

    logger.debug(
        "Creating embedding client: provider=%s model=%s",
        provider.provider_name, settings.embedding_model,
    )
    return EmbeddingClient(
        provider=provider,
        cache=cache,
        default_model=settings.embedding_model,
        retry_policy=RetryPolicy(max_attempts=settings.embedding_max_retries),
        cache_enabled=settings.embedding_cache_enabled,
        batch_size=settings.embedding_batch_size,
    )
