# src/core/guard.py - v1
"""Async originality guard: acquires embeddings when needed, then scores.

Embeddings are fetched only when the caller supplied no generated embedding,
semantic checks are enabled and an EmbeddingClient is configured. Provider
failures degrade to the term-frequency fallback unless ``strict`` is set.
"""

from __future__ import annotations

import logging
from typing import Sequence

from originality_guard.core.models import (
    DEFAULT_ORIGINALITY_CONFIG,
    OriginalityConfig,
    OriginalityResult,
    ReferenceContent,
)
from originality_guard.core.scorer import check_originality
from originality_guard.embeddings.client import EmbeddingClient
from originality_guard.embeddings.errors import EmbeddingError

logger = logging.getLogger(__name__)


class OriginalityGuard:
    """Checks generated text against references, embedding on demand."""

    def __init__(
        self,
        client: EmbeddingClient | None = None,
        config: OriginalityConfig = DEFAULT_ORIGINALITY_CONFIG,
        strict: bool = False,
    ) -> None:
        self._client = client
        self._config = config
        self._strict = strict

    @property
    def config(self) -> OriginalityConfig:
        return self._config

    async def check(
        self,
        generated_text: str,
        references: Sequence[ReferenceContent],
        config: OriginalityConfig | None = None,
        generated_embedding: Sequence[float] | None = None,
    ) -> OriginalityResult:
        config = config or self._config
        refs = list(references)

        if (
            generated_embedding is None
            and config.enable_semantic_checks
            and self._client is not None
            and refs
        ):
            try:
                generated_embedding, refs = await self._embed(generated_text, refs)
            except EmbeddingError as e:
                if self._strict:
                    raise
                logger.warning(
                    "Embedding unavailable, using term-frequency fallback: %s", e
                )
                generated_embedding = None
                refs = list(references)

        return check_originality(generated_text, refs, config, generated_embedding)

    async def _embed(
        self, generated_text: str, refs: list[ReferenceContent]
    ) -> tuple[list[float], list[ReferenceContent]]:
        if self._client is None:
            raise RuntimeError("OriginalityGuard has no embedding client")
        generated = await self._client.generate_embedding(generated_text)

        pending = [i for i, ref in enumerate(refs) if ref.embedding is None]
        if pending:
            embedded = await self._client.generate_embeddings_batch(
                [refs[i].content for i in pending]
            )
            for index, result in zip(pending, embedded):
                refs[index] = refs[index].model_copy(
                    update={"embedding": result.embedding}
                )
        return generated.embedding, refs
