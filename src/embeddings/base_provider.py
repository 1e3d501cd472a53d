# src/embeddings/base_provider.py - v1
"""Abstract embedding provider interface and payload validation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from originality_guard.embeddings.errors import MalformedResponseError
from originality_guard.embeddings.models import ProviderResponse


class BaseEmbeddingProvider(ABC):
    """One network round-trip per call; no caching or retries."""

    @abstractmethod
    async def embed(self, texts: list[str], model: str) -> ProviderResponse:
        """Embed texts, returning one vector per input in input order.

        Raises:
            ProviderAuthError: Credentials, quota or billing problem.
            ProviderTransientError: Timeout, connection or server error.
            MalformedResponseError: Payload lacks usable embeddings.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""


def parse_embedding_payload(payload: Any, expected: int) -> ProviderResponse:
    """Validate a ``{data: [{embedding: [...]}], usage?: {total_tokens}}`` payload."""
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list) or not data:
        raise MalformedResponseError("Invalid response format from embedding provider")

    embeddings: list[list[float]] = []
    for index in range(expected):
        item = data[index] if index < len(data) else None
        vector = item.get("embedding") if isinstance(item, dict) else None
        if not isinstance(vector, list) or not vector:
            raise MalformedResponseError(f"Missing embedding for text at index {index}")
        try:
            embeddings.append([float(x) for x in vector])
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(f"Non-numeric embedding at index {index}") from e

    usage = payload.get("usage")
    total_tokens = usage.get("total_tokens") if isinstance(usage, dict) else None
    return ProviderResponse(
        embeddings=embeddings,
        total_tokens=total_tokens if isinstance(total_tokens, int) and total_tokens > 0 else None,
    )
