# src/embeddings/models.py - v1
"""Embedding result and raw provider response types."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EmbeddingResult(BaseModel):
    """One embedding with usage and cost accounting."""

    embedding: list[float]
    tokens_used: int = Field(ge=0)
    model: str
    cost_estimate: float = Field(ge=0)


class ProviderResponse(BaseModel):
    """Validated provider payload: one vector per input, in input order."""

    embeddings: list[list[float]]
    total_tokens: int | None = None
