# src/core/models.py - v1
"""Originality domain models: config, references, per-reference checks and results.

All models are fixed-shape pydantic records. Thresholds in OriginalityConfig are
plain bounds and are not range-validated; out-of-range values only
make the check more permissive or more restrictive.
"""

from __future__ import annotations

from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

RiskLevel = Literal["low", "medium", "high", "critical"]
CosineSource = Literal["embedding", "term_frequency", "none"]


class OriginalityConfig(BaseModel):
    """Pass/fail thresholds for a single originality check."""

    model_config = ConfigDict(frozen=True)

    max_cosine_similarity: float = 0.82
    max_jaccard_similarity: float = 0.18
    min_originality_score: float = 75
    block_source_disclosure: bool = True
    enable_semantic_checks: bool = True

    @classmethod
    def from_policy(cls, policy: Mapping[str, Any] | None) -> OriginalityConfig:
        """Build a config from a stored organisation policy row.

        Missing or falsy thresholds and missing or NULL flags fall back to
        the conservative defaults.
        """
        if not policy:
            return cls()
        defaults = cls()
        return cls(
            max_cosine_similarity=policy.get("max_similarity_threshold")
            or defaults.max_cosine_similarity,
            max_jaccard_similarity=policy.get("max_jaccard_threshold")
            or defaults.max_jaccard_similarity,
            min_originality_score=policy.get("min_originality_score")
            or defaults.min_originality_score,
            block_source_disclosure=_flag(
                policy, "block_source_disclosure", defaults.block_source_disclosure
            ),
            enable_semantic_checks=_flag(
                policy, "enable_semantic_checks", defaults.enable_semantic_checks
            ),
        )


def _flag(policy: Mapping[str, Any], key: str, default: bool) -> bool:
    value = policy.get(key)
    return default if value is None else value


DEFAULT_ORIGINALITY_CONFIG = OriginalityConfig()


class ReferenceContent(BaseModel):
    """Reference material the generated text is compared against."""

    id: str
    title: str | None = None
    content: str = Field(min_length=1)
    embedding: list[float] | None = None
    category: str | None = None


class SimilarityCheck(BaseModel):
    """Similarity of the generated text against one reference."""

    reference_id: str
    reference_title: str | None = None
    cosine_similarity: float
    jaccard_similarity: float
    overlapping_phrases: list[str] = Field(default_factory=list)
    risk_level: RiskLevel
    cosine_source: CosineSource = "none"


class OriginalityResult(BaseModel):
    """Aggregated originality decision across all references."""

    is_original: bool
    overall_score: int
    cosine_similarity: float = 0.0
    jaccard_similarity: float = 0.0
    source_leakage_detected: bool = False
    similarity_checks: list[SimilarityCheck] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
