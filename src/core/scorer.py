# src/core/scorer.py - v1
"""Multi-metric originality scorer.

Compares one generated text against N references using embedding cosine
similarity (or a term-frequency fallback), 5-gram Jaccard similarity and
overlapping-phrase extraction, then applies leakage detection once on the
generated text and folds everything into a single pass/fail decision.

Scoring:
    cosine_score  = max(0, (1 - max_cosine) * 100)
    jaccard_score = max(0, (1 - max_jaccard) * 100)
    leakage_score = 0 if leakage else 20
    overall       = round_half_up(0.4 * cosine_score + 0.4 * jaccard_score + 0.2 * leakage_score)
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from originality_guard.core.leakage import detect_source_leakage
from originality_guard.core.models import (
    DEFAULT_ORIGINALITY_CONFIG,
    CosineSource,
    OriginalityConfig,
    OriginalityResult,
    ReferenceContent,
    SimilarityCheck,
)
from originality_guard.core.risk import classify_risk
from originality_guard.core.similarity import (
    cosine_similarity,
    find_overlapping_phrases,
    jaccard_5gram,
    semantic_similarity_fallback,
)

logger = logging.getLogger(__name__)

COSINE_RECOMMENDATION = (
    "Content is too semantically similar to reference material. "
    "Try rephrasing key concepts."
)
JACCARD_RECOMMENDATION = (
    "Text contains too many similar phrases. "
    "Use different wording and sentence structures."
)
LEAKAGE_RECOMMENDATION = (
    "Remove references, URLs, or citations. Content should be standalone."
)
SCORE_RECOMMENDATION = (
    "Increase creativity and originality. Add unique perspectives or examples."
)


def _reference_cosine(
    generated_text: str,
    reference: ReferenceContent,
    config: OriginalityConfig,
    generated_embedding: Sequence[float] | None,
) -> tuple[float, CosineSource]:
    if generated_embedding is not None and reference.embedding is not None:
        if len(generated_embedding) != len(reference.embedding):
            logger.warning(
                "Embedding dimension mismatch for reference %s (%d != %d), "
                "treating cosine similarity as 0",
                reference.id, len(generated_embedding), len(reference.embedding),
            )
            return 0.0, "none"
        return cosine_similarity(generated_embedding, reference.embedding), "embedding"
    if config.enable_semantic_checks:
        return (
            semantic_similarity_fallback(generated_text, reference.content),
            "term_frequency",
        )
    return 0.0, "none"


def check_originality(
    generated_text: str,
    references: Sequence[ReferenceContent],
    config: OriginalityConfig = DEFAULT_ORIGINALITY_CONFIG,
    generated_embedding: Sequence[float] | None = None,
) -> OriginalityResult:
    """Score generated text against references and decide originality.

    References are processed and reported in input order. A reference whose
    embedding length differs from the generated embedding contributes a
    cosine similarity of 0 instead of failing the whole check.
    """
    checks: list[SimilarityCheck] = []
    max_cosine = 0.0
    max_jaccard = 0.0

    for reference in references:
        cosine, source = _reference_cosine(
            generated_text, reference, config, generated_embedding
        )
        jaccard = jaccard_5gram(generated_text, reference.content)
        checks.append(
            SimilarityCheck(
                reference_id=reference.id,
                reference_title=reference.title,
                cosine_similarity=cosine,
                jaccard_similarity=jaccard,
                overlapping_phrases=find_overlapping_phrases(
                    generated_text, reference.content
                ),
                risk_level=classify_risk(cosine, jaccard),
                cosine_source=source,
            )
        )
        max_cosine = max(max_cosine, cosine)
        max_jaccard = max(max_jaccard, jaccard)

    leakage = config.block_source_disclosure and detect_source_leakage(generated_text)

    cosine_score = max(0.0, (1 - max_cosine) * 100)
    jaccard_score = max(0.0, (1 - max_jaccard) * 100)
    leakage_score = 0 if leakage else 20
    # Half-up rounding, not banker's rounding
    overall_score = math.floor(
        cosine_score * 0.4 + jaccard_score * 0.4 + leakage_score * 0.2 + 0.5
    )

    passes_cosine = max_cosine <= config.max_cosine_similarity
    passes_jaccard = max_jaccard <= config.max_jaccard_similarity
    passes_score = overall_score >= config.min_originality_score

    recommendations: list[str] = []
    if not passes_cosine:
        recommendations.append(COSINE_RECOMMENDATION)
    if not passes_jaccard:
        recommendations.append(JACCARD_RECOMMENDATION)
    if leakage:
        recommendations.append(LEAKAGE_RECOMMENDATION)
    if not passes_score:
        recommendations.append(SCORE_RECOMMENDATION)

    is_original = passes_cosine and passes_jaccard and passes_score and not leakage

    logger.debug(
        "Originality check: %d references, cosine=%.3f jaccard=%.3f "
        "leakage=%s score=%d original=%s",
        len(checks), max_cosine, max_jaccard, leakage, overall_score, is_original,
    )

    return OriginalityResult(
        is_original=is_original,
        overall_score=overall_score,
        cosine_similarity=max_cosine,
        jaccard_similarity=max_jaccard,
        source_leakage_detected=leakage,
        similarity_checks=checks,
        recommendations=recommendations,
    )
