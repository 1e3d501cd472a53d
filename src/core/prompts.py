# src/core/prompts.py - v1
"""Prompt helpers for originality-aware generation.

generate_improvement_prompt rewrites a generation prompt after a failed
originality check. build_context_summary and enhance_prompt_with_context
inject reference material as loose inspiration while asking the model not
to copy it.
"""

from __future__ import annotations

from typing import Sequence

from originality_guard.core.models import OriginalityResult, ReferenceContent

# Bullet thresholds, independent of OriginalityConfig
IMPROVEMENT_COSINE_THRESHOLD = 0.8
IMPROVEMENT_JACCARD_THRESHOLD = 0.15

CONTEXT_SEPARATOR = "\n\n---\n\n"


def generate_improvement_prompt(result: OriginalityResult, original_prompt: str) -> str:
    """Append corrective originality instructions to a prompt.

    Returns the prompt unchanged when the result is already original.
    """
    if result.is_original:
        return original_prompt

    lines = [original_prompt, "", "IMPORTANT ORIGINALITY REQUIREMENTS:"]

    if result.cosine_similarity > IMPROVEMENT_COSINE_THRESHOLD:
        lines.append("- Use completely different concepts, metaphors, and examples")
        lines.append("- Avoid similar semantic meanings and themes")

    if result.jaccard_similarity > IMPROVEMENT_JACCARD_THRESHOLD:
        lines.append("- Use entirely different sentence structures and phrasings")
        lines.append("- Avoid repeating word combinations from reference material")

    if result.source_leakage_detected:
        lines.append("- Do not include any URLs, citations, or references")
        lines.append("- Create standalone content without attribution")

    lines.append("- Be more creative and add unique personal touches")
    lines.append("- Focus on original storytelling and fresh perspectives")

    return "\n".join(lines) + "\n"


def build_context_summary(
    references: Sequence[ReferenceContent], excerpt_chars: int = 400
) -> str:
    """Summarise references as numbered inspiration excerpts."""
    blocks = [
        f"Context {index} ({reference.category}): "
        f"{reference.content[:excerpt_chars]}..."
        for index, reference in enumerate(references, start=1)
    ]
    return CONTEXT_SEPARATOR.join(blocks)


_ORIGINALITY_RULES = """
CRITICAL ORIGINALITY REQUIREMENTS:
1. Create 100% original content - no direct copying or close paraphrasing
2. Use completely different examples, names, and specific details
3. If inspired by themes, express them in entirely new ways
4. Avoid any recognizable phrases or sentence structures from the reference material
5. Create unique storylines that feel fresh and original
6. Focus on your own creative interpretation rather than following reference patterns

"""


def enhance_prompt_with_context(
    original_prompt: str,
    context_summary: str,
    originality_mode: bool = True,
) -> str:
    """Append reference context to a prompt as reference-only inspiration."""
    if not context_summary.strip():
        return original_prompt

    rules = _ORIGINALITY_RULES if originality_mode else ""
    return (
        f"{original_prompt}\n\n"
        "CONTEXTUAL INSPIRATION (FOR REFERENCE ONLY):\n"
        "The following content is provided as loose inspiration. Your task is to "
        "create completely original content that may draw thematic inspiration but "
        "must NOT copy, paraphrase, or closely follow any of this material:\n\n"
        f"{context_summary}\n\n"
        f"{rules}"
        "Your response must be entirely original while potentially drawing broad "
        "thematic inspiration from the context provided."
    )
