# src/core/similarity.py - v2
"""Text and vector similarity primitives used by the originality scorer.

- cosine_similarity: strict cosine over two equal-length vectors (numpy).
- jaccard_5gram: Jaccard index over sets of contiguous 5-word shingles.
- semantic_similarity_fallback: term-frequency cosine used when no
  embeddings are available.
- find_overlapping_phrases: verbatim phrases shared by two texts.

None of these functions perform I/O.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Sequence

import numpy as np

_WORD_RE = re.compile(r"\w+", re.UNICODE)

SHINGLE_SIZE = 5
MAX_PHRASE_WORDS = 8
MIN_PHRASE_CHARS = 15
MAX_PHRASES = 5


def tokenize(text: str) -> list[str]:
    """Lowercase word tokenizer splitting on whitespace and punctuation."""
    return _WORD_RE.findall(text.lower())


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors.

    Raises:
        ValueError: If the vectors differ in length.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise ValueError(
            f"Embedding vectors must have the same length ({va.size} != {vb.size})"
        )
    denominator = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denominator == 0.0:
        return 0.0
    return float(np.dot(va, vb) / denominator)


def _shingles(words: list[str], n: int) -> list[str]:
    return [" ".join(words[i:i + n]) for i in range(len(words) - n + 1)]


def jaccard_5gram(text_a: str, text_b: str) -> float:
    """Jaccard similarity over contiguous 5-word shingles (0 if both are empty)."""
    grams_a = set(_shingles(tokenize(text_a), SHINGLE_SIZE))
    grams_b = set(_shingles(tokenize(text_b), SHINGLE_SIZE))
    union = grams_a | grams_b
    if not union:
        return 0.0
    return len(grams_a & grams_b) / len(union)


def semantic_similarity_fallback(text_a: str, text_b: str) -> float:
    """Term-frequency cosine similarity over the union vocabulary.

    A degraded substitute for embedding similarity: each component is the
    word count divided by the text's total word count.
    """
    words_a = tokenize(text_a)
    words_b = tokenize(text_b)
    if not words_a or not words_b:
        return 0.0

    counts_a = Counter(words_a)
    counts_b = Counter(words_b)
    vocabulary = list(dict.fromkeys(words_a + words_b))
    vector_a = [counts_a[w] / len(words_a) for w in vocabulary]
    vector_b = [counts_b[w] / len(words_b) for w in vocabulary]
    return cosine_similarity(vector_a, vector_b)


def find_overlapping_phrases(
    text_a: str, text_b: str, min_length: int = 4
) -> list[str]:
    """Return up to five verbatim phrases shared by both texts, longest first.

    Phrases are between min_length and 8 words and longer than 15
    characters. Cost grows with text length; intended for paragraph-sized
    inputs.
    """
    words_a = tokenize(text_a)
    words_b = tokenize(text_b)
    upper = min(MAX_PHRASE_WORDS, len(words_a), len(words_b))

    found: dict[str, None] = {}
    for length in range(min_length, upper + 1):
        grams_b = set(_shingles(words_b, length))
        for phrase in _shingles(words_a, length):
            if phrase in grams_b and len(phrase) > MIN_PHRASE_CHARS:
                found.setdefault(phrase, None)

    return sorted(found, key=len, reverse=True)[:MAX_PHRASES]
