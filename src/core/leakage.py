# src/core/leakage.py - v1
"""Heuristic source-leakage detection.

Flags generated text that carries URLs, citation markers, page or chapter
references, document mentions or long direct quotes. False negatives are
expected; false positives only cause a regeneration with new phrasing.
Patterns are evaluated in table order and short-circuit on first match.
"""

from __future__ import annotations

import re

_I = re.IGNORECASE

LEAKAGE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    # Web references
    ("url", re.compile(r"https?://[^\s]+", _I)),
    ("www_domain", re.compile(r"www\.[^\s]+", _I)),
    # Academic and document-sharing sites, page/chapter markers
    ("document_site", re.compile(r"scribd|academia\.edu|researchgate", _I)),
    ("chapter_reference", re.compile(r"(chapter|cap[ií]tulo)\s+\d+", _I)),
    ("page_reference", re.compile(r"(page|p[áa]gina)\s+\d+", _I)),
    ("page_range", re.compile(r"pp\.\s*\d+", _I)),
    # Citations
    ("citation_connector", re.compile(r"according to|seg[uú]n|fuente:|source:", _I)),
    ("parenthetical_year", re.compile(r"\(.*\d{4}.*\)")),
    ("et_al", re.compile(r"et al\.", _I)),
    ("ibid", re.compile(r"ibid\.|op\. cit\.", _I)),
    # Document references
    ("document_mention", re.compile(r"documento|document|anexo|appendix", _I)),
    ("figure_reference", re.compile(r"figura \d+|figure \d+", _I)),
    ("table_reference", re.compile(r"tabla \d+|table \d+", _I)),
    # Direct quotes
    ("long_quote", re.compile(r'"[^"]{50,}"')),
    ("long_typographic_quote", re.compile(r"“[^”]{50,}”")),
    ("long_angle_quote", re.compile(r"«[^»]{50,}»")),
    ("verbatim_marker", re.compile(r"textualmente|literally|quote", _I)),
)


def detect_source_leakage(text: str) -> bool:
    """Return True if any leakage pattern matches the text."""
    return any(pattern.search(text) for _, pattern in LEAKAGE_PATTERNS)


def find_leakage_markers(text: str) -> list[str]:
    """Return the names of all matching leakage patterns, in table order."""
    return [name for name, pattern in LEAKAGE_PATTERNS if pattern.search(text)]
