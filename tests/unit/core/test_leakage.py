# tests/unit/core/test_leakage.py - v1
"""Tests for core/leakage.py: source-leakage pattern detection."""

from __future__ import annotations

import pytest

from originality_guard.core.leakage import (
    LEAKAGE_PATTERNS,
    detect_source_leakage,
    find_leakage_markers,
)


class TestDetectSourceLeakage:
    @pytest.mark.parametrize(
        "text",
        [
            "See https://example.com/doc for details",
            "Visit www.wikipedia.org to learn more",
            "I found this on Scribd last week",
            "As shown in chapter 3 of the book",
            "Como dice el capítulo 7",
            "It is explained on page 42",
            "Lo vimos en la página 12",
            "Discussed in pp. 10-12",
            "According to Smith et al. (2020)",
            "Según los expertos, el bosque es antiguo",
            "Fuente: archivo municipal",
            "Source: the town archive",
            "The treaty (signed 1648) ended the war",
            "Ibid. the same argument applies",
            "This appendix lists every clue",
            "El anexo contiene los mapas",
            "As figure 2 shows, the path forks",
            "Revisa la tabla 4",
            "She literally ran home",
            "Lo dijo textualmente",
        ],
    )
    def test_flags_leakage(self, text):
        assert detect_source_leakage(text) is True

    def test_long_quoted_span(self):
        quoted = "x" * 60
        assert detect_source_leakage(f'He said "{quoted}" and left.') is True

    def test_short_quote_allowed(self):
        assert detect_source_leakage('She whispered "follow the lantern" and vanished.') is False

    def test_typographic_long_quote(self):
        quoted = "the lantern swung gently in the cold night wind as we walked on"
        assert detect_source_leakage(f"He said “{quoted}” and left.") is True

    def test_ordinary_narrative(self):
        text = (
            "The detectives gathered in the dusty attic, searching for the hidden "
            "key beneath the loose floorboards while the storm raged outside."
        )
        assert detect_source_leakage(text) is False

    def test_case_insensitive(self):
        assert detect_source_leakage("ACCORDING TO the map, we turn left") is True


class TestFindLeakageMarkers:
    def test_reports_all_matches_in_table_order(self):
        markers = find_leakage_markers("According to Smith et al. (2020), see https://a.io")
        order = [name for name, _ in LEAKAGE_PATTERNS]
        assert markers == sorted(markers, key=order.index)
        assert {"url", "citation_connector", "parenthetical_year", "et_al"} <= set(markers)

    def test_clean_text(self):
        assert find_leakage_markers("A quiet walk through the garden.") == []

    def test_agrees_with_detector(self):
        text = "Check www.example.org"
        assert bool(find_leakage_markers(text)) == detect_source_leakage(text)
