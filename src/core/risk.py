# src/core/risk.py - v1
"""Per-reference risk labelling from cosine and Jaccard similarity.

Thresholds are fixed and independent of OriginalityConfig, which only gates
the final pass/fail decision.
"""

from __future__ import annotations

from originality_guard.core.models import RiskLevel

# (level, cosine threshold, jaccard threshold), most severe first
RISK_THRESHOLDS: tuple[tuple[RiskLevel, float, float], ...] = (
    ("critical", 0.9, 0.3),
    ("high", 0.8, 0.2),
    ("medium", 0.6, 0.1),
)


def classify_risk(cosine: float, jaccard: float) -> RiskLevel:
    """Map a (cosine, jaccard) pair to an ordinal risk level."""
    for level, max_cosine, max_jaccard in RISK_THRESHOLDS:
        if cosine > max_cosine or jaccard > max_jaccard:
            return level
    return "low"
