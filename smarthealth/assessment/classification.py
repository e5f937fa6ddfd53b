from __future__ import annotations

"""
Keyword classifier over the free-text prediction label.

Matching is plain substring containment on the lower-cased label, so a
negation term anywhere (including inside another word) suppresses every
risky term.
"""

RISKY_TERMS: tuple[str, ...] = (
    "diabetes",
    "heart",
    "hypertension",
    "disease",
    "risk",
    "high",
    "positive",
)
NEGATION_TERMS: tuple[str, ...] = ("no", "not", "normal", "healthy", "negative")


def classify(label: str | None) -> bool:
    lower = (label or "").lower()
    has_risky = any(term in lower for term in RISKY_TERMS)
    has_negation = any(term in lower for term in NEGATION_TERMS)
    return has_risky and not has_negation
