"""
Confidence Scoring — candidate dish names
Blends line-shape indicators into a 0.05–0.95 confidence score.
"""

from __future__ import annotations

from menuscan.parsers.line_classifier import (
    count_digits,
    is_all_caps,
    is_description_like,
    is_long_with_connector,
)

BASE_SCORE = 0.55
DESCRIPTION_SCORE = 0.12
MIN_SCORE = 0.05
MAX_SCORE = 0.95

# Tier cut-offs for UI badges
TIER_HIGH = 0.75
TIER_MEDIUM = 0.45


def _is_title_case_word(word: str) -> bool:
    return word[:1].isupper() and word[1:].islower()


def score_candidate(text: str) -> float:
    """
    Heuristic confidence that *text* is a real dish title.

    'GRILLED SALMON'                 → 0.93
    'Caesar Salad'                   → 0.83
    'a blend of ... tossed with ...' → 0.12
    """
    stripped = (text or "").strip()

    if is_description_like(stripped):
        return DESCRIPTION_SCORE

    words = stripped.split()
    wc = len(words)
    mid_length = 2 <= wc <= 6

    score = BASE_SCORE
    if mid_length:
        score += 0.20
    elif wc == 1:
        score -= 0.12
    elif wc >= 7:
        score -= 0.22

    if len(stripped) >= 40:
        score -= 0.18
    if is_long_with_connector(stripped):
        score -= 0.35
    if count_digits(stripped) >= 2:
        score -= 0.25
    if is_all_caps(stripped) and mid_length:
        score += 0.18
    if words and _is_title_case_word(words[0]) and mid_length:
        score += 0.08

    return round(max(MIN_SCORE, min(MAX_SCORE, score)), 2)


def confidence_tier(score: float) -> str:
    """Map a candidate score to 'high' / 'medium' / 'low'."""
    if score >= TIER_HIGH:
        return "high"
    elif score >= TIER_MEDIUM:
        return "medium"
    return "low"
