# tests/test_day94_candidate_confidence.py
"""
Day 94: Menu Scan — Candidate Confidence Scoring

Covers:
  - Shape adjustments (word count, length, digits, caps, title case)
  - Description short-circuit
  - Secondary descriptive penalty
  - Clamp bounds [0.05, 0.95]
  - Confidence tiers
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from menuscan.scoring.confidence import (
    DESCRIPTION_SCORE,
    MAX_SCORE,
    MIN_SCORE,
    confidence_tier,
    score_candidate,
)


# ===========================================================================
# SECTION 1: Shape adjustments
# ===========================================================================

class TestScoreShapes:

    def test_caps_two_words(self):
        # 0.55 + 0.20 (2-6 words) + 0.18 (caps)
        assert score_candidate("GRILLED SALMON") == 0.93

    def test_title_case_two_words(self):
        # 0.55 + 0.20 + 0.08 (title case)
        assert score_candidate("Caesar Salad") == 0.83

    def test_lowercase_two_words(self):
        assert score_candidate("caesar salad") == 0.75

    def test_single_word(self):
        assert score_candidate("Burger") == 0.43

    def test_single_caps_word_gets_no_caps_bonus(self):
        assert score_candidate("BURGER") == 0.43

    def test_digits_penalized(self):
        # 0.55 + 0.20 - 0.25 + 0.08
        assert score_candidate("Combo 12 Burger") == 0.58

    def test_caps_with_connector_over_30_chars(self):
        # 0.55 + 0.20 - 0.35 (descriptive) + 0.18 (caps)
        assert score_candidate("GRILLED CHICKEN WITH RICE AND BEANS") == 0.58

    def test_seven_words_no_description(self):
        # 0.55 - 0.22 (>= 7 words) - 0.18 (>= 40 chars), no caps bonus past 6 words
        text = "THE ORIGINAL BIG TEXAS SMOKEHOUSE BRISKET PLATTER"
        assert score_candidate(text) == 0.15


# ===========================================================================
# SECTION 2: Description short-circuit
# ===========================================================================

class TestDescriptionScore:

    def test_description_flat_score(self):
        text = "a delicate blend of seasonal vegetables tossed with fresh herbs"
        assert score_candidate(text) == DESCRIPTION_SCORE == 0.12

    def test_folded_title_with_description(self):
        text = "PASTA PRIMAVERA — a delicate blend of seasonal vegetables tossed with fresh herbs"
        assert score_candidate(text) == 0.12

    def test_caps_sentence_not_short_circuited(self):
        assert score_candidate("STEAK, EGGS: CHOICE OF TOAST") != DESCRIPTION_SCORE


# ===========================================================================
# SECTION 3: Bounds
# ===========================================================================

BOUND_SAMPLES = [
    "",
    "X",
    "GRILLED SALMON",
    "Caesar Salad",
    "THE BIG 12 OZ 1/2 LB DOUBLE STACK BURGER WITH FRIES AND SLAW",
    "123 456 789",
    "a delicate blend of seasonal vegetables tossed with fresh herbs",
    "Mac-n-Cheese Bites",
    "GRILLED SALMON (weekend only)",
    "Pho",
]


class TestBounds:

    @pytest.mark.parametrize("text", BOUND_SAMPLES)
    def test_within_bounds(self, text):
        score = score_candidate(text)
        assert MIN_SCORE <= score <= MAX_SCORE

    def test_floor_clamp(self):
        text = "THE BIG 12 OZ 1/2 LB DOUBLE STACK BURGER WITH FRIES AND SLAW"
        assert score_candidate(text) == 0.05

    def test_none_safe(self):
        assert MIN_SCORE <= score_candidate(None) <= MAX_SCORE


# ===========================================================================
# SECTION 4: Tiers
# ===========================================================================

class TestTiers:

    @pytest.mark.parametrize("score,tier", [
        (0.93, "high"),
        (0.75, "high"),
        (0.74, "medium"),
        (0.45, "medium"),
        (0.44, "low"),
        (0.12, "low"),
    ])
    def test_tier(self, score, tier):
        assert confidence_tier(score) == tier
