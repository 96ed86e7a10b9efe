# menuscan/parsers/line_classifier.py
"""
Line Classifier — labels a normalized menu line before folding.

Roles:
  - "title":       a probable dish name
  - "description": marketing / ingredient sentence belonging to the title above
  - "modifier":    bracketed or qualifier annotation ("(weekend only)", "gluten free")
  - "noise":       too long to be a dish, or price / number residue

Rule cascade (first match wins):
  1. modifier      — fully parenthesized, or contains a qualifier phrase
  2. noise (long)  — > 10 words, or > 30 chars with a connector word
  3. description   — long + descriptive phrase / sentence punctuation /
                     lowercase-heavy, never for ALL-CAPS or short lines
  4. noise (price) — empty, digits without letters, digit-dominant,
                     or 2-4 bare numbers
  5. title         — everything else

The connector clause of rule 2 does not apply to a line that reads as a
description, so descriptions of up to 10 words still fold onto their title.
The word-count clause always applies.

Design principles:
  - Pure regex + heuristic, no ML dependencies
  - ALL-CAPS and short lines are biased hard toward "title"
  - Word lists are hand-tuned English only
"""

from __future__ import annotations

import re
from typing import List


# ── Roles ────────────────────────────────────────────

ROLE_TITLE = "title"
ROLE_DESCRIPTION = "description"
ROLE_MODIFIER = "modifier"
ROLE_NOISE = "noise"

LINE_ROLES = (ROLE_TITLE, ROLE_DESCRIPTION, ROLE_MODIFIER, ROLE_NOISE)


# ── Thresholds ───────────────────────────────────────

_MAX_TITLE_WORDS = 10          # more words than this → noise
_CONNECTOR_MIN_LEN = 30        # connector words only count past this length
_DESC_MIN_WORDS = 7
_DESC_MIN_LEN = 38
_SHORT_MAX_WORDS = 6
_SHORT_MAX_LEN = 28
_LOWER_HEAVY_MIN_WORDS = 6
_LOWER_HEAVY_RATIO = 0.5


# ── Word lists ───────────────────────────────────────

# Availability / diet qualifiers that annotate a dish rather than name one
_MODIFIER_PHRASES = (
    "weekend only", "weekends only", "weekdays only",
    "lunch only", "dinner only",
    "limited time", "while supplies last",
    "special",
    "vegetarian", "vegan",
    "gluten free", "gluten-free",
    "dairy free", "dairy-free",
    "nut free", "contains nuts",
    "market price",
)

_MODIFIER_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(p) for p in _MODIFIER_PHRASES) + r")\b",
    re.IGNORECASE,
)

_PARENTHESIZED_RE = re.compile(r"^\(.*\)$")

_CONNECTOR_WORDS = (
    "with", "and", "served", "loaded", "tossed", "made",
    "style", "flavored", "crispy", "fried", "choice", "spicy",
)

_CONNECTOR_RE = re.compile(
    r"\b(?:" + "|".join(_CONNECTOR_WORDS) + r")\b",
    re.IGNORECASE,
)

_DESCRIPTIVE_PHRASE_RE = re.compile(
    r"\b(?:"
    r"served (?:with|on|over|in)"
    r"|touch of"
    r"|choice of"
    r"|topped with"
    r"|tossed (?:in|with)"
    r"|drizzled with"
    r"|finished with"
    r"|blend of"
    r"|made with"
    r"|accompanied by"
    r")\b",
    re.IGNORECASE,
)

_SENTENCE_PUNCT_RE = re.compile(r"[,;:]")

# "12 14", "9.50 12.00 15.00", "8 10 12 16"
_BARE_NUMBERS_RE = re.compile(r"\d+(?:[.,]\d+)?(?:\s+\d+(?:[.,]\d+)?){1,3}")


# ── Shape helpers ────────────────────────────────────

def count_digits(text: str) -> int:
    return sum(1 for c in text if c.isdigit())


def count_letters(text: str) -> int:
    return sum(1 for c in text if c.isalpha())


def is_all_caps(text: str) -> bool:
    """True when the line has letters and every letter is uppercase."""
    alpha = [c for c in text if c.isalpha()]
    return bool(alpha) and all(c.isupper() for c in alpha)


def is_short_line(text: str) -> bool:
    return len(text.split()) <= _SHORT_MAX_WORDS and len(text) <= _SHORT_MAX_LEN


def looks_like_title(text: str) -> bool:
    """Short or ALL-CAPS: how most menus typeset dish names."""
    return is_short_line(text) or is_all_caps(text)


def has_connector_word(text: str) -> bool:
    return bool(_CONNECTOR_RE.search(text))


def _is_lowercase_heavy(words: List[str]) -> bool:
    if len(words) < _LOWER_HEAVY_MIN_WORDS:
        return False
    lower_starts = sum(1 for w in words if w[:1].islower())
    return lower_starts / len(words) > _LOWER_HEAVY_RATIO


def is_description_like(text: str) -> bool:
    """
    Long line that reads like a sentence rather than a dish name.

    'a delicate blend of seasonal vegetables tossed with fresh herbs' → True
    'CHICKEN PARMESAN SERVED WITH SPAGHETTI AND GARLIC BREAD'         → False (caps)
    """
    stripped = text.strip()
    if not stripped:
        return False
    if looks_like_title(stripped):
        return False

    words = stripped.split()
    is_long = len(words) >= _DESC_MIN_WORDS or len(stripped) >= _DESC_MIN_LEN
    if not is_long:
        return False

    return bool(
        _DESCRIPTIVE_PHRASE_RE.search(stripped)
        or _SENTENCE_PUNCT_RE.search(stripped)
        or _is_lowercase_heavy(words)
    )


def is_too_many_words(text: str) -> bool:
    return len(text.split()) > _MAX_TITLE_WORDS


def is_long_with_connector(text: str) -> bool:
    """Long enough to be marketing copy and carries a connector word."""
    stripped = text.strip()
    return len(stripped) > _CONNECTOR_MIN_LEN and has_connector_word(stripped)


def is_price_or_number_noise(text: str) -> bool:
    """Price-only, number-only, or digit-dominant residue."""
    stripped = text.strip()
    if not stripped:
        return True

    digits = count_digits(stripped)
    letters = count_letters(stripped)

    if digits >= 2 and letters == 0:
        return True
    if digits > letters and digits >= 3:
        return True
    if _BARE_NUMBERS_RE.fullmatch(stripped):
        return True
    return False


def is_modifier(text: str) -> bool:
    stripped = text.strip()
    if not stripped:
        return False
    if _PARENTHESIZED_RE.match(stripped):
        return True
    if "weekend" in stripped.lower():
        return True
    return bool(_MODIFIER_RE.search(stripped))


# ── Classifier ───────────────────────────────────────

def classify_line(line: str) -> str:
    """Return the LineRole for one normalized line."""
    text = (line or "").strip()

    if is_modifier(text):
        return ROLE_MODIFIER

    if is_too_many_words(text):
        return ROLE_NOISE

    description_like = is_description_like(text)

    if not description_like and is_long_with_connector(text):
        return ROLE_NOISE

    if description_like:
        return ROLE_DESCRIPTION

    if is_price_or_number_noise(text):
        return ROLE_NOISE

    return ROLE_TITLE


def classify_lines(lines: List[str]) -> List[str]:
    """Classify a sequence of normalized lines (same length as input)."""
    return [classify_line(line) for line in lines]
