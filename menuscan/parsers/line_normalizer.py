# menuscan/parsers/line_normalizer.py
"""
Line Normalizer — first stage of menu candidate extraction.

Cleans a single raw OCR / pasted line:
  - bullet glyph variants and zero-width junk → space
  - runs of whitespace collapsed to one space, trimmed
  - leading list markers ("- ", "* ", "— ") removed
  - (legacy paste path only) trailing price / currency tokens stripped

Pure functions, no state. Always returns a string ("" for blank input).
"""

from __future__ import annotations

import re
from typing import Optional


# ── Glyph cleanup ────────────────────────────────────

# Bullet variants seen in OCR output and pasted menus
_BULLET_RE = re.compile(r"[•·●○◦▪▫■□►▸▹‣⁃∙⦁✓✔★☆◆◇|¦]")

# Zero-width / BOM characters that sneak in from copy-paste
_ZERO_WIDTH_RE = re.compile("[\u200b-\u200d\u2060\ufeff]")

_WHITESPACE_RE = re.compile(r"\s+")

# Leading list markers: "- Fries", "* Fries", "-- Fries", "> Fries"
_LEADING_MARKER_RE = re.compile(r"^(?:[-*–—>~]+\s*)+")


# ── Price pattern (legacy path) ──────────────────────
# Removes prices like:
#   $12.99, 12.99, 12,99, £9, €10.5, ₹299, 12.99+, 12.99*, 12.99 / 14.99
# Anchored at the end of the line, must be preceded by whitespace.

_CURRENCY = r"(?:[$€£₹]|usd|eur|gbp|inr)"
_AMOUNT = r"\d{1,4}(?:[.,]\d{1,2})?"

TRAILING_PRICE_RE = re.compile(
    r"(?:\s+" + _CURRENCY + r"?\s*" + _AMOUNT
    + r"(?:\s*(?:/|-)\s*" + _CURRENCY + r"?\s*" + _AMOUNT + r")?"
    + r"\s*[+*]?\s*)$",
    re.IGNORECASE,
)


def strip_trailing_price(text: str) -> str:
    """Strip one trailing price (or price pair) from the end of a line."""
    if not text:
        return ""
    return TRAILING_PRICE_RE.sub("", text).strip()


def normalize_line(raw: Optional[object], strip_price: bool = False) -> str:
    """
    Normalize one raw line.

    'Caesar Salad 12.99' with strip_price=True → 'Caesar Salad'
    '•  Fish   Tacos'                          → 'Fish Tacos'
    """
    if raw is None:
        return ""
    text = raw if isinstance(raw, str) else str(raw)

    text = _ZERO_WIDTH_RE.sub("", text)
    text = _BULLET_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    text = _LEADING_MARKER_RE.sub("", text).strip()

    if strip_price:
        text = strip_trailing_price(text)
        # A stripped price can expose another marker ("- 9.99" → "-")
        text = _LEADING_MARKER_RE.sub("", text).strip()

    return text
