# menuscan/parsers/menu_parse.py
"""
Legacy Plain-Text Filter — "paste menu text" entry path.

No ranking: produces one cleaned, newline-joined list for manual
multi-select.

Per line, in order:
  - stop once max_items lines have been accepted
  - drop exact section headers ("menu", "appetizers", "desserts", ...)
  - normalize + strip trailing price ("Caesar Salad 12.99" → "Caesar Salad")
  - drop lines shorter than min_len
  - drop numeric-dominant lines unless a menu-number cue is present
    ("Combo #3", "Item 12", "Size 16")
Then exact-string dedup, first occurrence wins.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Union

from menuscan.scan_config import DEFAULT_CONFIG, MenuParseConfig

from .line_classifier import count_digits
from .line_normalizer import normalize_line

log = logging.getLogger(__name__)

IGNORE_EXACT = frozenset({
    "menu",
    "appetizers",
    "starters",
    "entrees",
    "mains",
    "desserts",
    "drinks",
    "beverages",
    "sides",
    "salads",
    "soups",
    "breakfast",
    "lunch",
    "dinner",
    "specials",
    "kids",
    "add-ons",
    "addons",
    "extras",
})

# Digits are expected on these lines ("Combo #2", "No. 7", "Size 12")
_MENU_NUMBER_CUE_RE = re.compile(
    r"\b(?:combo|item|option|size)\b|\bno\.|#",
    re.IGNORECASE,
)

_NEWLINE_RE = re.compile(r"\r?\n")


def _split_lines(raw: Union[str, Iterable[object], None]) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        text = raw
    else:
        text = "\n".join("" if l is None else str(l) for l in raw)
    if not text.strip():
        return []
    return [l.strip() for l in _NEWLINE_RE.split(text) if l.strip()]


def _too_numeric(line: str, numeric_dominance: float) -> bool:
    if _MENU_NUMBER_CUE_RE.search(line):
        return False
    digits = count_digits(line)
    ratio = digits / max(1, len(line))
    return digits >= 3 and ratio >= numeric_dominance


def parse_menu_to_items(
    raw: Union[str, Iterable[object], None],
    config: Optional[MenuParseConfig] = None,
) -> List[str]:
    """Filter pasted menu text into a deduplicated list of item lines."""
    cfg = config or DEFAULT_CONFIG
    lines = _split_lines(raw)

    cleaned: List[str] = []
    for line in lines:
        if len(cleaned) >= cfg.max_items:
            break

        if line.lower() in IGNORE_EXACT:
            continue

        # Strip prices early so numeric filters don't over-fire
        no_price = normalize_line(line, strip_price=True)
        if len(no_price) < cfg.min_len:
            continue

        if _too_numeric(no_price, cfg.numeric_dominance):
            continue

        cleaned.append(no_price)

    items = list(dict.fromkeys(cleaned))  # dedupe, preserve order
    log.debug("parse_menu_to_items: %d lines → %d items", len(lines), len(items))
    return items


def parse_menu_to_items_text(
    raw: Union[str, Iterable[object], None],
    config: Optional[MenuParseConfig] = None,
) -> str:
    """Newline-joined form of parse_menu_to_items (empty string if nothing survives)."""
    return "\n".join(parse_menu_to_items(raw, config))
