# menuscan/parsers/folding.py
"""
Folding Stage — merges annotation and description lines into the dish
title above them, so only title-led entries reach scoring.

  ["GRILLED SALMON", "(weekend only)"]
      → ["GRILLED SALMON (weekend only)"]
  ["PASTA PRIMAVERA", "a delicate blend of seasonal vegetables tossed with fresh herbs"]
      → ["PASTA PRIMAVERA — a delicate blend of seasonal vegetables tossed with fresh herbs"]

A description is never emitted on its own: with no title-looking entry
above it, it is dropped. Noise lines are dropped. First-seen order is kept.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .line_classifier import (
    ROLE_DESCRIPTION,
    ROLE_MODIFIER,
    ROLE_TITLE,
    classify_line,
    looks_like_title,
)
from .line_normalizer import normalize_line

log = logging.getLogger(__name__)

DESCRIPTION_SEPARATOR = " — "


def classify_raw_lines(raw_lines: Optional[Iterable[object]]) -> List[Tuple[str, str]]:
    """Normalize + classify raw lines. Returns (normalized_text, role) pairs."""
    if raw_lines is None:
        return []
    out: List[Tuple[str, str]] = []
    for raw in raw_lines:
        text = normalize_line(raw)
        out.append((text, classify_line(text)))
    return out


def fold_classified(classified: Iterable[Tuple[str, str]]) -> List[str]:
    """Fold already-classified lines into title entries."""
    entries: List[str] = []

    for text, role in classified:
        if role == ROLE_MODIFIER:
            if entries:
                entries[-1] = f"{entries[-1]} {text}"
            continue

        if role == ROLE_DESCRIPTION:
            if entries and looks_like_title(entries[-1]):
                entries[-1] = f"{entries[-1]}{DESCRIPTION_SEPARATOR}{text}"
            continue

        if role == ROLE_TITLE:
            entries.append(text)

    return entries


def fold_descriptions(raw_lines: Optional[Iterable[object]]) -> List[str]:
    """
    Normalize, classify and fold raw OCR lines.

    Returns candidate-eligible strings in menu order.
    """
    classified = classify_raw_lines(raw_lines)
    folded = fold_classified(classified)
    log.debug("fold_descriptions: %d lines → %d entries", len(classified), len(folded))
    return folded
