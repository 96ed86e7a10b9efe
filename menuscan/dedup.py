"""
Candidate Deduplication — near-duplicate suppression for dish candidates

OCR often reads the same dish twice (overlapping scan regions, re-scans,
"Caesar Salad" vs "CAESAR SALAD 12.99"). Exact matching is not enough, so
candidates are compared on a canonical form and by token-set overlap.

  1. canonical norm: lowercase, currency + digits stripped, anything outside
     [a-z whitespace -] stripped, whitespace collapsed
  2. empty norms discarded
  3. stable sort by confidence, highest first
  4. greedy accept; reject on identical norm or Jaccard >= 0.86

Pairwise comparison is O(n^2); menus are tens of lines after filtering.
"""
from __future__ import annotations

import re
from dataclasses import replace
from typing import FrozenSet, Iterable, List

from .menu_types import Candidate

JACCARD_THRESHOLD = 0.86

_CURRENCY_DIGITS_RE = re.compile(r"[$€£₹0-9]")
_NON_NORM_CHARS_RE = re.compile(r"[^a-z\s-]")
_WHITESPACE_RE = re.compile(r"\s+")


def canonical_norm(text: str) -> str:
    """'GRILLED SALMON — $24' → 'grilled salmon'"""
    n = (text or "").lower()
    n = _CURRENCY_DIGITS_RE.sub("", n)
    n = _NON_NORM_CHARS_RE.sub("", n)
    n = _WHITESPACE_RE.sub(" ", n).strip()
    return n


def token_set(norm: str) -> FrozenSet[str]:
    return frozenset(norm.split())


def jaccard(a: str, b: str) -> float:
    """Token-set Jaccard similarity of two norms (0.0 if either is empty)."""
    sa, sb = token_set(a), token_set(b)
    if not sa or not sb:
        return 0.0
    return len(sa & sb) / len(sa | sb)


def dedupe_candidates(
    candidates: Iterable[Candidate],
    threshold: float = JACCARD_THRESHOLD,
) -> List[Candidate]:
    """Drop empty and near-duplicate candidates, best confidence wins."""
    normed: List[Candidate] = []
    for c in candidates:
        norm = canonical_norm(c.text)
        if not norm:
            continue
        normed.append(c if c.norm == norm else replace(c, norm=norm))

    # sorted() is stable: equal scores keep menu order
    ranked = sorted(normed, key=lambda c: c.confidence, reverse=True)

    accepted: List[Candidate] = []
    for cand in ranked:
        duplicate = any(
            cand.norm == kept.norm or jaccard(cand.norm, kept.norm) >= threshold
            for kept in accepted
        )
        if not duplicate:
            accepted.append(cand)
    return accepted
