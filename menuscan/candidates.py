# menuscan/candidates.py
"""
Menu Candidate Extraction — confidence path entrypoint.

    raw lines → normalize → classify / fold → score → dedup → ranked candidates

Usage:
    from menuscan.candidates import extract_menu_candidates

    candidates = extract_menu_candidates(["GRILLED SALMON", "(weekend only)", "24.00"])
    # [Candidate(text='GRILLED SALMON (weekend only)', norm='grilled salmon weekend only', confidence=0.75)]

Output is confidence-descending after dedup. Empty or all-noise input gives
an empty list; callers present manual entry in that case.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .dedup import canonical_norm, dedupe_candidates
from .menu_types import Candidate
from .parsers.folding import fold_descriptions
from .scoring.confidence import score_candidate

log = logging.getLogger(__name__)

# Above this, the input is more likely an OCR failure than a menu
LARGE_INPUT_WARN_LINES = 300


def build_menu_candidates(folded: Optional[Iterable[str]]) -> List[Candidate]:
    """Score and dedupe already-folded candidate strings."""
    if folded is None:
        return []

    scored: List[Candidate] = []
    for text in folded:
        if not text or not text.strip():
            continue
        text = text.strip()
        scored.append(
            Candidate(text=text, norm=canonical_norm(text), confidence=score_candidate(text))
        )

    result = dedupe_candidates(scored)
    log.debug("build_menu_candidates: %d scored → %d kept", len(scored), len(result))
    return result


def extract_menu_candidates(raw_lines: Optional[Iterable[object]]) -> List[Candidate]:
    """Full pipeline from raw OCR / pasted lines to ranked candidates."""
    if raw_lines is None:
        return []
    if isinstance(raw_lines, str):
        raw_lines = raw_lines.splitlines()

    lines = list(raw_lines)
    if len(lines) > LARGE_INPUT_WARN_LINES:
        log.warning(
            "extract_menu_candidates: %d input lines (> %d), upstream OCR may have failed",
            len(lines), LARGE_INPUT_WARN_LINES,
        )

    return build_menu_candidates(fold_descriptions(lines))
