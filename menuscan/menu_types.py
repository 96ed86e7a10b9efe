"""
menuscan types — result shapes shared by the candidate pipeline, the
text detection collaborator and the portal routes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


# ────────────────────────────────────────────────
# 🍽️ Candidate dish name (confidence path output)
# ────────────────────────────────────────────────

@dataclass(frozen=True)
class Candidate:
    text: str          # human-facing, may carry a folded " — description"
    norm: str          # canonical dedup key
    confidence: float  # 0.05–0.95

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "norm": self.norm, "confidence": self.confidence}


# ────────────────────────────────────────────────
# 🔤 On-device text detection box
# ────────────────────────────────────────────────

@dataclass
class DetectedTextBox:
    id: str
    text: str
    bounds: Dict[str, int] = field(default_factory=dict)  # x, y, width, height
    confidence: float = 0.0                                # 0.0–1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "bounds": dict(self.bounds),
            "confidence": self.confidence,
        }
