# menuscan/scan_config.py
"""
Legacy paste-text filter configuration.

The filter takes an explicit MenuParseConfig. Reading the environment is
done once at the process boundary (portal/app.py) via from_env().

  MENU_PARSE_MAX_ITEMS          default 30,   clamped 1–200
  MENU_PARSE_MIN_LEN            default 4,    clamped 1–50
  MENU_PARSE_NUMERIC_DOMINANCE  default 0.35, clamped 0–1
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_MAX_ITEMS = 30
DEFAULT_MIN_LEN = 4
DEFAULT_NUMERIC_DOMINANCE = 0.35

ENV_MAX_ITEMS = "MENU_PARSE_MAX_ITEMS"
ENV_MIN_LEN = "MENU_PARSE_MIN_LEN"
ENV_NUMERIC_DOMINANCE = "MENU_PARSE_NUMERIC_DOMINANCE"


def _clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def _finite_or(raw: Any, fallback: float) -> float:
    """Coerce raw to a finite float, else fallback."""
    if raw is None or isinstance(raw, bool):
        return fallback
    try:
        n = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        return fallback
    return n if math.isfinite(n) else fallback


@dataclass(frozen=True)
class MenuParseConfig:
    max_items: int = DEFAULT_MAX_ITEMS
    min_len: int = DEFAULT_MIN_LEN
    numeric_dominance: float = DEFAULT_NUMERIC_DOMINANCE

    def __post_init__(self) -> None:
        # clamp + floor on every construction path; frozen, so bypass __setattr__
        object.__setattr__(
            self, "max_items",
            int(math.floor(_clamp(_finite_or(self.max_items, DEFAULT_MAX_ITEMS), 1, 200))),
        )
        object.__setattr__(
            self, "min_len",
            int(math.floor(_clamp(_finite_or(self.min_len, DEFAULT_MIN_LEN), 1, 50))),
        )
        object.__setattr__(
            self, "numeric_dominance",
            _clamp(_finite_or(self.numeric_dominance, DEFAULT_NUMERIC_DOMINANCE), 0.0, 1.0),
        )

    @classmethod
    def create(
        cls,
        max_items: Any = None,
        min_len: Any = None,
        numeric_dominance: Any = None,
    ) -> "MenuParseConfig":
        """Build a config from loose values (None or junk means default)."""
        return cls(max_items=max_items, min_len=min_len, numeric_dominance=numeric_dominance)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MenuParseConfig":
        env = os.environ if environ is None else environ
        return cls.create(
            max_items=env.get(ENV_MAX_ITEMS),
            min_len=env.get(ENV_MIN_LEN),
            numeric_dominance=env.get(ENV_NUMERIC_DOMINANCE),
        )


DEFAULT_CONFIG = MenuParseConfig()
