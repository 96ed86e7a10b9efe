# portal/routes_health.py
from __future__ import annotations

import os
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from menuscan import text_detection

health_bp = Blueprint("health", __name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


@health_bp.get("/health")
def health():
    cfg = current_app.config.get("MENU_PARSE_CONFIG")
    return jsonify({
        "status": "ok",
        "time": _utc_now(),
        "menu_parse": {
            "max_items": cfg.max_items,
            "min_len": cfg.min_len,
            "numeric_dominance": cfg.numeric_dominance,
        } if cfg else None,
    })


@health_bp.get("/ocr/health")
def ocr_health():
    """Tesseract availability plus the language / config scans will use."""
    return jsonify({
        "tesseract": text_detection.check_tesseract(),
        "lang": os.getenv("TESSERACT_LANG") or text_detection.DEFAULT_TESSERACT_LANG,
        "config": os.getenv("TESSERACT_CONFIG") or text_detection.DEFAULT_TESSERACT_CONFIG,
    })
