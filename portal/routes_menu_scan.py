# portal/routes_menu_scan.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from flask import Blueprint, current_app, jsonify, request

from menuscan.candidates import extract_menu_candidates
from menuscan.menu_types import Candidate
from menuscan.parsers.menu_parse import parse_menu_to_items
from menuscan.scan_config import DEFAULT_CONFIG, MenuParseConfig
from menuscan.scoring.confidence import confidence_tier
from menuscan.text_detection import detect_menu_text_boxes

log = logging.getLogger(__name__)

menu_scan = Blueprint("menu_scan", __name__)

ALLOWED_IMAGE_MIME = {"image/jpeg", "image/jpg", "image/png", "image/webp"}

FALLBACK_NO_TEXT = "NO_TEXT_DETECTED"
FALLBACK_DETECTION_FAILED = "DETECTION_FAILED"


def _candidate_payload(candidates: List[Candidate]) -> List[Dict[str, Any]]:
    """Candidate dicts for the selection UI (id is stable per response)."""
    out: List[Dict[str, Any]] = []
    for idx, c in enumerate(candidates):
        d = c.to_dict()
        d["id"] = f"c-{idx}-{c.norm}"
        d["tier"] = confidence_tier(c.confidence)
        out.append(d)
    return out


def _candidates_response(candidates: List[Candidate], reason: Optional[str] = None):
    if not candidates and reason is None:
        reason = FALLBACK_NO_TEXT
    return jsonify({
        "ok": True,
        "candidates": _candidate_payload(candidates),
        "fallback_recommended": reason is not None,
        "fallback_reason": reason,
    })


def _lines_from_payload(payload: Dict[str, Any]) -> Optional[List[str]]:
    """Accept {"lines": [...]} or {"text": "..."}; None if neither is usable."""
    lines = payload.get("lines")
    if isinstance(lines, list):
        return ["" if l is None else str(l) for l in lines]
    text = payload.get("text")
    if isinstance(text, str):
        return text.splitlines()
    return None


def _override(payload: Dict[str, Any], key: str, fallback: Any) -> Any:
    value = payload.get(key)
    return fallback if value is None else value


@menu_scan.post("/api/menu/candidates")
def menu_candidates():
    """
    Rank candidate dish names from raw OCR lines or pasted text.

    Body: {"lines": ["GRILLED SALMON", "(weekend only)", ...]}
       or {"text": "GRILLED SALMON\\n(weekend only)"}
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"ok": False, "error": "Expected JSON payload"}), 400

    lines = _lines_from_payload(payload)
    if lines is None:
        return jsonify({"ok": False, "error": "Expected 'lines' (list) or 'text' (string)"}), 400

    return _candidates_response(extract_menu_candidates(lines))


@menu_scan.post("/api/menu/parse-text")
def menu_parse_text():
    """
    Legacy paste path: cleaned newline list, no ranking.

    Body: {"text": "...", "max_items"?: int, "min_len"?: int, "numeric_dominance"?: float}
    Per-request overrides are clamped; missing ones use the app's config.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"ok": False, "error": "Expected JSON payload"}), 400

    text = payload.get("text")
    if not isinstance(text, str):
        return jsonify({"ok": False, "error": "Expected 'text' (string)"}), 400

    base: MenuParseConfig = current_app.config.get("MENU_PARSE_CONFIG") or DEFAULT_CONFIG
    config = MenuParseConfig.create(
        max_items=_override(payload, "max_items", base.max_items),
        min_len=_override(payload, "min_len", base.min_len),
        numeric_dominance=_override(payload, "numeric_dominance", base.numeric_dominance),
    )

    items = parse_menu_to_items(text, config)
    return jsonify({"ok": True, "items_text": "\n".join(items), "items": items})


@menu_scan.post("/api/menu/scan")
def menu_scan_image():
    """
    Photo path: OCR the uploaded image, then rank candidates.

    Multipart field 'file' or 'image'. OCR failure is not an error for the
    client: it gets an empty list and a manual-entry fallback reason.
    """
    f = request.files.get("file") or request.files.get("image")
    if f is None or not f.filename:
        return jsonify({"ok": False, "error": "MISSING_IMAGE"}), 400

    mime = (f.mimetype or "").lower()
    if mime not in ALLOWED_IMAGE_MIME:
        return jsonify({
            "ok": False,
            "error": "UNSUPPORTED_MEDIA_TYPE",
            "message": f"OCR expects an image. Got: {mime or 'unknown'}",
        }), 415

    try:
        boxes = detect_menu_text_boxes(f.stream)
    except Exception as e:
        log.warning("menu scan OCR failed for %s: %s", f.filename, e)
        return _candidates_response([], FALLBACK_DETECTION_FAILED)

    raw_lines = [b.text for b in boxes]
    return _candidates_response(extract_menu_candidates(raw_lines))
