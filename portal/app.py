# portal/app.py
from flask import Flask, jsonify

# --- Standard libs & typing ---
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from werkzeug.exceptions import RequestEntityTooLarge

# --- Paths ---
ROOT = Path(__file__).resolve().parents[1]

# Make project root importable so we can import menuscan.*
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

# --- Load .env if present (MENU_PARSE_* / TESSERACT_CMD work without exporting) ---
load_dotenv(ROOT / ".env")

from menuscan.scan_config import MenuParseConfig
from menuscan.text_detection import configure_tesseract_from_env
from portal.routes_health import health_bp
from portal.routes_menu_scan import menu_scan

logging.basicConfig(
    level=logging.DEBUG if os.getenv("FLASK_DEBUG") == "1" else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

# ------------------------
# App & Config
# ------------------------
app = Flask(__name__)

# Upload cap for menu photos (matches the mobile client's limit)
app.config["MAX_CONTENT_LENGTH"] = int(os.getenv("SCAN_OCR_MAX_BYTES") or 6_000_000)

# Legacy paste filter thresholds, read once at startup
app.config["MENU_PARSE_CONFIG"] = MenuParseConfig.from_env()

configure_tesseract_from_env()

app.register_blueprint(health_bp)
app.register_blueprint(menu_scan)

log.info(
    "menuscan portal ready (max_items=%d, min_len=%d, numeric_dominance=%.2f)",
    app.config["MENU_PARSE_CONFIG"].max_items,
    app.config["MENU_PARSE_CONFIG"].min_len,
    app.config["MENU_PARSE_CONFIG"].numeric_dominance,
)


@app.errorhandler(RequestEntityTooLarge)
def _too_large(_e):
    return jsonify({"ok": False, "error": "File too large. Try a smaller image or raise SCAN_OCR_MAX_BYTES."}), 413


@app.errorhandler(404)
def _not_found(_e):
    return jsonify({"ok": False, "error": "Not found"}), 404


@app.errorhandler(405)
def _method_not_allowed(_e):
    return jsonify({"ok": False, "error": "Method not allowed"}), 405


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=os.getenv("FLASK_DEBUG") == "1")
