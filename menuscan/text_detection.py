"""
menuscan Text Detection — on-device OCR collaborator for menu photos.

Produces the raw line strings the candidate pipeline consumes. It sits
outside the extraction engine: the engine never calls it, callers (the
portal scan route) run detection first and pass box texts along.

  image → preprocess (EXIF rotate, downscale, gray, autocontrast,
          unsharp, threshold) → Tesseract image_to_data
        → words grouped by (block, paragraph, line) → DetectedTextBox list

Environment:
  TESSERACT_CMD     explicit tesseract binary path
  TESSERACT_CONFIG  default "--oem 1 --psm 6"
  TESSERACT_LANG    default "eng"
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Tuple, Union

from PIL import Image, ImageFilter, ImageOps
import pytesseract

from .menu_types import DetectedTextBox

log = logging.getLogger(__name__)

MAX_OCR_WIDTH = 1800
BINARIZE_THRESHOLD = 160
DEFAULT_TESSERACT_CONFIG = "--oem 1 --psm 6"
DEFAULT_TESSERACT_LANG = "eng"

ImageSource = Union[str, Path, BinaryIO, Image.Image]


# =============================
# Tesseract
# =============================

def configure_tesseract_from_env() -> None:
    cmd = os.environ.get("TESSERACT_CMD")
    if cmd and os.path.isfile(cmd):
        pytesseract.pytesseract.tesseract_cmd = cmd


def check_tesseract() -> dict:
    try:
        configure_tesseract_from_env()
        ver = pytesseract.get_tesseract_version()
        return {"found_on_disk": True, "version": str(ver)}
    except Exception as e:
        return {"found_on_disk": False, "version": None, "error": str(e)}


# =============================
# Preprocessing
# =============================

def preprocess_for_ocr(im: Image.Image) -> Image.Image:
    """Phone-photo cleanup before Tesseract. Returns a 1-bit-like 'L' image."""
    out = ImageOps.exif_transpose(im) or im

    if out.width > MAX_OCR_WIDTH:
        ratio = MAX_OCR_WIDTH / float(out.width)
        out = out.resize((MAX_OCR_WIDTH, max(1, int(out.height * ratio))), Image.LANCZOS)

    out = ImageOps.grayscale(out)
    out = ImageOps.autocontrast(out)
    out = out.filter(ImageFilter.UnsharpMask(radius=1.0, percent=120, threshold=3))
    return out.point(lambda p: 255 if p >= BINARIZE_THRESHOLD else 0)


def _load_preprocessed(source: ImageSource) -> Image.Image:
    if isinstance(source, Image.Image):
        return preprocess_for_ocr(source)
    with Image.open(source) as im:
        return preprocess_for_ocr(im)


# =============================
# Word → line grouping
# =============================

def _group_words_into_lines(data: Dict[str, List[Any]]) -> List[DetectedTextBox]:
    """Group image_to_data word rows into one box per Tesseract line."""
    lines: Dict[Tuple[int, int, int, int], Dict[str, Any]] = {}
    order: List[Tuple[int, int, int, int]] = []

    texts = data.get("text") or []
    for i, raw in enumerate(texts):
        word = (raw or "").strip()
        if not word:
            continue
        try:
            conf = float(data["conf"][i])
        except (KeyError, IndexError, TypeError, ValueError):
            continue
        if conf < 0:
            continue

        key = (
            int(data.get("page_num", [0] * len(texts))[i]),
            int(data["block_num"][i]),
            int(data["par_num"][i]),
            int(data["line_num"][i]),
        )
        left, top = int(data["left"][i]), int(data["top"][i])
        right, bottom = left + int(data["width"][i]), top + int(data["height"][i])

        entry = lines.get(key)
        if entry is None:
            entry = {"words": [], "confs": [], "box": [left, top, right, bottom]}
            lines[key] = entry
            order.append(key)
        else:
            box = entry["box"]
            box[0], box[1] = min(box[0], left), min(box[1], top)
            box[2], box[3] = max(box[2], right), max(box[3], bottom)
        entry["words"].append(word)
        entry["confs"].append(conf)

    boxes: List[DetectedTextBox] = []
    for idx, key in enumerate(order):
        entry = lines[key]
        x0, y0, x1, y1 = entry["box"]
        mean_conf = sum(entry["confs"]) / len(entry["confs"])
        boxes.append(
            DetectedTextBox(
                id=f"b-{idx}",
                text=" ".join(entry["words"]),
                bounds={"x": x0, "y": y0, "width": x1 - x0, "height": y1 - y0},
                confidence=round(min(1.0, max(0.0, mean_conf / 100.0)), 3),
            )
        )
    return boxes


# =============================
# Entry point
# =============================

def detect_menu_text_boxes(source: ImageSource) -> List[DetectedTextBox]:
    """
    Run OCR on a menu photo and return one DetectedTextBox per text line.

    Raises whatever PIL / pytesseract raise; the scan route turns that
    into a manual-entry fallback.
    """
    configure_tesseract_from_env()
    img = _load_preprocessed(source)

    config = os.getenv("TESSERACT_CONFIG") or DEFAULT_TESSERACT_CONFIG
    lang = os.getenv("TESSERACT_LANG") or DEFAULT_TESSERACT_LANG
    data = pytesseract.image_to_data(
        img,
        lang=lang,
        output_type=pytesseract.Output.DICT,
        config=config,
    )

    boxes = _group_words_into_lines(data)
    log.debug("detect_menu_text_boxes: %d lines", len(boxes))
    return boxes
