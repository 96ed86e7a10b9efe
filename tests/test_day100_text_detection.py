# tests/test_day100_text_detection.py
"""
Day 100: Menu Scan — Text Detection (Tesseract collaborator)

Tesseract itself is never invoked: image_to_data / get_tesseract_version
are monkeypatched so these run on machines without the binary.

Covers:
  - Preprocess: downscale to 1800px wide, grayscale output
  - Word rows grouped into one box per (block, paragraph, line)
  - Blank words and conf=-1 rows skipped
  - Union bounds + mean confidence in 0..1
  - detect_menu_text_boxes on PIL images and file-like sources
  - Images opened from uploads are closed after preprocessing
  - check_tesseract when the binary is missing
"""

import io
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from PIL import Image

from menuscan import text_detection
from menuscan.text_detection import (
    MAX_OCR_WIDTH,
    _group_words_into_lines,
    check_tesseract,
    detect_menu_text_boxes,
    preprocess_for_ocr,
)


def _ocr_rows(rows):
    """Build an image_to_data-style dict from (block, par, line, text, conf, left, top, w, h) rows."""
    keys = ("block_num", "par_num", "line_num", "text", "conf", "left", "top", "width", "height")
    data = {k: [] for k in keys}
    data["page_num"] = []
    for row in rows:
        data["page_num"].append(1)
        for k, v in zip(keys, row):
            data[k].append(v)
    return data


SALMON_PAGE = _ocr_rows([
    # block, par, line, text, conf, left, top, w, h
    (1, 1, 0, "", -1, 0, 0, 800, 600),
    (1, 1, 1, "GRILLED", 92, 40, 100, 120, 30),
    (1, 1, 1, "SALMON", 88, 170, 102, 110, 30),
    (1, 1, 2, "(weekend", 70, 40, 140, 100, 24),
    (1, 1, 2, "only)", 80, 145, 141, 60, 24),
    (1, 1, 2, " ", 95, 210, 141, 5, 24),
    (2, 1, 1, "24.00", 96, 600, 100, 70, 30),
])


# ===========================================================================
# SECTION 1: Preprocessing
# ===========================================================================

class TestPreprocess:

    def test_wide_image_downscaled(self):
        out = preprocess_for_ocr(Image.new("RGB", (2400, 1200), "white"))
        assert out.size == (MAX_OCR_WIDTH, 900)
        assert out.mode == "L"

    def test_small_image_keeps_size(self):
        out = preprocess_for_ocr(Image.new("RGB", (640, 480), "white"))
        assert out.size == (640, 480)

    def test_output_is_binarized(self):
        im = Image.new("L", (100, 20), 40)
        im.paste(230, (50, 0, 100, 20))
        out = preprocess_for_ocr(im)
        assert set(out.getdata()) <= {0, 255}


# ===========================================================================
# SECTION 2: Word → line grouping
# ===========================================================================

class TestGrouping:

    def test_lines_grouped_in_reading_order(self):
        boxes = _group_words_into_lines(SALMON_PAGE)
        assert [b.text for b in boxes] == ["GRILLED SALMON", "(weekend only)", "24.00"]
        assert [b.id for b in boxes] == ["b-0", "b-1", "b-2"]

    def test_union_bounds(self):
        box = _group_words_into_lines(SALMON_PAGE)[0]
        assert box.bounds == {"x": 40, "y": 100, "width": 240, "height": 32}

    def test_mean_confidence_scaled(self):
        boxes = _group_words_into_lines(SALMON_PAGE)
        assert boxes[0].confidence == 0.9
        assert boxes[1].confidence == 0.75

    def test_string_conf_values(self):
        data = _ocr_rows([(1, 1, 1, "Pho", "91.5", 0, 0, 50, 20)])
        assert _group_words_into_lines(data)[0].confidence == 0.915

    def test_empty_data(self):
        assert _group_words_into_lines({}) == []
        assert _group_words_into_lines(_ocr_rows([])) == []

    def test_to_dict(self):
        d = _group_words_into_lines(SALMON_PAGE)[2].to_dict()
        assert d["text"] == "24.00"
        assert set(d) == {"id", "text", "bounds", "confidence"}


# ===========================================================================
# SECTION 3: detect_menu_text_boxes
# ===========================================================================

class TestDetect:

    def test_pil_image_source(self, monkeypatch):
        calls = {}

        def fake_image_to_data(img, lang=None, output_type=None, config=None):
            calls["size"] = img.size
            calls["lang"] = lang
            calls["config"] = config
            return SALMON_PAGE

        monkeypatch.delenv("TESSERACT_LANG", raising=False)
        monkeypatch.delenv("TESSERACT_CONFIG", raising=False)
        monkeypatch.setattr(text_detection.pytesseract, "image_to_data", fake_image_to_data)

        boxes = detect_menu_text_boxes(Image.new("RGB", (3600, 1800), "white"))
        assert [b.text for b in boxes] == ["GRILLED SALMON", "(weekend only)", "24.00"]
        assert calls["size"] == (1800, 900)
        assert calls["lang"] == "eng"
        assert calls["config"] == "--oem 1 --psm 6"

    def test_file_like_source_and_env(self, monkeypatch):
        buf = io.BytesIO()
        Image.new("RGB", (320, 200), "white").save(buf, format="PNG")
        buf.seek(0)

        seen = {}

        def fake_image_to_data(img, lang=None, output_type=None, config=None):
            seen["lang"] = lang
            seen["config"] = config
            return _ocr_rows([(1, 1, 1, "Pad", 90, 0, 0, 40, 20), (1, 1, 1, "Thai", 90, 45, 0, 40, 20)])

        monkeypatch.setenv("TESSERACT_LANG", "eng+ita")
        monkeypatch.setenv("TESSERACT_CONFIG", "--psm 4")
        monkeypatch.setattr(text_detection.pytesseract, "image_to_data", fake_image_to_data)

        boxes = detect_menu_text_boxes(buf)
        assert [b.text for b in boxes] == ["Pad Thai"]
        assert seen == {"lang": "eng+ita", "config": "--psm 4"}

    def test_opened_upload_is_closed(self, monkeypatch):
        buf = io.BytesIO()
        Image.new("RGB", (320, 200), "white").save(buf, format="PNG")
        buf.seek(0)

        exited = []
        real_exit = Image.Image.__exit__

        def spy_exit(self, *args):
            exited.append(self.format)
            return real_exit(self, *args)

        monkeypatch.setattr(Image.Image, "__exit__", spy_exit)
        monkeypatch.setattr(text_detection.pytesseract, "image_to_data", lambda img, **kw: _ocr_rows([]))

        assert detect_menu_text_boxes(buf) == []
        assert exited.count("PNG") == 1

    def test_pil_source_left_open(self, monkeypatch):
        im = Image.new("RGB", (320, 200), "white")
        monkeypatch.setattr(text_detection.pytesseract, "image_to_data", lambda img, **kw: _ocr_rows([]))

        detect_menu_text_boxes(im)
        assert im.getpixel((0, 0)) == (255, 255, 255)


# ===========================================================================
# SECTION 4: Tesseract health
# ===========================================================================

class TestCheckTesseract:

    def test_found(self, monkeypatch):
        monkeypatch.setattr(text_detection.pytesseract, "get_tesseract_version", lambda: "5.3.0")
        assert check_tesseract() == {"found_on_disk": True, "version": "5.3.0"}

    def test_missing_binary(self, monkeypatch):
        def boom():
            raise RuntimeError("tesseract is not installed or it's not in your PATH")

        monkeypatch.setattr(text_detection.pytesseract, "get_tesseract_version", boom)
        info = check_tesseract()
        assert info["found_on_disk"] is False
        assert info["version"] is None
        assert "not installed" in info["error"]
