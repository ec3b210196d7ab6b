import numpy as np
import pytesseract
import pytest

from smart_mouse.core.config import Config
from smart_mouse.core.errors import DetectionError, OCRInitError
from smart_mouse.vision.fusion import build_region_elements
from smart_mouse.vision.models import ElementType, Rectangle
from smart_mouse.vision.ocr import TesseractRecognizer, extract_text_elements, recover_region_label

from fakes import FakeRecognizer, blank_frame, word


def test_words_become_text_elements_in_ocr_order():
    recognizer = FakeRecognizer(
        [
            word("File", 91.5, left=5, top=2, width=30, height=12),
            word(None),
            word(""),
            word("   "),
            word("Edit", 88.0, left=45, top=2, width=28, height=12),
        ]
    )
    elements = extract_text_elements(blank_frame(), recognizer)

    assert [e.text for e in elements] == ["File", "Edit"]
    assert all(e.element_type is ElementType.TEXT for e in elements)
    assert elements[0].bounds == Rectangle(5, 2, 30, 12)
    assert elements[0].confidence == 91.5


def test_words_with_degenerate_boxes_are_skipped():
    recognizer = FakeRecognizer([word("ghost", width=0), word("real")])
    assert [e.text for e in extract_text_elements(blank_frame(), recognizer)] == ["real"]


def test_no_words_is_an_empty_contribution():
    assert extract_text_elements(blank_frame(), FakeRecognizer()) == []


def test_region_label_is_cropped_and_stripped():
    recognizer = FakeRecognizer(region_texts=["  Submit\n\x0c"])
    label = recover_region_label(blank_frame(), Rectangle(10, 20, 30, 10), recognizer)

    assert label == "Submit"
    assert recognizer.region_shapes == [(10, 30)]


def test_region_labels_attach_to_region_elements():
    recognizer = FakeRecognizer(region_texts=["OK", ""])
    rects = [Rectangle(0, 0, 80, 30), Rectangle(100, 0, 80, 30)]
    elements = build_region_elements(blank_frame(), rects, recognizer)

    assert [(e.text, e.bounds) for e in elements] == [("OK", rects[0]), ("", rects[1])]
    assert all(e.element_type is ElementType.BUTTON and e.confidence == 70.0 for e in elements)


def test_region_labels_skipped_without_recognizer():
    elements = build_region_elements(blank_frame(), [Rectangle(0, 0, 80, 30)], None)
    assert elements[0].text == ""


def test_missing_tesseract_is_an_environment_failure(monkeypatch):
    def missing():
        raise pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(pytesseract, "get_tesseract_version", missing)
    with pytest.raises(OCRInitError):
        TesseractRecognizer(cfg=Config())


@pytest.fixture
def recognizer(monkeypatch):
    monkeypatch.setattr(pytesseract, "get_tesseract_version", lambda: "5.3.0")
    return TesseractRecognizer(cfg=Config(tesseract_lang="eng"))


def test_tesseract_words_keep_word_level_rows(monkeypatch, recognizer):
    data = {
        "level": [1, 4, 5, 5],
        "text": ["", "", "Save", ""],
        "conf": ["-1", "-1", "96.25", "-1"],
        "left": [0, 0, 10, 50],
        "top": [0, 0, 5, 5],
        "width": [640, 200, 40, 0],
        "height": [480, 20, 14, 0],
    }
    monkeypatch.setattr(pytesseract, "image_to_data", lambda *a, **kw: data)

    words = recognizer.words(blank_frame())

    assert [w.text for w in words] == ["Save", ""]
    assert words[0].confidence == 96.25
    assert (words[0].left, words[0].top, words[0].width, words[0].height) == (10, 5, 40, 14)


def test_tesseract_runtime_errors_become_detection_errors(monkeypatch, recognizer):
    def boom(*args, **kwargs):
        raise pytesseract.TesseractError(1, "bad image")

    monkeypatch.setattr(pytesseract, "image_to_string", boom)
    with pytest.raises(DetectionError):
        recognizer.recognize(np.zeros((10, 10, 3), dtype=np.uint8))
