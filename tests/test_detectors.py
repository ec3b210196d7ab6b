"""Region detectors against synthetic frames (real OpenCV) and scripted contours."""

import cv2
import pytest

from smart_mouse.core.config import Config
from smart_mouse.core.errors import DetectionError
from smart_mouse.vision.detectors import (
    ButtonShape,
    OpenCVContourFinder,
    detect_button_regions,
    detect_color_regions,
    hue_ranges,
)
from smart_mouse.vision.models import Rectangle

from fakes import FakeFinder, blank_frame


def _filled(frame, x, y, w, h, bgr):
    cv2.rectangle(frame, (x, y), (x + w - 1, y + h - 1), bgr, thickness=-1)
    return frame


def test_blank_frame_yields_no_buttons():
    assert detect_button_regions(blank_frame()) == []


def test_button_shaped_rectangle_is_detected():
    frame = _filled(blank_frame(), 100, 100, 120, 40, (255, 255, 255))
    rects = detect_button_regions(frame)

    assert len(rects) == 1
    cx, cy = rects[0].center()
    assert abs(cx - 160) <= 3 and abs(cy - 120) <= 3
    assert 118 <= rects[0].width <= 130
    assert 38 <= rects[0].height <= 50


@pytest.mark.parametrize(
    "w,h",
    [
        (40, 120),  # taller than wide
        (20, 10),  # too small
        (500, 60),  # too wide
    ],
)
def test_non_button_shapes_are_rejected(w, h):
    frame = _filled(blank_frame(), 50, 50, w, h, (255, 255, 255))
    assert detect_button_regions(frame) == []


def test_size_bounds_are_inclusive():
    finder = FakeFinder(
        [
            (0, 0, 40, 20),
            (0, 0, 400, 100),
            (0, 0, 39, 20),
            (0, 0, 401, 50),
            (0, 0, 50, 50),
            (0, 0, 60, 101),
        ]
    )
    rects = detect_button_regions(blank_frame(), finder)
    assert rects == [Rectangle(0, 0, 40, 20), Rectangle(0, 0, 400, 100)]


def test_button_bounds_follow_config():
    cfg = Config(button_min_width=10, button_min_height=5)
    finder = FakeFinder([(0, 0, 20, 10)])
    assert detect_button_regions(blank_frame(), finder, cfg) == [Rectangle(0, 0, 20, 10)]
    assert ButtonShape.from_config(cfg).min_width == 10


def test_color_region_is_detected_and_small_blobs_dropped():
    frame = blank_frame()
    _filled(frame, 300, 200, 50, 50, (255, 0, 0))  # blue, hue 120
    _filled(frame, 10, 10, 10, 10, (255, 0, 0))

    assert detect_color_regions(frame, hue=120, tolerance=10) == [Rectangle(300, 200, 50, 50)]


def test_dull_colors_are_ignored():
    frame = _filled(blank_frame(), 300, 200, 50, 50, (128, 128, 128))
    assert detect_color_regions(frame, hue=0, tolerance=90) == []


def test_color_range_wraps_around_hue_circle():
    frame = _filled(blank_frame(), 100, 100, 60, 30, (0, 0, 255))  # red, hue 0

    assert detect_color_regions(frame, hue=175, tolerance=10) == [Rectangle(100, 100, 60, 30)]
    assert detect_color_regions(frame, hue=175, tolerance=3) == []


def test_color_min_size_is_twenty_pixels():
    finder = FakeFinder([(0, 0, 20, 20), (0, 0, 19, 40), (0, 0, 40, 19)])
    rects = detect_color_regions(blank_frame(), hue=60, tolerance=30, finder=finder)
    assert rects == [Rectangle(0, 0, 20, 20)]
    assert finder.hue_ranges == [(30, 90)]


@pytest.mark.parametrize(
    "hue,tolerance,expected",
    [
        (120, 30, [(90, 150)]),
        (5, 10, [(0, 15), (175, 179)]),
        (175, 10, [(165, 179), (0, 5)]),
        (90, 90, [(0, 179)]),
    ],
)
def test_hue_ranges(hue, tolerance, expected):
    assert hue_ranges(hue, tolerance) == expected


@pytest.mark.parametrize("primitive", ["dilate", "boundingRect"])
def test_opencv_failures_become_detection_errors(monkeypatch, primitive):
    def fail(*args, **kwargs):
        raise cv2.error("backend failure")

    monkeypatch.setattr(cv2, primitive, fail)
    frame = blank_frame()
    _filled(frame, 50, 50, 120, 40, (255, 255, 255))

    with pytest.raises(DetectionError):
        detect_button_regions(frame, OpenCVContourFinder())
