"""Region detectors: button-like shapes and colour-segmented regions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence

import cv2
import numpy as np
from loguru import logger

from ..core.config import Config, config
from ..core.errors import DetectionError
from .models import Rectangle

# OpenCV stores hue as 0..179
HUE_PERIOD = 180


class ContourFinder(Protocol):
    """Geometric primitives the region detectors are built on."""

    def to_gray(self, frame: np.ndarray) -> np.ndarray: ...

    def edge_map(self, gray: np.ndarray, low: int, high: int) -> np.ndarray: ...

    def dilate(self, edges: np.ndarray, iterations: int) -> np.ndarray: ...

    def hue_mask(
        self,
        frame: np.ndarray,
        hue_ranges: Sequence[tuple[int, int]],
        min_saturation: int,
        min_value: int,
    ) -> np.ndarray: ...

    def find_external_contours(self, binary: np.ndarray) -> Sequence[Any]: ...

    def bounding_rect(self, contour: Any) -> tuple[int, int, int, int]: ...


class OpenCVContourFinder:
    """``ContourFinder`` backed by OpenCV."""

    def to_gray(self, frame: np.ndarray) -> np.ndarray:
        try:
            return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        except cv2.error as exc:
            raise DetectionError(f"Grayscale conversion failed: {exc}") from exc

    def edge_map(self, gray: np.ndarray, low: int, high: int) -> np.ndarray:
        try:
            return cv2.Canny(gray, low, high)
        except cv2.error as exc:
            raise DetectionError(f"Edge detection failed: {exc}") from exc

    def dilate(self, edges: np.ndarray, iterations: int) -> np.ndarray:
        # Default 3x3 structuring element closes small gaps in the edge map
        kernel = np.ones((3, 3), np.uint8)
        try:
            return cv2.dilate(edges, kernel, iterations=iterations)
        except cv2.error as exc:
            raise DetectionError(f"Dilation failed: {exc}") from exc

    def hue_mask(
        self,
        frame: np.ndarray,
        hue_ranges: Sequence[tuple[int, int]],
        min_saturation: int,
        min_value: int,
    ) -> np.ndarray:
        try:
            hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
        except cv2.error as exc:
            raise DetectionError(f"HSV conversion failed: {exc}") from exc

        mask = np.zeros(hsv.shape[:2], dtype=np.uint8)
        for low, high in hue_ranges:
            lower = np.array([low, min_saturation, min_value])
            upper = np.array([high, 255, 255])
            mask = cv2.bitwise_or(mask, cv2.inRange(hsv, lower, upper))
        return mask

    def find_external_contours(self, binary: np.ndarray) -> Sequence[Any]:
        try:
            contours, _ = cv2.findContours(binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        except cv2.error as exc:
            raise DetectionError(f"Contour extraction failed: {exc}") from exc
        return contours

    def bounding_rect(self, contour: Any) -> tuple[int, int, int, int]:
        try:
            x, y, w, h = cv2.boundingRect(contour)
        except cv2.error as exc:
            raise DetectionError(f"Bounding box failed: {exc}") from exc
        return int(x), int(y), int(w), int(h)


@dataclass(frozen=True, slots=True)
class ButtonShape:
    """Size bounds a rectangle must satisfy to look like a horizontal button."""

    min_width: int = 40
    max_width: int = 400
    min_height: int = 20
    max_height: int = 100

    @classmethod
    def from_config(cls, cfg: Config) -> ButtonShape:
        return cls(
            min_width=cfg.button_min_width,
            max_width=cfg.button_max_width,
            min_height=cfg.button_min_height,
            max_height=cfg.button_max_height,
        )

    def accepts(self, width: int, height: int) -> bool:
        return (
            self.min_width <= width <= self.max_width
            and self.min_height <= height <= self.max_height
            and width > height
        )


def detect_button_regions(
    frame: np.ndarray,
    finder: ContourFinder | None = None,
    cfg: Config | None = None,
) -> list[Rectangle]:
    """Detect button-like rectangles from edge contours.

    Parameters
    ----------
    frame : np.ndarray
        BGR frame.
    finder : ContourFinder, optional
        Primitives provider (OpenCV by default).
    cfg : Config, optional
        Thresholds and size bounds (global config by default).

    Returns
    -------
    list[Rectangle]
        Candidate rectangles in contour order. Empty when nothing qualifies.
    """
    finder = finder or OpenCVContourFinder()
    cfg = cfg or config
    shape = ButtonShape.from_config(cfg)

    gray = finder.to_gray(frame)
    edges = finder.edge_map(gray, cfg.canny_low_threshold, cfg.canny_high_threshold)
    dilated = finder.dilate(edges, cfg.dilate_iterations)

    buttons: list[Rectangle] = []
    for contour in finder.find_external_contours(dilated):
        x, y, w, h = finder.bounding_rect(contour)
        if shape.accepts(w, h):
            buttons.append(Rectangle(x, y, w, h))

    logger.debug(f"Button detector kept {len(buttons)} regions")
    return buttons


def hue_ranges(hue: int, tolerance: int) -> list[tuple[int, int]]:
    """Split ``[hue - tolerance, hue + tolerance]`` into in-range hue intervals.

    A range crossing either end of the hue circle wraps around, e.g. a red
    target of 5 with tolerance 10 gives ``[(0, 15), (175, 179)]``.
    """
    if tolerance * 2 + 1 >= HUE_PERIOD:
        return [(0, HUE_PERIOD - 1)]

    low, high = hue - tolerance, hue + tolerance
    ranges = [(max(low, 0), min(high, HUE_PERIOD - 1))]
    if low < 0:
        ranges.append((HUE_PERIOD + low, HUE_PERIOD - 1))
    if high >= HUE_PERIOD:
        ranges.append((0, high - HUE_PERIOD))
    return ranges


def detect_color_regions(
    frame: np.ndarray,
    hue: int,
    tolerance: int | None = None,
    finder: ContourFinder | None = None,
    cfg: Config | None = None,
) -> list[Rectangle]:
    """Detect contiguous regions of a vivid target hue."""
    finder = finder or OpenCVContourFinder()
    cfg = cfg or config
    if tolerance is None:
        tolerance = cfg.color_tolerance

    mask = finder.hue_mask(
        frame,
        hue_ranges(hue, tolerance),
        cfg.color_min_saturation,
        cfg.color_min_value,
    )

    regions: list[Rectangle] = []
    for contour in finder.find_external_contours(mask):
        x, y, w, h = finder.bounding_rect(contour)
        if w >= cfg.color_min_size and h >= cfg.color_min_size:
            regions.append(Rectangle(x, y, w, h))

    logger.debug(f"Colour detector kept {len(regions)} regions for hue {hue}±{tolerance}")
    return regions
