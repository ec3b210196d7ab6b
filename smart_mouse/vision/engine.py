"""Vision engine for screenshot analysis and UI element detection."""

from __future__ import annotations

import concurrent.futures
import time
from typing import Callable

import numpy as np
from loguru import logger

from ..core.config import Config, config
from ..core.errors import DetectionError
from ..core.logger import log
from .detectors import ContourFinder, OpenCVContourFinder, detect_button_regions, detect_color_regions
from .fusion import build_region_elements, fuse_elements
from .models import UIElement
from .ocr import TextRecognizer, extract_text_elements


class VisionEngine:
    """Analyze screenshots and return the fused list of detected UI elements."""

    def __init__(
        self,
        recognizer: TextRecognizer,
        finder: ContourFinder | None = None,
        cfg: Config | None = None,
        color_hue: int | None = None,
        color_tolerance: int | None = None,
    ) -> None:
        """Initialize VisionEngine.

        Parameters
        ----------
        recognizer : TextRecognizer
            OCR engine used for word extraction and region labels.
        finder : ContourFinder, optional
            Geometric primitives (OpenCV by default).
        cfg : Config, optional
            Settings (global config by default).
        color_hue, color_tolerance : int, optional
            Enable the colour detector for this hue, overriding the config.

        """
        self.recognizer = recognizer
        self.finder = finder or OpenCVContourFinder()
        self.cfg = cfg or config
        self.color_hue = color_hue if color_hue is not None else self.cfg.color_hue
        self.color_tolerance = color_tolerance if color_tolerance is not None else self.cfg.color_tolerance

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def analyze(self, frame: np.ndarray) -> list[UIElement]:
        """Return the fused element list for one frame.

        Word-level text elements come first, then button-like regions, then
        colour regions when a target hue is set.
        """
        start = time.perf_counter()

        if self.cfg.parallel_detection:
            # Both families only read the frame; fusion order is fixed below.
            with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
                text_future = executor.submit(self._detect_text, frame)
                region_future = executor.submit(self._detect_regions, frame)
                text_elements = text_future.result()
                button_elements, color_elements = region_future.result()
        else:
            text_elements = self._detect_text(frame)
            button_elements, color_elements = self._detect_regions(frame)

        elements = fuse_elements(text_elements, button_elements, color_elements)
        log.log_performance("frame analysis", (time.perf_counter() - start) * 1000)
        logger.debug(
            f"VisionEngine fused {len(text_elements)} text, {len(button_elements)} button "
            f"and {len(color_elements)} colour elements"
        )

        if self.cfg.save_vision_debug:
            from .debug import save_debug_overlay

            save_debug_overlay(frame, elements, self.cfg)

        return elements

    # ------------------------------------------------------------------
    # Detector families
    # ------------------------------------------------------------------
    def _detect_text(self, frame: np.ndarray) -> list[UIElement]:
        return self._guarded("Text extraction", lambda: extract_text_elements(frame, self.recognizer))

    def _detect_regions(self, frame: np.ndarray) -> tuple[list[UIElement], list[UIElement]]:
        label_recognizer = self.recognizer if self.cfg.recover_region_labels else None

        def buttons() -> list[UIElement]:
            rects = detect_button_regions(frame, self.finder, self.cfg)
            return build_region_elements(
                frame, rects, label_recognizer, confidence=self.cfg.synthetic_confidence
            )

        def colors() -> list[UIElement]:
            rects = detect_color_regions(
                frame, self.color_hue, self.color_tolerance, self.finder, self.cfg
            )
            return build_region_elements(
                frame, rects, label_recognizer, confidence=self.cfg.synthetic_confidence
            )

        button_elements = self._guarded("Button detection", buttons)
        color_elements = self._guarded("Colour detection", colors) if self.color_hue is not None else []
        return button_elements, color_elements

    @staticmethod
    def _guarded(name: str, detect: Callable[[], list[UIElement]]) -> list[UIElement]:
        try:
            return detect()
        except DetectionError as exc:
            logger.warning(f"{name} failed: {exc}")
            return []
