"""Fuse detector outputs and OCR words into one ordered element list.

Fusion is plain concatenation. Overlapping text and button elements for the
same physical control are expected; the matcher ranks them apart.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
from loguru import logger

from ..core.errors import DetectionError
from .models import ElementType, Rectangle, UIElement
from .ocr import TextRecognizer, recover_region_label

SYNTHETIC_CONFIDENCE = 70.0


def build_region_elements(
    frame: np.ndarray,
    rects: Iterable[Rectangle],
    recognizer: TextRecognizer | None,
    confidence: float = SYNTHETIC_CONFIDENCE,
    element_type: ElementType = ElementType.BUTTON,
) -> list[UIElement]:
    """Wrap detector rectangles as elements, attaching any OCR-recovered label.

    Label recovery is skipped when ``recognizer`` is ``None``. A region whose
    label cannot be read is kept with empty text.
    """
    elements: list[UIElement] = []
    for rect in rects:
        text = ""
        if recognizer is not None:
            try:
                text = recover_region_label(frame, rect, recognizer)
            except DetectionError as exc:
                logger.warning(f"Label recovery failed for region {rect.as_tuple()}: {exc}")
        elements.append(
            UIElement(bounds=rect, text=text, element_type=element_type, confidence=confidence)
        )
    return elements


def fuse_elements(
    text_elements: Sequence[UIElement],
    button_elements: Sequence[UIElement],
    color_elements: Sequence[UIElement] = (),
) -> list[UIElement]:
    """Text words first, then button-like regions, then colour regions."""
    return [*text_elements, *button_elements, *color_elements]
