"""Vision debugging helpers: draw detected elements onto screenshots."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Sequence

import cv2  # type: ignore
import numpy as np

from ..core.config import Config, config
from .models import UIElement

BOX_COLOR = (0, 255, 0)  # Green in BGR
WINDOW_NAME = "Detected Elements"


def draw_detections(frame: np.ndarray, elements: Sequence[UIElement]) -> np.ndarray:
    """Return a copy of ``frame`` with a box and ``text (type)`` label per element."""
    img = frame.copy()
    font = cv2.FONT_HERSHEY_SIMPLEX

    for el in elements:
        x1, y1, x2, y2 = el.bounds.as_tuple()
        cv2.rectangle(img, (x1, y1), (x2, y2), BOX_COLOR, thickness=2)

        label = f"{el.text} ({el.element_type.value})"
        cv2.putText(
            img,
            label,
            (x1, max(10, y1 - 5)),
            font,
            0.5,
            BOX_COLOR,
            thickness=1,
            lineType=cv2.LINE_AA,
        )

    return img


def show_detections(frame: np.ndarray, elements: Sequence[UIElement]) -> None:
    """Display the annotated frame and block until a key is pressed."""
    cv2.imshow(WINDOW_NAME, draw_detections(frame, elements))
    cv2.waitKey(0)
    cv2.destroyWindow(WINDOW_NAME)


def save_debug_overlay(frame: np.ndarray, elements: Sequence[UIElement], cfg: Config | None = None) -> Path | None:
    """Write the annotated frame under the vision debug directory."""
    cfg = cfg or config
    if not cfg.save_vision_debug:
        return None

    debug_dir = Path(cfg.get_debug_path())
    debug_dir.mkdir(parents=True, exist_ok=True)
    path = debug_dir / f"detections_{int(time.time() * 1000)}.png"
    cv2.imwrite(str(path), draw_detections(frame, elements))
    return path
