"""Computer vision utilities for the smart mouse.

This sub-package turns a raw screenshot into a fused list of UI elements
(region detectors plus OCR) and resolves text queries against that list.
"""

from .engine import VisionEngine
from .matcher import MatchPolicy, find_best_match, text_similarity
from .models import ElementType, Rectangle, UIElement

__all__ = [
    "ElementType",
    "MatchPolicy",
    "Rectangle",
    "UIElement",
    "VisionEngine",
    "find_best_match",
    "text_similarity",
]
