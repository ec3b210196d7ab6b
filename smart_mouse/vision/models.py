"""Data models for computer vision subsystem."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Rectangle:
    """Axis-aligned box ``(x, y, width, height)`` in frame pixel coordinates."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Rectangle size must be positive, got {self.width}x{self.height}")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def center(self) -> tuple[int, int]:
        """Integer centre point, used as the click coordinate."""
        return self.x + self.width // 2, self.y + self.height // 2

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return rectangle as ``(left, top, right, bottom)`` tuple."""
        return self.x, self.y, self.right, self.bottom


class ElementType(str, Enum):
    """Coarse kind of a detected element."""

    BUTTON = "button"
    TEXT = "text"
    ICON = "icon"
    INPUT = "input"


@dataclass(frozen=True, slots=True)
class UIElement:
    """Representation of a detected UI element on screen.

    ``confidence`` uses the OCR engine's native 0-100 scale. ``text`` is empty
    for elements found purely geometrically.
    """

    bounds: Rectangle
    text: str
    element_type: ElementType
    confidence: float

    def center(self) -> tuple[int, int]:
        return self.bounds.center()


@dataclass(frozen=True, slots=True)
class OCRWord:
    """One word reported by the OCR engine; ``text`` may be empty."""

    text: str | None
    confidence: float
    left: int
    top: int
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class ScoredElement:
    """A fused element paired with its score against a query."""

    element: UIElement
    score: float
