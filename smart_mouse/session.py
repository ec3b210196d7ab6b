"""Analysis session: owns the last screenshot and element list.

Every action re-captures the screen (``refresh``) and then resolves the query
against the freshly fused elements. The element list is replaced wholesale on
each refresh and is read-only in between.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .automation.action_executor import ActionResolver, ActionType, PacingPolicy
from .automation.input_injector import DryRunInjector, InputInjector, PyAutoGUIInjector
from .core.config import Config, check_color_target, config
from .core.logger import log
from .vision import debug
from .vision.engine import VisionEngine
from .vision.matcher import MatchPolicy, find_best_match, rank_elements
from .vision.models import ScoredElement, UIElement
from .vision.ocr import TesseractRecognizer
from .vision.screencap import FrameSource, ImageFileFrameSource, ScreenFrameSource


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    """Result of resolving and acting on a query."""

    query: str
    action: ActionType
    element: UIElement | None = None
    point: tuple[int, int] | None = None

    @property
    def found(self) -> bool:
        return self.element is not None


class SmartMouse:
    """Capture, analyze, match and act, one screenshot cycle at a time."""

    def __init__(
        self,
        frame_source: FrameSource,
        engine: VisionEngine,
        resolver: ActionResolver,
        policy: MatchPolicy | None = None,
    ) -> None:
        self.frame_source = frame_source
        self.engine = engine
        self.resolver = resolver
        self.policy = policy or MatchPolicy()
        self._screenshot: np.ndarray | None = None
        self._elements: tuple[UIElement, ...] = ()

    @property
    def screenshot(self) -> np.ndarray | None:
        return self._screenshot

    @property
    def elements(self) -> tuple[UIElement, ...]:
        return self._elements

    # ------------------------------------------------------------------
    # Refresh / query phases
    # ------------------------------------------------------------------
    def refresh(self) -> tuple[UIElement, ...]:
        """Capture a new frame and rebuild the element list from scratch."""
        frame = self.frame_source.grab()
        elements = tuple(self.engine.analyze(frame))
        self._screenshot = frame
        self._elements = elements
        for el in elements:
            log.log_vision_detection(el.element_type.value, el.confidence, el.center())
        log.info(f"Detected {len(elements)} UI elements")
        return elements

    def find(self, query: str) -> UIElement | None:
        """Best match for ``query`` among the current elements (no re-capture)."""
        return find_best_match(self._elements, query, self.policy)

    def rank(self, query: str) -> list[ScoredElement]:
        return rank_elements(self._elements, query, self.policy)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def act(self, query: str, action: ActionType) -> ActionOutcome:
        """Refresh, resolve ``query`` and perform ``action`` on the match."""
        self.refresh()

        element = self.find(query)
        if element is None:
            log.warning(f"Could not find element matching: {query}")
            return ActionOutcome(query, action)

        point = self.resolver.perform(element, action)
        log.success(f"{action.value} on {element.text!r} at {point}")
        return ActionOutcome(query, action, element, point)

    def click_on(self, target: str, right_click: bool = False) -> ActionOutcome:
        return self.act(target, ActionType.RIGHT_CLICK if right_click else ActionType.CLICK)

    def double_click_on(self, target: str) -> ActionOutcome:
        return self.act(target, ActionType.DOUBLE_CLICK)

    def move_to(self, target: str) -> ActionOutcome:
        return self.act(target, ActionType.MOVE)

    def show_detections(self) -> None:
        """Refresh and display the annotated detections."""
        self.refresh()
        debug.show_detections(self._screenshot, self._elements)

    def close(self) -> None:
        """Release the frame source."""
        self.frame_source.close()

    def __enter__(self) -> SmartMouse:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def build_session(
    image_path: str | Path | None = None,
    dry_run: bool = False,
    color_hue: int | None = None,
    color_tolerance: int | None = None,
    cfg: Config | None = None,
) -> SmartMouse:
    """Wire a ``SmartMouse`` to the real screen, Tesseract and PyAutoGUI.

    Raises:
        ValueError: If the settings or the colour override are out of range.
        EnvironmentFailure: If the frame source, OCR engine or input backend
            cannot be initialized.
    """
    cfg = cfg or config
    cfg.validate_config()
    check_color_target(color_hue, color_tolerance)

    frame_source: FrameSource = ImageFileFrameSource(image_path) if image_path else ScreenFrameSource()
    engine = VisionEngine(
        TesseractRecognizer(cfg=cfg),
        cfg=cfg,
        color_hue=color_hue,
        color_tolerance=color_tolerance,
    )
    injector: InputInjector = DryRunInjector() if dry_run else PyAutoGUIInjector()
    pacing = PacingPolicy.immediate() if dry_run else PacingPolicy.from_config(cfg)
    resolver = ActionResolver(injector, pacing)
    return SmartMouse(frame_source, engine, resolver, MatchPolicy.from_config(cfg))
