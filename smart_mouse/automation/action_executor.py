"""Action execution: turn a selected element into pointer events."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List

from ..core.config import Config
from ..core.logger import log
from ..vision.models import UIElement
from .input_injector import InputInjector


class ActionType(str, Enum):
    """Pointer actions the resolver can perform on an element."""

    MOVE = "move"
    CLICK = "click"
    RIGHT_CLICK = "right-click"
    DOUBLE_CLICK = "double-click"


@dataclass(frozen=True, slots=True)
class PacingPolicy:
    """Delays (seconds) between synthesized events.

    They let event listeners observe distinct press/release pairs; they are
    not precise timing guarantees.
    """

    settle_delay: float = 0.1
    press_release_delay: float = 0.05
    double_click_gap: float = 0.1

    @classmethod
    def from_config(cls, cfg: Config) -> PacingPolicy:
        return cls(
            settle_delay=cfg.click_settle_delay,
            press_release_delay=cfg.press_release_delay,
            double_click_gap=cfg.double_click_gap,
        )

    @classmethod
    def immediate(cls) -> PacingPolicy:
        return cls(0.0, 0.0, 0.0)


class ActionResolver:
    """Executes pointer actions on detected elements."""

    def __init__(
        self,
        injector: InputInjector,
        pacing: PacingPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the action resolver.

        Args:
            injector: Backend receiving the raw pointer events.
            pacing: Delays between events (defaults to ``PacingPolicy()``).
            sleep: Sleep function, replaceable in tests.
        """
        self.injector = injector
        self.pacing = pacing or PacingPolicy()
        self._sleep = sleep
        self.action_history: List[Dict[str, Any]] = []

    def perform(self, element: UIElement, action: ActionType) -> tuple[int, int]:
        """Perform ``action`` at the centre of ``element``.

        Returns:
            The screen point the action was issued at.
        """
        point = element.center()

        if action is ActionType.MOVE:
            self.injector.move_to(*point)
        elif action is ActionType.CLICK:
            self._click(point, "left")
        elif action is ActionType.RIGHT_CLICK:
            self._click(point, "right")
        elif action is ActionType.DOUBLE_CLICK:
            # Two discrete clicks; never the OS double-click primitive
            self._click(point, "left")
            self._sleep(self.pacing.double_click_gap)
            self._click(point, "left")
        else:
            raise ValueError(f"Invalid action type: {action}")

        log.log_action(action.value, point)
        self.action_history.append({"action": action, "point": point, "timestamp": time.time()})
        return point

    def _click(self, point: tuple[int, int], button: str) -> None:
        self.injector.move_to(*point)
        self._sleep(self.pacing.settle_delay)
        self.injector.button_down(button, point)
        self._sleep(self.pacing.press_release_delay)
        self.injector.button_up(button, point)

    def get_action_history(self) -> List[Dict[str, Any]]:
        """Get the history of performed actions."""
        return self.action_history.copy()

    def clear_history(self) -> None:
        """Clear the action history."""
        self.action_history.clear()
