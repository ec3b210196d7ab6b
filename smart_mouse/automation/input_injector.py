"""Mouse input injection backends."""

from __future__ import annotations

from typing import Any, Protocol

from ..core.errors import InputInjectionError
from ..core.logger import log


class InputInjector(Protocol):
    """Raw pointer events consumed by the action resolver."""

    def move_to(self, x: int, y: int) -> None: ...

    def button_down(self, button: str, point: tuple[int, int]) -> None: ...

    def button_up(self, button: str, point: tuple[int, int]) -> None: ...


class PyAutoGUIInjector:
    """``InputInjector`` backed by PyAutoGUI.

    pyautogui connects to the display at import time, so it is imported
    lazily here and a missing display surfaces as ``InputInjectionError``.
    """

    def __init__(self) -> None:
        self._gui = self._load()

    @staticmethod
    def _load() -> Any:
        try:
            import pyautogui
        except Exception as exc:  # noqa: BLE001 - any display/import failure is fatal here
            raise InputInjectionError(
                f"PyAutoGUI unavailable. Ensure a display is accessible: {exc}"
            ) from exc

        # Pacing between events is owned by ActionResolver
        pyautogui.PAUSE = 0
        log.debug("PyAutoGUI input backend ready")
        return pyautogui

    def move_to(self, x: int, y: int) -> None:
        self._gui.moveTo(x, y)

    def button_down(self, button: str, point: tuple[int, int]) -> None:
        self._gui.mouseDown(x=point[0], y=point[1], button=button)

    def button_up(self, button: str, point: tuple[int, int]) -> None:
        self._gui.mouseUp(x=point[0], y=point[1], button=button)


class DryRunInjector:
    """Records requested events without touching the pointer."""

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def move_to(self, x: int, y: int) -> None:
        self.events.append(("move", (x, y)))

    def button_down(self, button: str, point: tuple[int, int]) -> None:
        self.events.append(("down", button, point))

    def button_up(self, button: str, point: tuple[int, int]) -> None:
        self.events.append(("up", button, point))
