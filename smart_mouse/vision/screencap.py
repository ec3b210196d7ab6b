"""Frame sources: the live primary monitor or an image on disk.

Both return a BGR ``uint8`` array so the detectors never see the capture
backend's native pixel format.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import cv2  # type: ignore
import mss
from mss.exception import ScreenShotError
import numpy as np

from ..core.errors import ScreenCaptureError
from ..core.logger import log


class FrameSource(Protocol):
    """Produces one immutable colour frame on demand."""

    def grab(self) -> np.ndarray: ...

    def close(self) -> None: ...


class ScreenFrameSource:
    """Capture the primary monitor with ``mss``."""

    def __init__(self) -> None:
        try:
            self._sct = mss.mss()
        except ScreenShotError as exc:
            raise ScreenCaptureError(f"Cannot open display: {exc}") from exc

    def grab(self) -> np.ndarray:
        """Capture the primary monitor as a BGR frame.

        Raises:
            ScreenCaptureError: If the screen cannot be read.

        """
        try:
            monitor = self._sct.monitors[1]
            shot = np.array(self._sct.grab(monitor))
        except (ScreenShotError, IndexError) as exc:
            log.error(f"Screen capture failed: {exc}")
            raise ScreenCaptureError("Screen capture failed") from exc

        frame = cv2.cvtColor(shot, cv2.COLOR_BGRA2BGR)
        frame.flags.writeable = False
        return frame

    def close(self) -> None:
        """Release the display connection."""
        self._sct.close()


class ImageFileFrameSource:
    """Serve a screenshot saved on disk, re-read on every grab."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        if not self.path.is_file():
            raise ScreenCaptureError(f"Screenshot not found: {self.path}")

    def grab(self) -> np.ndarray:
        frame = cv2.imread(str(self.path), cv2.IMREAD_COLOR)
        if frame is None:
            raise ScreenCaptureError(f"Failed to load image: {self.path}")
        frame.flags.writeable = False
        return frame

    def close(self) -> None:
        pass
