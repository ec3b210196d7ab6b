from __future__ import annotations


class SmartMouseError(RuntimeError):
    """Base exception for every error raised by the smart mouse framework."""


class EnvironmentFailure(SmartMouseError):
    """A required external collaborator could not be acquired.

    Raised at startup (screen, OCR engine, input backend). Callers are
    expected to let it unwind to the top level and abort the run.
    """


class ScreenCaptureError(EnvironmentFailure):
    """Raised when a frame cannot be grabbed from the screen or an image file."""


class OCRInitError(EnvironmentFailure):
    """Raised when the Tesseract OCR engine cannot be initialized."""


class InputInjectionError(EnvironmentFailure):
    """Raised when the mouse input backend is unavailable."""


class DetectionError(SmartMouseError):
    """A detector failed while scanning a frame.

    The vision engine treats this as an empty contribution from the failing
    detector family rather than aborting the analysis.
    """
