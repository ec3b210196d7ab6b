"""Core components of the smart mouse framework."""

from .config import Config, config
from .errors import (
    DetectionError,
    EnvironmentFailure,
    InputInjectionError,
    OCRInitError,
    ScreenCaptureError,
    SmartMouseError,
)
from .logger import Logger, log

__all__ = [
    "Config",
    "DetectionError",
    "EnvironmentFailure",
    "InputInjectionError",
    "Logger",
    "OCRInitError",
    "ScreenCaptureError",
    "SmartMouseError",
    "config",
    "log",
]
