"""Smart mouse structured logging system."""

from __future__ import annotations

import os
import sys
from typing import Any

from loguru import logger

from .config import config


class Logger:
    """Structured logging system for the smart mouse framework."""

    def __init__(self, name: str = "SmartMouse", level: str | None = None) -> None:
        """Initialize and configure a *Loguru* logger instance."""
        self.name = name
        self.level = level or config.log_level
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure the logger with proper formatting and handlers."""
        # Remove default handler
        logger.remove()

        # ------------------------------------------------------------------
        # Console handler
        # ------------------------------------------------------------------
        console_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level:<8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

        logger.add(
            sys.stderr,
            format=console_format,
            level=self.level,
            colorize=True,
        )

        if not config.log_dir:
            return

        # ------------------------------------------------------------------
        # File handlers
        # ------------------------------------------------------------------
        os.makedirs(config.log_dir, exist_ok=True)
        file_format = (
            "{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | "
            "{name}:{function}:{line} | {message}"
        )

        logger.add(
            os.path.join(config.log_dir, "smart_mouse_{time:YYYY-MM-DD}.log"),
            format=file_format,
            level="DEBUG",
            rotation="1 day",
            retention="30 days",
            compression="zip",
        )

        # Separate error log
        logger.add(
            os.path.join(config.log_dir, "errors_{time:YYYY-MM-DD}.log"),
            format=file_format,
            level="ERROR",
            rotation="1 day",
            retention="90 days",
            compression="zip",
        )

    def set_level(self, level: str) -> None:
        """Re-install the handlers at a new console level."""
        self.level = level
        self._setup_logger()

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        logger.info(f"[{self.name}] {message}", **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        logger.debug(f"[{self.name}] {message}", **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        logger.warning(f"[{self.name}] {message}", **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        logger.error(f"[{self.name}] {message}", **kwargs)

    def success(self, message: str, **kwargs: Any) -> None:
        """Log success message."""
        logger.success(f"[{self.name}] {message}", **kwargs)

    def log_vision_detection(
        self,
        element_type: str,
        confidence: float,
        coordinates: tuple[int, int],
    ) -> None:
        """Log computer vision detection results."""
        msg = (
            f"VISION DETECTION: {element_type} at {coordinates} "
            f"(confidence: {confidence:.2f})"
        )
        self.debug(msg)

    def log_match_decision(self, query: str, text: str | None, score: float) -> None:
        """Log the outcome of resolving a query against the element list."""
        if text is None:
            self.info(f"MATCH: no element for {query!r} (best score: {score:.3f})")
        else:
            self.info(f"MATCH: {query!r} -> {text!r} (score: {score:.3f})")

    def log_action(self, action: str, point: tuple[int, int]) -> None:
        """Log an injected mouse action."""
        self.debug(f"ACTION: {action} at {point}")

    def log_performance(self, operation: str, duration_ms: float) -> None:
        """Log performance metrics."""
        self.debug(f"PERFORMANCE: {operation} took {duration_ms:.2f}ms")


# Global logger instance
log = Logger()
