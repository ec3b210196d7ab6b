"""Text extraction through the Tesseract OCR engine."""

from __future__ import annotations

import os
from typing import Protocol

import cv2  # type: ignore
import numpy as np
import pytesseract  # type: ignore
from loguru import logger

from ..core.config import Config, config
from ..core.errors import DetectionError, OCRInitError
from .models import ElementType, OCRWord, Rectangle, UIElement

# ``image_to_data`` row level for single words
WORD_LEVEL = 5


class TextRecognizer(Protocol):
    """OCR capability consumed by the text extractor."""

    def words(self, image: np.ndarray) -> list[OCRWord]:
        """Return every word-level result, in engine emission order."""
        ...

    def recognize(self, image: np.ndarray) -> str:
        """Return the full text of a (sub-)image, or an empty string."""
        ...


class TesseractRecognizer:
    """``TextRecognizer`` backed by pytesseract."""

    def __init__(self, lang: str | None = None, tesseract_cmd: str | None = None, cfg: Config | None = None) -> None:
        """Initialize the recognizer and check that Tesseract is installed.

        Parameters
        ----------
        lang : str, optional
            Tesseract language code (defaults to ``tesseract_lang`` config).
        tesseract_cmd : str, optional
            Path to the Tesseract binary. Falls back to the ``tesseract_cmd``
            setting, then the ``TESSERACT_CMD`` environment variable, then PATH.

        Raises
        ------
        OCRInitError
            If the Tesseract binary cannot be run.
        """
        cfg = cfg or config
        self.lang = lang or cfg.tesseract_lang

        # If the user provided a custom tesseract cmd path, set it.
        cmd = tesseract_cmd or cfg.tesseract_cmd or os.getenv("TESSERACT_CMD")
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd

        try:
            version = pytesseract.get_tesseract_version()
        except (pytesseract.TesseractNotFoundError, OSError) as exc:
            raise OCRInitError(f"Could not initialize tesseract: {exc}") from exc
        logger.info(f"TesseractRecognizer: using Tesseract {version} ({self.lang})")

    @staticmethod
    def _to_rgb(image: np.ndarray) -> np.ndarray:
        if image.ndim == 3:
            return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        return image

    def words(self, image: np.ndarray) -> list[OCRWord]:
        try:
            data = pytesseract.image_to_data(
                self._to_rgb(image),
                lang=self.lang,
                output_type=pytesseract.Output.DICT,
            )
        except pytesseract.TesseractError as exc:
            raise DetectionError(f"Word recognition failed: {exc}") from exc

        words: list[OCRWord] = []
        for i in range(len(data["level"])):
            if int(data["level"][i]) != WORD_LEVEL:
                continue
            words.append(
                OCRWord(
                    text=data["text"][i],
                    confidence=float(data["conf"][i]),
                    left=int(data["left"][i]),
                    top=int(data["top"][i]),
                    width=int(data["width"][i]),
                    height=int(data["height"][i]),
                )
            )
        return words

    def recognize(self, image: np.ndarray) -> str:
        try:
            return pytesseract.image_to_string(self._to_rgb(image), lang=self.lang) or ""
        except pytesseract.TesseractError as exc:
            raise DetectionError(f"Region recognition failed: {exc}") from exc


def extract_text_elements(frame: np.ndarray, recognizer: TextRecognizer) -> list[UIElement]:
    """Return one ``TEXT`` element per recognized word, in OCR order."""
    elements: list[UIElement] = []
    for word in recognizer.words(frame):
        text = (word.text or "").strip()
        if not text:
            continue  # skip empty entries
        if word.width <= 0 or word.height <= 0:
            logger.debug(f"Skipping OCR word {text!r} with degenerate box")
            continue
        elements.append(
            UIElement(
                bounds=Rectangle(word.left, word.top, word.width, word.height),
                text=text,
                element_type=ElementType.TEXT,
                confidence=word.confidence,
            )
        )

    logger.debug(f"Text extractor found {len(elements)} words")
    return elements


def recover_region_label(frame: np.ndarray, rect: Rectangle, recognizer: TextRecognizer) -> str:
    """OCR the sub-image under ``rect`` and return its stripped text."""
    roi = frame[rect.y:rect.bottom, rect.x:rect.right]
    if roi.size == 0:
        return ""
    return (recognizer.recognize(roi) or "").strip()
