"""Configuration management for the smart mouse framework."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()


def check_color_target(hue: Optional[int], tolerance: Optional[int]) -> None:
    """Reject a colour-detector hue outside 0-179 or a negative tolerance."""
    if hue is not None and not 0 <= hue <= 179:
        raise ValueError("Colour hue must be between 0 and 179")

    if tolerance is not None and tolerance < 0:
        raise ValueError("Colour tolerance must not be negative")


class Config(BaseSettings):
    """Configuration class for the smart mouse framework.

    Every field can be overridden with an ``SMART_MOUSE_``-prefixed
    environment variable or a ``.env`` file entry.
    """

    model_config = SettingsConfigDict(
        env_prefix="SMART_MOUSE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unexpected env vars rather than raising errors
    )

    # Framework Configuration
    log_level: str = Field(default="INFO")
    log_dir: Optional[str] = Field(default=None, description="Directory for rotating log files (disabled when unset)")

    # OCR Engine
    # Path to the Tesseract OCR binary (leave None to use system PATH)
    tesseract_cmd: Optional[str] = Field(default=None, description="Path to Tesseract executable")
    tesseract_lang: str = Field(default="eng")
    recover_region_labels: bool = Field(default=True, description="OCR each detected region to attach its label")

    # Geometric (button-like) detector
    canny_low_threshold: int = Field(default=50)
    canny_high_threshold: int = Field(default=150)
    dilate_iterations: int = Field(default=2)
    button_min_width: int = Field(default=40)
    button_max_width: int = Field(default=400)
    button_min_height: int = Field(default=20)
    button_max_height: int = Field(default=100)

    # Colour segmentation detector (disabled unless a hue is set)
    color_hue: Optional[int] = Field(default=None, description="Target OpenCV hue (0-179)")
    color_tolerance: int = Field(default=30)
    color_min_saturation: int = Field(default=100)
    color_min_value: int = Field(default=100)
    color_min_size: int = Field(default=20)

    # Detector-derived elements carry this confidence (OCR scale, 0-100)
    synthetic_confidence: float = Field(default=70.0)

    # Fuzzy matching
    match_button_boost: float = Field(default=1.2)
    match_containment_score: float = Field(default=0.9)
    match_threshold: float = Field(default=0.3)

    # Input pacing (seconds)
    click_settle_delay: float = Field(default=0.1)
    press_release_delay: float = Field(default=0.05)
    double_click_gap: float = Field(default=0.1)

    # Vision engine
    parallel_detection: bool = Field(default=False)
    save_vision_debug: bool = Field(default=False)
    vision_debug_dir: str = Field(default="vision_debug")

    def validate_config(self) -> bool:
        """Validate configuration values."""
        if self.match_threshold < 0 or self.match_threshold > 1:
            raise ValueError("Match threshold must be between 0 and 1")

        if self.button_min_width > self.button_max_width:
            raise ValueError("Button min width must not exceed max width")

        if self.button_min_height > self.button_max_height:
            raise ValueError("Button min height must not exceed max height")

        check_color_target(self.color_hue, self.color_tolerance)

        if min(self.click_settle_delay, self.press_release_delay, self.double_click_gap) < 0:
            raise ValueError("Pacing delays must not be negative")

        if not 0 <= self.synthetic_confidence <= 100:
            raise ValueError("Synthetic confidence must be between 0 and 100")

        return True

    def get_debug_path(self) -> str:
        """Get the full path to the vision debug directory."""
        return os.path.join(os.getcwd(), self.vision_debug_dir)


# Global configuration instance
config = Config()
