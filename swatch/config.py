"""
Swatch Configuration
Manages environment variables and defaults for the CLI and HTTP service.
"""
import os
from typing import Literal

from dotenv import load_dotenv

load_dotenv()

OUTPUT_TYPES = ("html", "json", "file")


class Config:
    """Configuration class for Swatch."""

    # Quantization
    DEFAULT_MAX_DEPTH: int = int(os.environ.get("SWATCH_MAX_DEPTH", "4"))
    MAX_DEPTH_LIMIT: int = int(os.environ.get("SWATCH_MAX_DEPTH_LIMIT", "24"))

    # Output
    DEFAULT_OUTPUT: Literal["html", "json", "file"] = os.environ.get("SWATCH_OUTPUT", "html")
    OUTPUT_FILE: str = os.environ.get("SWATCH_OUTPUT_FILE", "swatch.html")
    CHIP_SIZE: int = int(os.environ.get("SWATCH_CHIP_SIZE", "40"))

    # Logging
    LOG_LEVEL: str = os.environ.get("SWATCH_LOG_LEVEL", "WARNING")

    # Uploads
    MAX_FILE_MB: int = int(os.environ.get("SWATCH_MAX_FILE_MB", "10"))
    MAX_EDGE: int = int(os.environ.get("SWATCH_MAX_EDGE", "0"))  # 0 disables downscaling

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png"}

    @classmethod
    def validate_max_depth(cls, max_depth: int) -> bool:
        """Validate median-cut depth."""
        return 0 <= max_depth <= cls.MAX_DEPTH_LIMIT

    @classmethod
    def validate_output(cls, output: str) -> bool:
        """Validate output type (case-insensitive)."""
        return output.lower() in OUTPUT_TYPES

    @classmethod
    def validate_max_edge(cls, max_edge: int) -> bool:
        """Validate downscale edge; 0 means keep the original size."""
        return max_edge == 0 or 16 <= max_edge <= 8192


# Global config instance
config = Config()
