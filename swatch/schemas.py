"""
Swatch API Schemas
Pydantic models for palette extraction request/response validation.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from swatch.services.colors.pixel import Pixel


class ColorEntry(BaseModel):
    """Single palette color."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex color code in format #RRGGBB"
    )
    r: int = Field(..., ge=0, le=255, description="Red channel")
    g: int = Field(..., ge=0, le=255, description="Green channel")
    b: int = Field(..., ge=0, le=255, description="Blue channel")
    luminance: float = Field(..., ge=0.0, le=255.0, description="BT.709 luminance")

    @classmethod
    def from_pixel(cls, pixel: Pixel) -> "ColorEntry":
        return cls(hex=pixel.to_hex(), luminance=round(pixel.luminance, 4), **pixel.to_dict())


class SwatchResponse(BaseModel):
    """Palette extraction response."""
    request_id: str = Field(..., description="Request identifier for log correlation")
    width: int = Field(..., description="Processed image width in pixels")
    height: int = Field(..., description="Processed image height in pixels")
    max_depth: int = Field(..., ge=0, description="Median-cut depth used")
    pixel_count: int = Field(..., ge=1, description="Number of pixels quantized")
    palette: List[ColorEntry] = Field(
        ...,
        min_length=1,
        description="2 ** max_depth colors ordered by luminance, brightest first"
    )
    primary: ColorEntry = Field(..., description="Most variant color of the palette")
    primary_index: int = Field(..., ge=0, description="Index of the primary color in palette")
    swatch_png_b64: Optional[str] = Field(None, description="Base64 PNG strip of the palette")
    timings_ms: Dict[str, float] = Field(default_factory=dict, description="Stage durations")


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("swatch", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")
