"""
Pixel Data Model

The atomic colored sample shared by every stage of the palette pipeline,
plus the closed set of color channels the median-cut partitioner splits on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

# ITU-R BT.709 luma weights
LUMINANCE_WEIGHTS = (0.2126, 0.7152, 0.0722)


class EmptyPixelsError(ValueError):
    """Raised when an operation that needs at least one pixel receives none."""


def clamp(value: int, low: int = 0, high: int = 255) -> int:
    return min(high, max(low, value))


@dataclass(frozen=True)
class Pixel:
    """
    RGB sample with optional source coordinates.

    Equality and hashing only look at (r, g, b); x and y ride along so
    that quantized buckets can be mapped back to the image they came from.
    Channel values are not range-checked here: producers keep them in [0, 255].
    """
    r: int
    g: int
    b: int
    x: Optional[int] = field(default=None, compare=False)
    y: Optional[int] = field(default=None, compare=False)

    @property
    def luminance(self) -> float:
        wr, wg, wb = LUMINANCE_WEIGHTS
        return wr * self.r + wg * self.g + wb * self.b

    @property
    def spread(self) -> int:
        """Chroma spread: max(r, g, b) - min(r, g, b)."""
        return max(self.r, self.g, self.b) - min(self.r, self.g, self.b)

    def as_tuple(self):
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Render as #RRGGBB (channels clamped to a byte)."""
        r, g, b = (clamp(c) for c in self.as_tuple())
        return f"#{r:02X}{g:02X}{b:02X}"

    def to_dict(self) -> Dict[str, int]:
        return {"r": self.r, "g": self.g, "b": self.b}

    @classmethod
    def from_hex(cls, hex_color: str) -> "Pixel":
        hex_color = hex_color.lstrip('#')
        if len(hex_color) != 6:
            raise ValueError(f"Invalid hex color: #{hex_color}")
        r, g, b = (int(hex_color[i:i+2], 16) for i in (0, 2, 4))
        return cls(r, g, b)

    def adjust_color(self, factor: float) -> "Pixel":
        """Scale every channel by factor, truncate and clamp to [0, 255]."""
        return Pixel(
            clamp(int(self.r * factor)),
            clamp(int(self.g * factor)),
            clamp(int(self.b * factor)),
            x=self.x,
            y=self.y,
        )

    def lighter(self, percent: float) -> "Pixel":
        return self.adjust_color(1.0 + percent / 100.0)

    def darker(self, percent: float) -> "Pixel":
        return self.adjust_color(1.0 - percent / 100.0)


class Channel(Enum):
    """Color channel a bucket can be split on, in tie-break precedence order."""
    RED = 0
    GREEN = 1
    BLUE = 2

    def value_of(self, pixel: Pixel) -> int:
        if self is Channel.RED:
            return pixel.r
        if self is Channel.GREEN:
            return pixel.g
        return pixel.b
