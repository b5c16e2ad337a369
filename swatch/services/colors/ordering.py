"""
Palette Ordering and Selection

Post-processing passes over a quantized palette: brightest-first ordering
and selection of the most variant (highest chroma spread) color.
"""

import math
from typing import Iterable, List, Sequence

from loguru import logger

from .pixel import EmptyPixelsError, Pixel


def _luminance_key(pixel: Pixel) -> float:
    value = pixel.luminance
    if math.isnan(value):
        raise ValueError(f"Luminance of {pixel} is not comparable")
    return value


def order_by_luminance(pixels: Iterable[Pixel]) -> List[Pixel]:
    """
    Sort pixels by BT.709 luminance, brightest first.

    The result is a reordering of the input: same length, same elements.
    Equal-luminance pixels keep no particular relative order.
    """
    return sorted(pixels, key=_luminance_key, reverse=True)


def most_variant_color(pixels: Sequence[Pixel]) -> Pixel:
    """
    Return the pixel with the largest max(r, g, b) - min(r, g, b).

    The first pixel reaching the maximum wins ties.

    Raises:
        EmptyPixelsError: If pixels is empty
    """
    best = None
    for p in pixels:
        if best is None or p.spread > best.spread:
            best = p

    if best is None:
        raise EmptyPixelsError("Cannot select the most variant color of an empty palette")

    logger.debug(f"Most variant color {best.to_hex()} (spread={best.spread})")
    return best
