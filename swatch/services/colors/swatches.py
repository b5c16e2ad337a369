"""
Swatch Rendering Module

Renders an ordered palette for presentation: an HTML page of color blocks,
a JSON array of channel values, or a PNG strip of color chips.
"""

import base64
import html
import json
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import cv2
import numpy as np
from loguru import logger

from .ordering import most_variant_color
from .pixel import Pixel

HTML_HEAD = """<html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        <title>{title}</title>
        <style>
            html, body {{ width: 100%; height: 100%; margin: 0; padding: 0}}
            body {{ display: flex; flex-wrap: wrap;}}
            .color {{ width: 25%; height: 25%;}}
        </style>
    </head>
    <body>"""

COLOR_BLOCK = '\t<div class="color" style="background-color: rgb({r},{g},{b})"></div>\n'


def render_html(pixels: Sequence[Pixel], title: str) -> str:
    """
    Render the palette as a page of color blocks.

    The most variant color leads; palette entries equal to it are not repeated.
    """
    primary = most_variant_color(pixels)

    parts = [HTML_HEAD.format(title=html.escape(title)), "\n"]
    parts.append(COLOR_BLOCK.format(**primary.to_dict()))
    for p in pixels:
        if p == primary:
            continue
        parts.append(COLOR_BLOCK.format(**p.to_dict()))
    parts.append("</body>\n</html>")
    return "".join(parts)


def render_json(pixels: Sequence[Pixel]) -> str:
    """Render the palette as a pretty-printed JSON array of {r, g, b} objects."""
    return json.dumps([p.to_dict() for p in pixels], indent=2)


def render_swatch_strip(pixels: Sequence[Pixel],
                        chip_size: int = 40,
                        highlight_index: Optional[int] = None,
                        border_color: Tuple[int, int, int] = (0, 0, 0),
                        border_width: int = 2) -> str:
    """
    Render a horizontal strip of color chips.

    Args:
        pixels: Palette colors, drawn left to right
        chip_size: Size of each color chip in pixels
        highlight_index: Index of color to outline (primary color)
        border_color: RGB color for highlight border
        border_width: Width of highlight border in pixels

    Returns:
        Base64-encoded PNG image string
    """
    if not pixels:
        raise ValueError("Empty palette provided")
    if chip_size < 1:
        raise ValueError(f"chip_size must be positive, got {chip_size}")

    k = len(pixels)
    logger.debug(f"Rendering swatch strip with {k} colors, chip_size={chip_size}")

    img = np.zeros((chip_size, chip_size * k, 3), dtype=np.uint8)
    for i, p in enumerate(pixels):
        r, g, b = (int(np.clip(c, 0, 255)) for c in p.as_tuple())
        img[:, i * chip_size:(i + 1) * chip_size] = (b, g, r)  # BGR for OpenCV

    if highlight_index is not None and 0 <= highlight_index < k:
        x_start = highlight_index * chip_size
        x_end = (highlight_index + 1) * chip_size
        br, bg, bb = border_color
        cv2.rectangle(img, (x_start, 0), (x_end - 1, chip_size - 1), (bb, bg, br), border_width)

    success, buffer = cv2.imencode('.png', img)
    if not success:
        raise RuntimeError("Failed to encode swatch strip as PNG")

    b64_string = base64.b64encode(buffer.tobytes()).decode('ascii')
    logger.debug(f"Encoded swatch strip: {chip_size * k}×{chip_size} -> {len(b64_string)} chars")
    return b64_string


def write_output(content: str, destination: Optional[Union[str, Path]] = None) -> None:
    """Write rendered content to a file, or to stdout when no destination is given."""
    if destination is None:
        sys.stdout.write(content)
        sys.stdout.flush()
        return

    Path(destination).write_text(content, encoding="utf-8")
    logger.info(f"Wrote swatch to {destination}")
