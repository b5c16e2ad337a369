"""
Swatch Pipeline

Runs the palette stages over a decoded image: median-cut quantization,
luminance ordering and primary (most variant) color selection, with
per-stage timing and logging.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
from loguru import logger

from swatch.config import config
from swatch.services.imaging import flatten_rgb
from swatch.utils.ids import generate_request_id
from swatch.utils.metrics import get_metrics, performance_monitor
from .median_cut import quantize_array, repaint_image
from .ordering import most_variant_color, order_by_luminance
from .pixel import Pixel
from .swatches import render_swatch_strip


@dataclass
class SwatchResult:
    """Ordered palette of an image plus bookkeeping for presentation."""
    palette: List[Pixel]
    primary: Pixel
    max_depth: int
    pixel_count: int
    request_id: str
    timings_ms: Dict[str, float] = field(default_factory=dict)
    swatch_png_b64: Optional[str] = None
    repainted: Optional[np.ndarray] = None

    @property
    def primary_index(self) -> int:
        return self.palette.index(self.primary)


def build_swatch(rgb: np.ndarray,
                 max_depth: int = None,
                 include_swatch: bool = False,
                 include_repaint: bool = False,
                 request_id: Optional[str] = None) -> SwatchResult:
    """
    Build the luminance-ordered median-cut palette of an RGB image.

    Args:
        rgb: Image as an (H, W, 3) array
        max_depth: Median-cut depth; the palette has 2 ** max_depth colors
        include_swatch: Also render a PNG chip strip
        include_repaint: Also return the image repainted with its bucket means
        request_id: Identifier for log correlation (generated if omitted)

    Raises:
        ValueError: For invalid depths or images too small for the depth
    """
    if max_depth is None:
        max_depth = config.DEFAULT_MAX_DEPTH
    if not config.validate_max_depth(max_depth):
        raise ValueError(f"max_depth must be in [0, {config.MAX_DEPTH_LIMIT}], got {max_depth}")

    request_id = request_id or generate_request_id()
    pixel_count = int(rgb.shape[0] * rgb.shape[1])
    timings: Dict[str, float] = {}
    log = logger.bind(request_id=request_id)

    log.info(f"Building swatch: {pixel_count} pixels, max_depth={max_depth}")

    try:
        start = time.time()
        with performance_monitor("quantization", pixel_count=pixel_count):
            repainted = None
            if include_repaint:
                means, repainted = repaint_image(rgb, max_depth)
            else:
                means = quantize_array(flatten_rgb(rgb), 0, max_depth)
        timings["quantization"] = (time.time() - start) * 1000

        start = time.time()
        with performance_monitor("ordering"):
            palette = order_by_luminance(Pixel(int(r), int(g), int(b)) for r, g, b in means)
            primary = most_variant_color(palette)
        timings["ordering"] = (time.time() - start) * 1000

        swatch_png_b64 = None
        if include_swatch:
            start = time.time()
            swatch_png_b64 = render_swatch_strip(
                palette,
                chip_size=config.CHIP_SIZE,
                highlight_index=palette.index(primary)
            )
            timings["swatch"] = (time.time() - start) * 1000

    except Exception as e:
        log.error(f"Swatch {request_id} failed: {e}")
        get_metrics().increment_failure_count(type(e).__name__)
        raise

    get_metrics().record_palette_size(len(palette))
    log.info(f"Swatch {request_id} completed: {len(palette)} colors, primary={primary.to_hex()}")

    return SwatchResult(
        palette=palette,
        primary=primary,
        max_depth=max_depth,
        pixel_count=pixel_count,
        request_id=request_id,
        timings_ms=timings,
        swatch_png_b64=swatch_png_b64,
        repainted=repainted,
    )
