"""
Swatch Colors Module

Median-cut palette quantization, luminance ordering, most-variant color
selection and palette rendering for images.
"""

from .median_cut import (
    EmptyBucketError,
    channel_ranges,
    find_biggest_range,
    partition,
    quantize,
    quantize_array,
    quantize_with_coordinates,
    repaint,
    repaint_image,
)
from .ordering import most_variant_color, order_by_luminance
from .pixel import Channel, EmptyPixelsError, Pixel

__all__ = [
    'Channel',
    'EmptyBucketError',
    'EmptyPixelsError',
    'Pixel',
    'channel_ranges',
    'find_biggest_range',
    'most_variant_color',
    'order_by_luminance',
    'partition',
    'quantize',
    'quantize_array',
    'quantize_with_coordinates',
    'repaint',
    'repaint_image',
]
