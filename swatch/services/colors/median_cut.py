"""
Median Cut Quantization

Implements the palette reduction core for Swatch:
- channel range analysis (which channel is widest across a bucket)
- median-cut partitioning to a fixed depth over an index arena
- per-bucket truncating means, optionally mapped back to source coordinates
"""

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .pixel import Channel, EmptyPixelsError, Pixel


class EmptyBucketError(ValueError):
    """Raised when a split would leave a bucket with no pixels to average."""


Coordinates = Tuple[Optional[int], Optional[int]]


def channel_ranges(pixels: Iterable[Pixel]) -> Tuple[int, int, int]:
    """
    Compute max - min of each channel across the pixels in one pass.

    Raises:
        EmptyPixelsError: If pixels is empty
    """
    it = iter(pixels)
    first = next(it, None)
    if first is None:
        raise EmptyPixelsError("Cannot compute channel ranges of an empty pixel collection")

    r_min = r_max = first.r
    g_min = g_max = first.g
    b_min = b_max = first.b
    for p in it:
        r_min, r_max = min(r_min, p.r), max(r_max, p.r)
        g_min, g_max = min(g_min, p.g), max(g_max, p.g)
        b_min, b_max = min(b_min, p.b), max(b_max, p.b)

    return r_max - r_min, g_max - g_min, b_max - b_min


def find_biggest_range(pixels: Iterable[Pixel]) -> Channel:
    """
    Return the channel with the largest spread.

    Ties resolve in RED, GREEN, BLUE order.
    """
    ranges = channel_ranges(pixels)
    biggest = max(ranges)
    for channel in Channel:
        if ranges[channel.value] == biggest:
            return channel


def _widest_channel(values: np.ndarray) -> Channel:
    ranges = values.max(axis=0) - values.min(axis=0)
    # argmax returns the first maximum, which gives the R, G, B precedence
    return Channel(int(np.argmax(ranges)))


def _truncating_mean(values: np.ndarray) -> np.ndarray:
    """Per-channel mean with integer division rounding toward zero."""
    n = values.shape[0]
    if n == 0:
        raise EmptyBucketError("Cannot average an empty bucket")
    sums = values.sum(axis=0, dtype=np.int64)
    return np.sign(sums) * (np.abs(sums) // n)


def _as_values(pixels: Sequence[Pixel]) -> np.ndarray:
    """
    Stack pixel channels into an (N, 3) int64 array.

    Channels are not range checked, but each must fit in a signed 64-bit
    integer.

    Raises:
        ValueError: If a channel value does not fit in int64
    """
    try:
        return np.array([p.as_tuple() for p in pixels], dtype=np.int64).reshape(-1, 3)
    except OverflowError as e:
        raise ValueError(f"Channel values must fit in a signed 64-bit integer: {e}") from e


def _validate_depth(depth: int, max_depth: int) -> None:
    for name, value in (("max_depth", max_depth), ("depth", depth)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValueError(f"{name} must be an integer, got {value!r}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")
    if not 0 <= depth <= max_depth:
        raise ValueError(f"depth must be in [0, {max_depth}], got {depth}")


def partition(values: np.ndarray, depth: int, max_depth: int) -> List[np.ndarray]:
    """
    Split an (N, 3) array of channel values into median-cut buckets.

    Buckets are kept as contiguous ranges of one index arena. Each step sorts
    its range by the widest channel (unstable quicksort) and cuts it at
    len // 2, so an odd bucket gives its left half the smaller share. The
    work-list is LIFO with the left half pushed last, which keeps leaves in
    left-to-right order.

    Args:
        values: Channel values, shape (N, 3)
        depth: Depth of the initial bucket
        max_depth: Depth at which buckets stop splitting

    Returns:
        2 ** (max_depth - depth) arrays of row indices into values

    Raises:
        EmptyPixelsError: If values has no rows
        EmptyBucketError: If there are fewer rows than leaves to fill
        ValueError: For malformed arrays or depths
    """
    values = np.asarray(values)
    if values.ndim != 2 or values.shape[1] != 3:
        raise ValueError(f"Expected an (N, 3) array of channel values, got shape {values.shape}")
    _validate_depth(depth, max_depth)

    n = values.shape[0]
    if n == 0:
        raise EmptyPixelsError("Cannot quantize an empty pixel collection")

    leaf_count = 2 ** (max_depth - depth)
    if n < leaf_count:
        raise EmptyBucketError(
            f"{n} pixels cannot fill {leaf_count} buckets at max_depth={max_depth}; "
            "lower the depth or supply more pixels"
        )

    arena = np.arange(n)
    leaves: List[np.ndarray] = []
    work = [(0, n, depth)]

    while work:
        lo, hi, level = work.pop()
        if level == max_depth:
            leaves.append(arena[lo:hi])
            continue

        bucket = arena[lo:hi]
        channel = _widest_channel(values[bucket])
        order = np.argsort(values[bucket, channel.value], kind="quicksort")
        arena[lo:hi] = bucket[order]

        mid = lo + (hi - lo) // 2
        if mid == lo:
            raise EmptyBucketError(f"Bucket of {hi - lo} pixel(s) at depth {level} cannot be split")

        work.append((mid, hi, level + 1))
        work.append((lo, mid, level + 1))

    logger.debug(f"Median cut produced {len(leaves)} buckets from {n} pixels (max_depth={max_depth})")
    return leaves


def quantize_array(values: np.ndarray, depth: int, max_depth: int) -> np.ndarray:
    """Return the (2 ** (max_depth - depth), 3) int64 array of bucket means."""
    values = np.asarray(values, dtype=np.int64)
    leaves = partition(values, depth, max_depth)
    means = np.empty((len(leaves), 3), dtype=np.int64)
    for i, leaf in enumerate(leaves):
        means[i] = _truncating_mean(values[leaf])
    return means


def quantize(pixels: Sequence[Pixel], depth: int, max_depth: int) -> List[Pixel]:
    """
    Reduce pixels to 2 ** (max_depth - depth) representative colors.

    Depth counts upward from depth to max_depth; max_depth == depth returns
    the mean of the whole input. Results are in left-to-right bucket order.
    """
    means = quantize_array(_as_values(pixels), depth, max_depth)
    return [Pixel(int(r), int(g), int(b)) for r, g, b in means]


def quantize_with_coordinates(
    pixels: Sequence[Pixel], depth: int, max_depth: int
) -> List[Tuple[Pixel, List[Coordinates]]]:
    """
    Quantize and keep, for each bucket, the (x, y) of every pixel it covers.
    """
    pixels = list(pixels)
    values = _as_values(pixels)

    buckets = []
    for leaf in partition(values, depth, max_depth):
        r, g, b = _truncating_mean(values[leaf])
        coords = [(pixels[i].x, pixels[i].y) for i in leaf]
        buckets.append((Pixel(int(r), int(g), int(b)), coords))
    return buckets


def repaint(canvas: np.ndarray, pixels: Sequence[Pixel], max_depth: int) -> List[Pixel]:
    """
    Overwrite canvas[y, x] with the bucket mean of every input pixel.

    Returns:
        The palette, in bucket order

    Raises:
        ValueError: If any pixel has no coordinates; canvas is left untouched
    """
    pixels = list(pixels)
    if any(p.x is None or p.y is None for p in pixels):
        raise ValueError("Pixels without coordinates cannot be repainted")

    palette = []
    for color, coords in quantize_with_coordinates(pixels, 0, max_depth):
        for x, y in coords:
            canvas[y, x] = color.as_tuple()
        palette.append(color)
    return palette


def repaint_image(rgb: np.ndarray, max_depth: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Quantize an (H, W, 3) image whose coordinates are implicit in its layout.

    Returns:
        Tuple of (palette as (2 ** max_depth, 3) int64, repainted copy of rgb)
    """
    if rgb.ndim != 3 or rgb.shape[2] < 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {rgb.shape}")

    height, width = rgb.shape[:2]
    values = rgb[..., :3].reshape(-1, 3).astype(np.int64)
    leaves = partition(values, 0, max_depth)

    palette = np.empty((len(leaves), 3), dtype=np.int64)
    flat = np.empty_like(values)
    for i, leaf in enumerate(leaves):
        mean = _truncating_mean(values[leaf])
        palette[i] = mean
        flat[leaf] = mean

    repainted = flat.reshape(height, width, 3).astype(rgb.dtype)
    return palette, repainted
