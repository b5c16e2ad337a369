"""
Unit tests for imaging helpers.
"""

import numpy as np
import pytest
from fastapi import HTTPException
from PIL import Image

from swatch.services.colors.pixel import Pixel
from swatch.services.imaging import (
    decode_image_bytes, flatten_rgb, load_image, pixels_from_array,
    resize_long_edge, save_image, validate_magic_bytes
)


class TestLoadImage:
    """Decoding from disk and bytes"""

    def test_load_png(self, quadrant_png_path, quadrant_image):
        rgb = load_image(quadrant_png_path)
        assert rgb.shape == (8, 8, 3)
        assert rgb.dtype == np.uint8
        np.testing.assert_array_equal(rgb, quadrant_image)

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "missing.png")

    def test_decode_invalid_bytes(self):
        with pytest.raises(ValueError):
            decode_image_bytes(b"not an image at all")

    def test_decode_converts_grayscale_to_rgb(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.fromarray(np.full((4, 4), 90, dtype=np.uint8)).save(path)
        rgb = load_image(path)
        assert rgb.shape == (4, 4, 3)
        assert np.all(rgb == 90)

    def test_save_round_trip(self, tmp_path, quadrant_image):
        path = tmp_path / "out.png"
        save_image(quadrant_image, path)
        np.testing.assert_array_equal(load_image(path), quadrant_image)


class TestPixelConversion:
    """Array to pixel helpers"""

    def test_pixels_from_array_row_major(self):
        rgb = np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3)
        pixels = pixels_from_array(rgb)
        assert len(pixels) == 6
        assert pixels[0] == Pixel(0, 1, 2)
        assert (pixels[4].x, pixels[4].y) == (1, 1)
        assert pixels[4] == Pixel(12, 13, 14)

    def test_flatten_rgb(self, quadrant_image):
        flat = flatten_rgb(quadrant_image)
        assert flat.shape == (64, 3)
        assert flat.dtype == np.int64
        assert flat[0].tolist() == [255, 0, 0]


class TestResizeLongEdge:
    """Optional downscaling"""

    def test_zero_keeps_size(self):
        rgb = np.zeros((100, 50, 3), dtype=np.uint8)
        assert resize_long_edge(rgb, 0) is rgb

    def test_smaller_than_limit_unchanged(self):
        rgb = np.zeros((100, 50, 3), dtype=np.uint8)
        assert resize_long_edge(rgb, 200).shape == (100, 50, 3)

    def test_downscale(self):
        rgb = np.zeros((100, 50, 3), dtype=np.uint8)
        assert resize_long_edge(rgb, 20).shape == (20, 10, 3)


class TestValidateMagicBytes:
    """Upload sniffing"""

    def test_png(self, quadrant_png):
        assert validate_magic_bytes(quadrant_png) == "image/png"

    def test_jpeg(self):
        assert validate_magic_bytes(b"\xff\xd8\xff\xe0" + b"\x00" * 8) == "image/jpeg"

    def test_too_short(self):
        with pytest.raises(HTTPException) as exc:
            validate_magic_bytes(b"\x89PNG")
        assert exc.value.status_code == 400

    def test_unknown(self):
        with pytest.raises(HTTPException):
            validate_magic_bytes(b"GIF89a" + b"\x00" * 10)
