"""
Test configuration and fixtures for Swatch tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from swatch.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def quadrant_image():
    """8x8 RGB image: red, green / blue, white quadrants of 16 pixels each."""
    img = np.zeros((8, 8, 3), dtype=np.uint8)
    img[:4, :4] = RED
    img[:4, 4:] = GREEN
    img[4:, :4] = BLUE
    img[4:, 4:] = WHITE
    return img


def encode_png(rgb: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(rgb).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def quadrant_png(quadrant_image):
    """PNG bytes of the quadrant image."""
    return encode_png(quadrant_image)


@pytest.fixture
def quadrant_png_path(tmp_path, quadrant_png):
    """Quadrant image written to disk."""
    path = tmp_path / "quadrants.png"
    path.write_bytes(quadrant_png)
    return path
