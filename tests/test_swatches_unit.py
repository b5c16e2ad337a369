"""
Unit tests for palette rendering.
"""

import base64
import json

import cv2
import numpy as np
import pytest

from swatch.services.colors.pixel import Pixel
from swatch.services.colors.swatches import (
    render_html, render_json, render_swatch_strip, write_output
)


@pytest.fixture
def palette():
    return [Pixel(255, 255, 255), Pixel(0, 255, 0), Pixel(255, 0, 0), Pixel(0, 0, 255)]


class TestRenderHtml:
    """HTML swatch page"""

    def test_title_and_structure(self, palette):
        page = render_html(palette, "photo.png")
        assert page.startswith('<html lang="en">')
        assert "<title>photo.png</title>" in page
        assert ".color { width: 25%; height: 25%;}" in page
        assert page.endswith("</body>\n</html>")

    def test_primary_first_and_not_repeated(self, palette):
        page = render_html(palette, "photo.png")
        blocks = [line for line in page.splitlines() if 'class="color"' in line]
        assert len(blocks) == 4
        assert "rgb(0,255,0)" in blocks[0]
        assert sum("rgb(0,255,0)" in b for b in blocks) == 1
        assert "rgb(255,255,255)" in blocks[1]

    def test_duplicates_of_primary_skipped(self):
        palette = [Pixel(0, 255, 0), Pixel(10, 10, 10), Pixel(0, 255, 0)]
        page = render_html(palette, "x")
        assert page.count('class="color"') == 2

    def test_title_escaped(self, palette):
        assert "<title>a&lt;b&gt;.png</title>" in render_html(palette, "a<b>.png")


class TestRenderJson:
    """JSON palette output"""

    def test_shape(self, palette):
        data = json.loads(render_json(palette))
        assert data[0] == {"r": 255, "g": 255, "b": 255}
        assert len(data) == 4

    def test_pretty_printed(self, palette):
        assert '\n  {\n    "r": 255' in render_json(palette)


class TestRenderSwatchStrip:
    """PNG chip strip"""

    def test_strip_dimensions_and_colors(self, palette):
        b64 = render_swatch_strip(palette, chip_size=10)
        img = cv2.imdecode(np.frombuffer(base64.b64decode(b64), np.uint8), cv2.IMREAD_COLOR)
        assert img.shape == (10, 40, 3)
        # BGR order
        assert img[5, 5].tolist() == [255, 255, 255]
        assert img[5, 15].tolist() == [0, 255, 0]
        assert img[5, 25].tolist() == [0, 0, 255]
        assert img[5, 35].tolist() == [255, 0, 0]

    def test_highlight_border(self, palette):
        b64 = render_swatch_strip(palette, chip_size=10, highlight_index=0, border_width=1)
        img = cv2.imdecode(np.frombuffer(base64.b64decode(b64), np.uint8), cv2.IMREAD_COLOR)
        assert img[0, 0].tolist() == [0, 0, 0]
        assert img[5, 5].tolist() == [255, 255, 255]

    def test_empty_palette(self):
        with pytest.raises(ValueError):
            render_swatch_strip([])


class TestWriteOutput:
    """Output destinations"""

    def test_stdout(self, capsys):
        write_output("hello")
        assert capsys.readouterr().out == "hello"

    def test_file(self, tmp_path):
        target = tmp_path / "swatch.html"
        write_output("<html></html>", target)
        assert target.read_text(encoding="utf-8") == "<html></html>"
