#!/usr/bin/env python3
import re
import xml.etree.ElementTree as ET

import pytest

from ascii_pixel.errors import InvalidDimension
from ascii_pixel.grid import PixelGrid
from ascii_pixel.rendering.svg_mode import (
    DEFAULT_RENDER_CONFIG,
    SVG_NS,
    RenderConfig,
    format_number,
    render,
    svg_document,
    svg_rect,
)

NS = {"svg": SVG_NS}


def _rects(svg: str):
    root = ET.fromstring(svg)
    return root.findall("svg:rect", NS)


class TestRenderConfig:
    def test_defaults(self) -> None:
        assert DEFAULT_RENDER_CONFIG == RenderConfig(256, 256, None)

    def test_square(self) -> None:
        cfg = RenderConfig.square(512, "#FFFFFF")
        assert (cfg.canvas_width, cfg.canvas_height, cfg.background) == (512, 512, "#FFFFFF")

    @pytest.mark.parametrize("w,h", [(0, 10), (10, 0), (-5, 10), (10.5, 10)])
    def test_rejects_bad_canvas(self, w, h) -> None:
        with pytest.raises(InvalidDimension):
            RenderConfig(w, h)


class TestBuilders:
    def test_format_number(self) -> None:
        assert format_number(256) == "256"
        assert format_number(100.0) == "100.0"
        assert format_number(10.5) == "10.5"
        assert format_number(256 / 3) == "85.33333333333333"

    @pytest.mark.parametrize("v,expected", [(5e-05, "0.00005"), (1e-07, "0.0000001"), (1e22, "10000000000000000000000.0")])
    def test_format_number_never_uses_exponent(self, v: float, expected: str) -> None:
        assert format_number(v) == expected

    def test_document(self) -> None:
        svg = svg_document(100, 200, "<rect/>")
        assert 'xmlns="http://www.w3.org/2000/svg"' in svg
        assert 'width="100"' in svg
        assert 'height="200"' in svg
        assert 'viewBox="0 0 100 200"' in svg
        assert "<rect/>" in svg
        assert svg.endswith("</svg>")

    def test_rect(self) -> None:
        rect = svg_rect(10.5, 20.5, 30.0, 40.0, "#FF0000")
        assert rect == '<rect x="10.5" y="20.5" width="30.0" height="40.0" fill="#FF0000"/>'

    def test_rect_escapes_fill(self) -> None:
        rect = svg_rect(0, 0, 1, 1, 'a"<b')
        assert 'fill="a&quot;&lt;b"' in rect

    def test_rect_fill_always_double_quoted(self) -> None:
        rect = svg_rect(0, 0, 1, 1, 'say "hi" & <go>')
        assert rect.endswith('fill="say &quot;hi&quot; &amp; &lt;go&gt;"/>')
        assert ET.fromstring(f'<svg xmlns="{SVG_NS}">{rect}</svg>')[0].get("fill") == 'say "hi" & <go>'


class TestRender:
    def test_valid_svg(self) -> None:
        grid = PixelGrid(2, 2)
        grid[0, 0] = "#FF0000"
        svg = render(grid, RenderConfig(100, 100))
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        rects = _rects(svg)
        assert len(rects) == 1
        assert rects[0].attrib == {"x": "0.0", "y": "0.0", "width": "50.0", "height": "50.0", "fill": "#FF0000"}

    def test_cell_size_from_scale(self) -> None:
        grid = PixelGrid(4, 2)
        grid[3, 1] = "#00FF00"
        rects = _rects(render(grid, RenderConfig(400, 200)))
        assert rects[0].get("width") == "100.0"
        assert rects[0].get("height") == "100.0"
        assert rects[0].get("x") == "300.0"
        assert rects[0].get("y") == "100.0"

    def test_non_integer_scale(self) -> None:
        grid = PixelGrid(3, 3)
        grid[1, 1] = "#000"
        rect = _rects(render(grid, RenderConfig(100, 100)))[0]
        assert rect.get("width") == "33.333333333333336"
        assert "." in rect.get("x")

    def test_background_first(self) -> None:
        grid = PixelGrid(2, 2)
        grid[0, 0] = "#FF0000"
        svg = render(grid, RenderConfig(100, 100, "#000000"))
        rects = _rects(svg)
        assert len(rects) == 2
        assert rects[0].attrib == {"x": "0", "y": "0", "width": "100", "height": "100", "fill": "#000000"}
        assert rects[1].get("fill") == "#FF0000"

    def test_empty_grid(self) -> None:
        svg = render(PixelGrid(5, 5))
        assert _rects(svg) == []
        assert 'width="256"' in svg and 'viewBox="0 0 256 256"' in svg

    def test_empty_grid_with_background(self) -> None:
        rects = _rects(render(PixelGrid(5, 5), RenderConfig(10, 10, "#123456")))
        assert [r.get("fill") for r in rects] == ["#123456"]

    def test_row_major_rect_order(self) -> None:
        grid = PixelGrid(2, 2)
        grid[1, 1] = "#D"
        grid[0, 1] = "#C"
        grid[1, 0] = "#B"
        grid[0, 0] = "#A"
        fills = [r.get("fill") for r in _rects(render(grid, RenderConfig(2, 2)))]
        assert fills == ["#A", "#B", "#C", "#D"]

    def test_non_square_canvas_envelope(self) -> None:
        svg = render(PixelGrid(1, 1), RenderConfig(640, 480))
        root = ET.fromstring(svg)
        assert root.get("width") == "640"
        assert root.get("height") == "480"
        assert root.get("viewBox") == "0 0 640 480"

    @pytest.mark.parametrize("w,h", [(0, 0), (0, 3), (3, 0)])
    def test_zero_dimension_grid_rejected(self, w: int, h: int) -> None:
        with pytest.raises(InvalidDimension):
            render(PixelGrid(w, h))

    def test_one_rect_per_line(self) -> None:
        grid = PixelGrid(2, 1)
        grid.fill([(0, 0), (1, 0)], "#FFF")
        lines = render(grid, RenderConfig(2, 1)).splitlines()
        assert len(lines) == 4
        assert all(re.match(r"^<rect .*/>$", line) for line in lines[1:3])

    def test_tiny_cells_keep_fixed_notation(self) -> None:
        grid = PixelGrid(100000, 1)
        grid[1, 0] = "#000"
        grid[99999, 0] = "#000"
        rects = _rects(render(grid, RenderConfig(1, 1)))
        assert rects[0].get("x") == "0.00001"
        assert rects[0].get("width") == "0.00001"
        assert all("e" not in r.get(attr) for r in rects for attr in ("x", "y", "width", "height"))
