#!/usr/bin/env python3
# ascii_pixel/rendering/svg_mode.py
"""
SVG renderer.

Maps every filled grid cell to one axis-aligned <rect>, scaled so the whole
grid fills the canvas. An optional background rect is emitted first so cell
colors paint over it.

Numbers: ints print as-is ("256"); floats print their shortest round-trip
digits in fixed notation, always with a fractional part ("100.0", "10.5",
"0.00005").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union
from xml.sax.saxutils import escape

import numpy as np

from ascii_pixel.errors import InvalidDimension
from ascii_pixel.grid import PixelGrid

__all__ = [
    "RenderConfig",
    "DEFAULT_RENDER_CONFIG",
    "SVG_NS",
    "format_number",
    "svg_document",
    "svg_rect",
    "render",
]

SVG_NS = "http://www.w3.org/2000/svg"

Number = Union[int, float]

# attribute values are always double-quoted
_ATTR_ENTITIES = {'"': "&quot;"}


@dataclass(frozen=True)
class RenderConfig:
    """Canvas size in px (independent of grid size) and optional background."""
    canvas_width: int = 256
    canvas_height: int = 256
    background: Optional[str] = None

    def __post_init__(self):
        for name in ("canvas_width", "canvas_height"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
                raise InvalidDimension(f"{name} must be a positive integer, got {v!r}")

    @classmethod
    def square(cls, size: int = 256, background: Optional[str] = None) -> "RenderConfig":
        return cls(size, size, background)


DEFAULT_RENDER_CONFIG = RenderConfig()


def format_number(v: Number) -> str:
    if isinstance(v, int):
        return str(v)
    # shortest round-trip digits, never exponent notation: 5e-05 -> "0.00005"
    return np.format_float_positional(float(v), trim="0")


def svg_document(width: int, height: int, content: str) -> str:
    w, h = format_number(width), format_number(height)
    return (
        f'<svg xmlns="{SVG_NS}" width="{w}" height="{h}" viewBox="0 0 {w} {h}">\n'
        f"{content}\n"
        f"</svg>"
    )


def svg_rect(x: Number, y: Number, width: Number, height: Number, fill: str) -> str:
    return (
        f'<rect x="{format_number(x)}" y="{format_number(y)}" '
        f'width="{format_number(width)}" height="{format_number(height)}" '
        f'fill="{escape(fill, _ATTR_ENTITIES)}"/>'
    )


def render(grid: PixelGrid, config: RenderConfig = DEFAULT_RENDER_CONFIG) -> str:
    """Render grid to a complete SVG document string."""
    if grid.width <= 0 or grid.height <= 0:
        raise InvalidDimension(
            f"cannot render a {grid.width}x{grid.height} grid; both dimensions must be positive"
        )

    cell_w = config.canvas_width / grid.width
    cell_h = config.canvas_height / grid.height

    elements: List[str] = []

    if config.background is not None:
        elements.append(svg_rect(0, 0, config.canvas_width, config.canvas_height, config.background))

    for x, y, color in grid.enumerate_filled():
        elements.append(svg_rect(x * cell_w, y * cell_h, cell_w, cell_h, color))

    return svg_document(config.canvas_width, config.canvas_height, "\n".join(elements))
