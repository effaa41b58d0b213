#!/usr/bin/env python3
# ascii_pixel/bridge.py
"""
Host-bridge entry points.

Plain functions with stable signatures for embedding hosts (web workers,
notebooks, RPC shims). Unlike the core API they never raise for bad input:
empty art, missing arguments and unusable canvas sizes return an error
sentinel string instead. Loosely typed hosts may pass floats for sizes
(64.0) and nulls for optional values; those are coerced, not rejected.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping, Optional, Union

from ascii_pixel.compositor import Layer, merge
from ascii_pixel.grid import PixelGrid
from ascii_pixel.parser import bounds, parse
from ascii_pixel.rendering.svg_mode import RenderConfig, render

__all__ = [
    "EMPTY_ART_ERROR",
    "EMPTY_ART_JSON_ERROR",
    "NO_LAYERS_ERROR",
    "TEXT_REQUIRED_ERROR",
    "LAYERS_REQUIRED_ERROR",
    "INVALID_SIZE_ERROR",
    "text_to_document",
    "text_to_serialized_grid",
    "merge_layers_to_document",
]

DEFAULT_COLOR = "#000000"
DEFAULT_SIZE = 256

EMPTY_ART_ERROR = "Error: Empty ASCII art"
EMPTY_ART_JSON_ERROR = '{"error": "Empty ASCII art"}'
NO_LAYERS_ERROR = "Error: No valid layers"
TEXT_REQUIRED_ERROR = "Error: ASCII text required"
LAYERS_REQUIRED_ERROR = "Error: Layers array required"
INVALID_SIZE_ERROR = "Error: Invalid canvas size"


def _canvas_size(size: Any) -> Optional[int]:
    """Coerce a host-supplied size; None means it cannot be used."""
    if size is None:
        return DEFAULT_SIZE
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        return None
    if not math.isfinite(size):
        return None
    n = int(size)
    return n if n > 0 else None


def _color(color: Any) -> str:
    return color if isinstance(color, str) and color else DEFAULT_COLOR


def _single_layer_grid(text: str, color: str) -> Optional[PixelGrid]:
    width, height = bounds(text)
    if width <= 0 or height <= 0:
        return None
    grid = PixelGrid(width, height)
    grid.fill(parse(text), color)
    return grid


def text_to_document(text: str, color: str = DEFAULT_COLOR, size: Union[int, float] = DEFAULT_SIZE) -> str:
    if not isinstance(text, str):
        return TEXT_REQUIRED_ERROR
    canvas = _canvas_size(size)
    if canvas is None:
        return INVALID_SIZE_ERROR
    grid = _single_layer_grid(text, _color(color))
    if grid is None:
        return EMPTY_ART_ERROR
    return render(grid, RenderConfig.square(canvas))


def text_to_serialized_grid(text: str, color: str = DEFAULT_COLOR) -> str:
    if not isinstance(text, str):
        return TEXT_REQUIRED_ERROR
    grid = _single_layer_grid(text, _color(color))
    if grid is None:
        return EMPTY_ART_JSON_ERROR
    return grid.to_json()


def _z_index(descriptor: Mapping[str, Any], default: int) -> int:
    z = descriptor.get("z_index", descriptor.get("zIndex"))
    if isinstance(z, bool) or not isinstance(z, (int, float)) or not math.isfinite(z):
        return default
    return int(z)


def merge_layers_to_document(
    layer_descriptors: Iterable[Mapping[str, Any]],
    size: Union[int, float] = DEFAULT_SIZE,
    background: Optional[str] = None,
) -> str:
    """
    Composite descriptors of the form {"ascii": str, "color": str, "z_index": int}.

    Entries that are not mappings, or that miss a string "ascii" or "color",
    are skipped. z_index (or zIndex) defaults to the descriptor's position in
    the input. A non-string background is treated as transparent.
    """
    if isinstance(layer_descriptors, (str, bytes, Mapping)) or layer_descriptors is None:
        return LAYERS_REQUIRED_ERROR
    try:
        descriptors = list(layer_descriptors)
    except TypeError:
        return LAYERS_REQUIRED_ERROR
    canvas = _canvas_size(size)
    if canvas is None:
        return INVALID_SIZE_ERROR
    if not isinstance(background, str):
        background = None

    layers: List[Layer] = []
    max_w = 0
    max_h = 0
    for index, d in enumerate(descriptors):
        if not isinstance(d, Mapping):
            continue
        ascii_text = d.get("ascii")
        color = d.get("color")
        if not isinstance(ascii_text, str) or not isinstance(color, str):
            continue
        w, h = bounds(ascii_text)
        max_w = max(max_w, w)
        max_h = max(max_h, h)
        layers.append(Layer(tuple(parse(ascii_text)), color, _z_index(d, index)))

    if max_w <= 0 or max_h <= 0:
        return NO_LAYERS_ERROR

    grid = merge(layers, max_w, max_h)
    return render(grid, RenderConfig.square(canvas, background))
