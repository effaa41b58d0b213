#!/usr/bin/env python3
# ascii_pixel/compositor.py
"""
Layer compositing engine for ascii-pixel.

Merges independently parsed layers into a single PixelGrid using the
painter's algorithm: layers are stably sorted by z_index (ascending) and
painted in that order, so higher z wins and, for equal z, the layer that
came later in the input wins.

Integrates with parser.parse / parser.bounds and sources.SourceLoader.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from ascii_pixel.grid import PixelGrid
from ascii_pixel.layer_spec import LayerSpec
from ascii_pixel.parser import DEFAULT_FILL_CHARS, Coord, bounds, parse
from ascii_pixel.sources import SourceLoader

__all__ = ["Layer", "LoadedLayers", "merge", "combined_bounds", "load_layers"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Layer:
    """One color's worth of pixels. Lower z_index sits further back."""
    pixels: Tuple[Coord, ...]
    color: str
    z_index: int = 0

    def __post_init__(self):
        # Accept any iterable of pairs; store an immutable tuple of int pairs.
        object.__setattr__(self, "pixels", tuple((int(x), int(y)) for x, y in self.pixels))


@dataclass(frozen=True)
class LoadedLayers:
    layers: List[Layer] = field(default_factory=list)
    texts: List[str] = field(default_factory=list)
    strip_carriage_returns: bool = False

    def bounds(self) -> Tuple[int, int]:
        return combined_bounds(self.texts, self.strip_carriage_returns)


def merge(layers: Sequence[Layer], width: int, height: int) -> PixelGrid:
    """
    Composite layers into a width x height grid.

    Coordinates outside [0, width) x [0, height) are dropped silently.
    An empty layer list yields a fully transparent grid.
    """
    grid = PixelGrid(width, height)

    # sorted() is stable: equal z keeps input order, later layer paints last.
    ordered = sorted(layers, key=lambda layer: layer.z_index)

    dropped = 0
    for layer in ordered:
        for x, y in layer.pixels:
            if 0 <= x < width and 0 <= y < height:
                grid.set(x, y, layer.color)
            else:
                dropped += 1

    if dropped:
        log.debug("merge: dropped %d out-of-bounds pixel(s)", dropped)
    log.debug("merge: %d layer(s) -> %dx%d grid, %d filled",
              len(ordered), width, height, grid.filled_count)
    return grid


def combined_bounds(
    sources: Iterable[str],
    strip_carriage_returns: bool = False,
) -> Tuple[int, int]:
    """Smallest (width, height) that holds every source without clipping."""
    max_w = 0
    max_h = 0
    for text in sources:
        w, h = bounds(text, strip_carriage_returns)
        max_w = max(max_w, w)
        max_h = max(max_h, h)
    return max_w, max_h


def load_layers(
    specs: Sequence[LayerSpec],
    loader: Optional[SourceLoader] = None,
    fill_chars: Iterable[str] = DEFAULT_FILL_CHARS,
    strip_carriage_returns: bool = False,
) -> LoadedLayers:
    """
    Read and parse every layer source, preserving input order.

    Raises SourceUnavailable on the first source that cannot be read; no
    partially loaded result is returned.
    """
    loader = loader or SourceLoader()
    fills = frozenset(fill_chars)
    layers: List[Layer] = []
    texts: List[str] = []
    for spec in specs:
        text = loader.read(spec.path)
        pixels = parse(text, fills, strip_carriage_returns)
        log.debug("layer %s: %d pixel(s), color=%s z=%d",
                  spec.path, len(pixels), spec.color, spec.z_index)
        layers.append(Layer(tuple(pixels), spec.color, spec.z_index))
        texts.append(text)
    return LoadedLayers(layers, texts, strip_carriage_returns)
