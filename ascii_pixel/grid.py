#!/usr/bin/env python3
# ascii_pixel/grid.py
"""
Dense 2D pixel buffer.

Each cell holds a color string (e.g. "#FF0000") or None for transparent.
Backed by a numpy object array of shape (height, width), indexed [y, x].

Out-of-bounds access is absorbed: reads yield None, writes are dropped.
Nothing here raises for a bad coordinate.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from ascii_pixel.errors import GridDecodeError, InvalidDimension

__all__ = ["PixelGrid", "FilledCell"]

FilledCell = Tuple[int, int, str]         # (x, y, color)


def _check_dimension(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimension(f"grid {name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidDimension(f"grid {name} must be >= 0, got {value}")
    return int(value)


class PixelGrid:
    """Mutable W x H grid of optional colors."""

    __slots__ = ("width", "height", "_cells")

    def __init__(self, width: int, height: int):
        self.width = _check_dimension("width", width)
        self.height = _check_dimension("height", height)
        self._cells = np.full((self.height, self.width), None, dtype=object)

    # --- Cell access

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[str]:
        if not self.in_bounds(x, y):
            return None
        return self._cells[y, x]

    def set(self, x: int, y: int, color: Optional[str]) -> None:
        if not self.in_bounds(x, y):
            return
        self._cells[y, x] = color

    def __getitem__(self, xy: Tuple[int, int]) -> Optional[str]:
        x, y = xy
        return self.get(x, y)

    def __setitem__(self, xy: Tuple[int, int], color: Optional[str]) -> None:
        x, y = xy
        self.set(x, y, color)

    def fill(self, pixels: Iterable[Tuple[int, int]], color: Optional[str]) -> None:
        """Write one color to many coordinates, skipping out-of-bounds ones."""
        for x, y in pixels:
            self.set(x, y, color)

    # --- Enumeration

    def enumerate_filled(self) -> List[FilledCell]:
        """
        Every non-transparent cell as (x, y, color), row-major.

        np.nonzero walks the array in C order, i.e. y ascending then x
        ascending, independent of the order cells were written.
        """
        ys, xs = np.nonzero(np.not_equal(self._cells, None))
        return [(int(x), int(y), self._cells[y, x]) for y, x in zip(ys, xs)]

    @property
    def filled_count(self) -> int:
        return int(np.count_nonzero(np.not_equal(self._cells, None)))

    def rows(self) -> List[List[Optional[str]]]:
        return self._cells.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.rows() == other.rows()
        )

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height}, filled={self.filled_count})"

    # --- Serialization

    def to_dict(self) -> Dict[str, Any]:
        return {"width": self.width, "height": self.height, "pixels": self.rows()}

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    @classmethod
    def from_dict(cls, doc: Any) -> "PixelGrid":
        if not isinstance(doc, dict):
            raise GridDecodeError("grid document must be an object")
        for key in ("width", "height", "pixels"):
            if key not in doc:
                raise GridDecodeError(f"grid document missing '{key}'")
        try:
            grid = cls(doc["width"], doc["height"])
        except InvalidDimension as e:
            raise GridDecodeError(str(e)) from e

        rows = doc["pixels"]
        if not isinstance(rows, list) or len(rows) != grid.height:
            raise GridDecodeError(f"expected {grid.height} pixel rows")
        for y, row in enumerate(rows):
            if not isinstance(row, list) or len(row) != grid.width:
                raise GridDecodeError(f"row {y}: expected {grid.width} cells")
            for x, cell in enumerate(row):
                if cell is not None and not isinstance(cell, str):
                    raise GridDecodeError(f"cell ({x}, {y}): expected color string or null")
                grid._cells[y, x] = cell
        return grid

    @classmethod
    def from_json(cls, text: str) -> "PixelGrid":
        try:
            doc = json.loads(text)
        except ValueError as e:
            raise GridDecodeError(f"invalid JSON: {e}") from e
        return cls.from_dict(doc)
