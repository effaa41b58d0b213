#!/usr/bin/env python3
# ascii_pixel/parser.py
"""
ASCII art text -> pixel coordinates.

Rows are split on line-feed only. Each row is scanned one code point at a
time; a cell is filled iff its character is in the fill set. Everything else
(spaces, dots, tabs, emoji, combining marks) is transparent.

Carriage returns are kept by default, so CRLF input carries a trailing "\\r"
on every row which counts toward width but never fills a cell. Pass
strip_carriage_returns=True to drop a single trailing "\\r" per row.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Tuple

__all__ = [
    "DEFAULT_FILL_CHARS",
    "Coord",
    "split_rows",
    "parse",
    "bounds",
]

Coord = Tuple[int, int]                   # (x, y) == (column, row)

DEFAULT_FILL_CHARS: FrozenSet[str] = frozenset("#*X@O")


def split_rows(text: str, strip_carriage_returns: bool = False) -> List[str]:
    """Split on "\\n", keeping empty leading/trailing/inner rows."""
    rows = text.split("\n")
    if strip_carriage_returns:
        rows = [r[:-1] if r.endswith("\r") else r for r in rows]
    return rows


def parse(
    text: str,
    fill_chars: Iterable[str] = DEFAULT_FILL_CHARS,
    strip_carriage_returns: bool = False,
) -> List[Coord]:
    """
    Return filled coordinates in row-major order (top-to-bottom, left-to-right).

    The ordering matters: the compositor relies on it being deterministic.
    """
    fills = fill_chars if isinstance(fill_chars, (set, frozenset)) else frozenset(fill_chars)
    pixels: List[Coord] = []
    for y, row in enumerate(split_rows(text, strip_carriage_returns)):
        for x, ch in enumerate(row):
            if ch in fills:
                pixels.append((x, y))
    return pixels


def bounds(text: str, strip_carriage_returns: bool = False) -> Tuple[int, int]:
    """Return (width, height) in character cells; descriptive only."""
    rows = split_rows(text, strip_carriage_returns)
    height = len(rows)
    width = max((len(r) for r in rows), default=0)
    return width, height
