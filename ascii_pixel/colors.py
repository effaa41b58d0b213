#!/usr/bin/env python3
# ascii_pixel/colors.py
"""
Color helpers backed by Pillow's ImageColor.

Layers carry colors as "#"-prefixed strings. Hex input keeps its case; named
and functional colors (anything ImageColor understands, e.g. "red",
"rgb(255,0,0)") are converted to lowercase "#rrggbb".
"""

from __future__ import annotations

import re
from typing import Tuple

from PIL import ImageColor

__all__ = ["normalize_color", "to_rgb", "to_style", "is_color"]

_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def _hex(rgb: Tuple[int, ...]) -> str:
    return "#" + "".join(f"{c:02x}" for c in rgb)


def normalize_color(value: str) -> str:
    """
    Return a "#"-prefixed color string, or raise ValueError.

    "FF0000" -> "#FF0000", "#abc" -> "#abc", "red" -> "#ff0000".
    """
    if not isinstance(value, str):
        raise ValueError(f"color must be a string, got {value!r}")
    s = value.strip()
    if not s:
        raise ValueError("empty color")
    if s.startswith("#"):
        if not _HEX_RE.match(s[1:]):
            raise ValueError(f"invalid hex color: {value!r}")
        return s
    if _HEX_RE.match(s):
        return "#" + s
    try:
        return _hex(ImageColor.getrgb(s))
    except ValueError:
        raise ValueError(f"unknown color: {value!r}") from None


def is_color(value: str) -> bool:
    try:
        normalize_color(value)
    except ValueError:
        return False
    return True


def to_rgb(value: str) -> Tuple[int, int, int]:
    r, g, b = ImageColor.getrgb(normalize_color(value))[:3]
    return r, g, b


def to_style(value: str) -> str:
    # prompt_toolkit accepts "fg:#RRGGBB"
    try:
        r, g, b = to_rgb(value)
    except ValueError:
        return ""
    return f"fg:#{r:02x}{g:02x}{b:02x}"
