#!/usr/bin/env python3
# ascii_pixel/rendering/ascii_mode.py
"""
Terminal preview backend.
Turns a PixelGrid into prompt_toolkit formatted-text rows, one glyph per cell,
colored with "fg:#RRGGBB" styles. Adjacent cells with the same style are
merged into a single run.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText

from ascii_pixel.colors import to_style
from ascii_pixel.grid import PixelGrid

StyleRun = Tuple[str, str]                # (style, text)
LineFrag = List[StyleRun]                 # one terminal row as runs
FrameFrag = List[LineFrag]                # full grid as rows

__all__ = ["grid_to_fragments", "to_formatted_text", "print_preview"]

DEFAULT_GLYPH = "█"


def grid_to_fragments(grid: PixelGrid, glyph: str = DEFAULT_GLYPH, empty: str = " ") -> FrameFrag:
    styles: Dict[str, str] = {}
    frame: FrameFrag = []
    for row in grid.rows():
        line: LineFrag = []
        run_style: Optional[str] = None
        run_text: List[str] = []
        for color in row:
            if color is None:
                style, ch = "", empty
            else:
                if color not in styles:
                    styles[color] = to_style(color)
                style, ch = styles[color], glyph
            if style != run_style and run_text:
                line.append((run_style, "".join(run_text)))
                run_text = []
            run_style = style
            run_text.append(ch)
        if run_text:
            line.append((run_style, "".join(run_text)))
        frame.append(line if line else [("", "")])
    return frame


def to_formatted_text(frame: FrameFrag) -> FormattedText:
    runs: List[StyleRun] = []
    for line in frame:
        runs.extend(line)
        runs.append(("", "\n"))
    return FormattedText(runs)


def print_preview(grid: PixelGrid, glyph: str = DEFAULT_GLYPH, **kwargs) -> None:
    """Print the grid to the terminal. Extra kwargs go to print_formatted_text."""
    print_formatted_text(to_formatted_text(grid_to_fragments(grid, glyph)), end="", **kwargs)
