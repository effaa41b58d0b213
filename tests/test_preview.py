#!/usr/bin/env python3
from prompt_toolkit.formatted_text import FormattedText

from ascii_pixel.grid import PixelGrid
from ascii_pixel.rendering.ascii_mode import grid_to_fragments, to_formatted_text


class TestFragments:
    def test_runs_are_merged(self) -> None:
        grid = PixelGrid(4, 1)
        grid.fill([(0, 0), (1, 0)], "#FF0000")
        grid[3, 0] = "#00ff00"
        assert grid_to_fragments(grid, glyph="#") == [
            [("fg:#ff0000", "##"), ("", " "), ("fg:#00ff00", "#")]
        ]

    def test_named_and_short_hex_colors(self) -> None:
        grid = PixelGrid(2, 1)
        grid[0, 0] = "#f00"
        grid[1, 0] = "blue"
        frame = grid_to_fragments(grid, glyph="@")
        assert frame == [[("fg:#ff0000", "@"), ("fg:#0000ff", "@")]]

    def test_unknown_color_has_no_style(self) -> None:
        grid = PixelGrid(1, 1)
        grid[0, 0] = "#nothex"
        assert grid_to_fragments(grid, glyph="@") == [[("", "@")]]

    def test_one_line_per_row(self) -> None:
        frame = grid_to_fragments(PixelGrid(3, 2))
        assert frame == [[("", "   ")], [("", "   ")]]

    def test_formatted_text_newlines(self) -> None:
        grid = PixelGrid(1, 2)
        grid[0, 1] = "#000000"
        ft = to_formatted_text(grid_to_fragments(grid, glyph="X"))
        assert isinstance(ft, FormattedText)
        assert "".join(text for _, text in ft) == " \nX\n"
