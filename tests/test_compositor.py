#!/usr/bin/env python3
import pytest

from ascii_pixel.compositor import Layer, combined_bounds, load_layers, merge
from ascii_pixel.errors import SourceUnavailable
from ascii_pixel.layer_spec import LayerSpec
from ascii_pixel.sources import SourceLoader

RED = "#FF0000"
GREEN = "#00FF00"
BLUE = "#0000FF"


class TestLayer:
    def test_default_z_index(self) -> None:
        assert Layer([(0, 0)], RED).z_index == 0

    def test_pixels_are_immutable_tuple(self) -> None:
        src = [(0, 0), (1, 2)]
        layer = Layer(src, RED, 3)
        src.append((5, 5))
        assert layer.pixels == ((0, 0), (1, 2))

    def test_frozen(self) -> None:
        layer = Layer([(0, 0)], RED)
        with pytest.raises(AttributeError):
            layer.color = GREEN  # type: ignore[misc]


class TestMerge:
    def test_higher_z_wins(self) -> None:
        low = Layer([(0, 0)], RED, 0)
        high = Layer([(0, 0)], GREEN, 1)
        assert merge([low, high], 2, 2).get(0, 0) == GREEN
        assert merge([high, low], 2, 2).get(0, 0) == GREEN

    def test_equal_z_later_layer_wins(self) -> None:
        first = Layer([(0, 0)], RED, 0)
        second = Layer([(0, 0)], GREEN, 0)
        assert merge([first, second], 2, 2).get(0, 0) == GREEN
        assert merge([second, first], 2, 2).get(0, 0) == RED

    def test_stable_among_many_equal_keys(self) -> None:
        layers = [Layer([(0, 0)], f"#00000{i}", 5) for i in range(6)]
        layers.insert(2, Layer([(0, 0)], BLUE, 4))
        assert merge(layers, 1, 1).get(0, 0) == "#000005"

    def test_negative_and_huge_z(self) -> None:
        layers = [
            Layer([(0, 0)], RED, 10 ** 30),
            Layer([(0, 0)], GREEN, -(10 ** 30)),
            Layer([(0, 0)], BLUE, -1),
        ]
        assert merge(layers, 1, 1).get(0, 0) == RED

    def test_non_overlapping(self) -> None:
        grid = merge([Layer([(0, 0)], RED, 0), Layer([(1, 1)], GREEN, 1)], 2, 2)
        assert grid.get(0, 0) == RED
        assert grid.get(1, 1) == GREEN

    def test_empty_layers(self) -> None:
        grid = merge([], 5, 5)
        assert (grid.width, grid.height) == (5, 5)
        assert grid.enumerate_filled() == []

    def test_out_of_bounds_dropped(self) -> None:
        layer = Layer([(10, 10), (0, 0), (-1, 0), (0, -1), (5, 4)], RED)
        grid = merge([layer], 5, 5)
        assert grid.enumerate_filled() == [(0, 0, RED)]

    def test_lower_layer_shows_through_gaps(self) -> None:
        back = Layer([(0, 0), (1, 0)], RED, 0)
        front = Layer([(1, 0)], GREEN, 1)
        grid = merge([front, back], 2, 1)
        assert grid.enumerate_filled() == [(0, 0, RED), (1, 0, GREEN)]


class TestCombinedBounds:
    def test_max_of_each_axis(self) -> None:
        assert combined_bounds(["##\n##", ".##.\n.##."]) == (4, 2)

    def test_not_a_union_of_rectangles(self) -> None:
        assert combined_bounds(["####", "#\n#\n#"]) == (4, 3)

    def test_no_sources(self) -> None:
        assert combined_bounds([]) == (0, 0)


class TestLoadLayers:
    def test_reads_in_order(self, tmp_path) -> None:
        a = tmp_path / "a.txt"
        b = tmp_path / "b.txt"
        a.write_text("##\n##", encoding="utf-8")
        b.write_text(".##.\n.##.", encoding="utf-8")
        specs = [LayerSpec(str(a), RED, 1), LayerSpec(str(b), GREEN, 0)]

        loaded = load_layers(specs, SourceLoader())

        assert [layer.color for layer in loaded.layers] == [RED, GREEN]
        assert loaded.layers[0].z_index == 1
        assert loaded.layers[1].pixels == ((1, 0), (2, 0), (1, 1), (2, 1))
        assert loaded.bounds() == (4, 2)

    def test_fill_chars_and_strip_cr(self, tmp_path) -> None:
        f = tmp_path / "crlf.txt"
        f.write_bytes(b"o.\r\n.o\r\n")
        loaded = load_layers([LayerSpec(str(f), RED, 0)], SourceLoader(),
                             fill_chars="o", strip_carriage_returns=True)
        assert loaded.layers[0].pixels == ((0, 0), (1, 1))
        assert loaded.bounds() == (2, 3)

    def test_missing_source(self, tmp_path) -> None:
        specs = [LayerSpec(str(tmp_path / "nope.txt"), RED, 0)]
        with pytest.raises(SourceUnavailable):
            load_layers(specs, SourceLoader())
