from __future__ import annotations

import unittest

from termplot.raster.canvas import CharacterBuffer
from termplot.raster.draw_lines import (
    BrailleGrid,
    bresenham_line,
    draw_polyline,
    draw_subcell_polyline,
    merge_braille,
    smooth_line,
)
from termplot.raster.draw_text import center_text, draw_text, text_width
from termplot.raster.layers import LayeredCanvas, RenderPriority
from termplot.scales import ScreenPoint


class CharacterBufferTests(unittest.TestCase):
    def test_out_of_bounds_writes_are_ignored(self) -> None:
        buf = CharacterBuffer(4, 2)
        buf.put(-1, 0, "x")
        buf.put(0, -1, "x")
        buf.put(4, 0, "x")
        buf.put(0, 2, "x")
        self.assertEqual(buf.to_string(), "\n\n")
        self.assertIsNone(buf.get(10, 10))

    def test_rows_trim_trailing_whitespace_only(self) -> None:
        buf = CharacterBuffer(6, 2)
        buf.put(1, 0, "a")
        buf.put(3, 0, "b")
        self.assertEqual(buf.to_string(), " a b\n\n")

    def test_fill_rect_clips_to_buffer(self) -> None:
        buf = CharacterBuffer(3, 3)
        buf.fill_rect(-2, 1, 10, 5, "#")
        self.assertEqual(buf.rows(), ["", "###", "###"])

    def test_colorizer_wraps_colored_runs(self) -> None:
        buf = CharacterBuffer(4, 1)
        draw_text(buf, 0, 0, "ab", "red")
        buf.put(2, 0, "c")
        out = buf.rows(lambda text, color: f"<{color}:{text}>")
        self.assertEqual(out, ["<red:ab>c"])

    def test_wide_text_advances_two_columns(self) -> None:
        buf = CharacterBuffer(8, 1)
        end = draw_text(buf, 0, 0, "日x")
        self.assertEqual(end, 3)
        self.assertEqual(buf.rows(), ["日x"])
        self.assertEqual(text_width("日本"), 4)
        self.assertEqual(center_text("ab", 6), "  ab")


class LayeredCanvasTests(unittest.TestCase):
    def test_higher_priority_wins_regardless_of_draw_order(self) -> None:
        canvas = LayeredCanvas(5, 5)
        canvas.layer(RenderPriority(4)).put(2, 2, "B")
        canvas.layer(RenderPriority(2)).put(2, 2, "A")
        self.assertEqual(canvas.flatten().get(2, 2), "B")

    def test_color_travels_with_character(self) -> None:
        canvas = LayeredCanvas(3, 1)
        canvas.layer(RenderPriority.AXES).put(0, 0, "A", "red")
        canvas.layer(RenderPriority.LABELS).put(0, 0, "L", None)
        canvas.layer(RenderPriority.LINES).put(1, 0, "x", "blue")
        flat = canvas.flatten()
        self.assertEqual(flat.get(0, 0), "L")
        self.assertIsNone(flat.color_at(0, 0))
        self.assertEqual(flat.color_at(1, 0), "blue")

    def test_untouched_cells_remain_blank(self) -> None:
        canvas = LayeredCanvas(3, 2)
        self.assertFalse(canvas.has_layer(RenderPriority.POINTS))
        self.assertEqual(canvas.flatten().to_string(), "\n\n")

    def test_layers_are_created_lazily(self) -> None:
        canvas = LayeredCanvas(3, 2)
        first = canvas.layer(RenderPriority.LINES)
        self.assertIs(canvas.layer(RenderPriority.LINES), first)
        self.assertTrue(canvas.has_layer(3))


class LineRasterTests(unittest.TestCase):
    def test_bresenham_includes_endpoints_and_has_expected_length(self) -> None:
        cases = [((0, 0), (5, 0)), ((0, 0), (0, 4)), ((0, 0), (3, 3)), ((7, 3), (0, 0)), ((2, 9), (4, 1))]
        for (c0, r0), (c1, r1) in cases:
            start, end = ScreenPoint(c0, r0), ScreenPoint(c1, r1)
            cells = bresenham_line(start, end)
            self.assertEqual(cells[0], start)
            self.assertEqual(cells[-1], end)
            self.assertEqual(len(cells), max(abs(c1 - c0), abs(r1 - r0)) + 1)

    def test_identical_endpoints_yield_single_cell(self) -> None:
        p = ScreenPoint(3, 3)
        self.assertEqual(bresenham_line(p, p), [p])

    def test_smooth_line_picks_direction_glyphs(self) -> None:
        horizontal = smooth_line(ScreenPoint(0, 0), ScreenPoint(4, 0))
        self.assertEqual({glyph for _, glyph in horizontal}, {"─"})
        vertical = smooth_line(ScreenPoint(0, 0), ScreenPoint(0, 3))
        self.assertEqual({glyph for _, glyph in vertical}, {"│"})
        falling = smooth_line(ScreenPoint(0, 0), ScreenPoint(3, 3))
        self.assertEqual({glyph for _, glyph in falling}, {"╲"})
        rising = smooth_line(ScreenPoint(0, 3), ScreenPoint(3, 0))
        self.assertEqual({glyph for _, glyph in rising}, {"╱"})

    def test_polyline_never_overwrites_skipped_cells(self) -> None:
        buf = CharacterBuffer(6, 1)
        start, end = ScreenPoint(0, 0), ScreenPoint(5, 0)
        draw_polyline(buf, [start, end], "·", skip={start, end})
        self.assertEqual(buf.rows(), [" ····"])

    def test_braille_dots_map_to_codepoints(self) -> None:
        grid = BrailleGrid(1, 1)
        grid.set_dot(0, 0)
        self.assertEqual(grid.cells()[0][1], "⠁")
        for x in range(2):
            for y in range(4):
                grid.set_dot(x, y)
        self.assertEqual(grid.cells()[0][1], "⣿")

    def test_subcell_polyline_writes_braille_only(self) -> None:
        buf = CharacterBuffer(10, 4)
        draw_subcell_polyline(buf, [(0.0, 3.0), (9.0, 0.0)])
        chars = {c for row in buf.rows() for c in row if c != " "}
        self.assertTrue(chars)
        self.assertTrue(all(0x2800 <= ord(c) <= 0x28FF for c in chars))

    def test_overlapping_subcell_polylines_combine_dots(self) -> None:
        buf = CharacterBuffer(10, 2)
        draw_subcell_polyline(buf, [(0.0, 0.0), (9.0, 0.0)])
        self.assertEqual(buf.get(4, 0), "⠤")
        draw_subcell_polyline(buf, [(0.0, 0.4), (9.0, 0.4)])
        self.assertEqual(buf.get(4, 0), "⣤")

    def test_braille_merge_replaces_other_glyphs(self) -> None:
        self.assertEqual(merge_braille("⠁", "⠈"), "⠉")
        self.assertEqual(merge_braille("●", "⠈"), "⠈")
        self.assertEqual(merge_braille(None, "⠈"), "⠈")


if __name__ == "__main__":
    unittest.main()
