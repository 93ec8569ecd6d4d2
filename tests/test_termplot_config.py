from __future__ import annotations

import unittest
from unittest import mock

from termplot.color import RESET, colorize, escape_for, is_valid_color
from termplot.config import LineStyle, RenderConfig, RenderQuality
from termplot.display import resolve_default_canvas_size


class RenderConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = RenderConfig()
        self.assertEqual((config.width, config.height), (80, 20))
        self.assertFalse(config.use_color)
        self.assertEqual(config.quality.braille_min_width, 100)

    def test_invalid_values_raise(self) -> None:
        with self.assertRaises(ValueError):
            RenderConfig(width=0)
        with self.assertRaises(ValueError):
            RenderConfig(xlim=(5.0, 5.0))
        with self.assertRaises(ValueError):
            RenderConfig(ylim=(0.0, float("inf")))
        with self.assertRaises(ValueError):
            RenderConfig(color="chartreuse-ish")
        with self.assertRaises(ValueError):
            RenderConfig(symbol="**")
        with self.assertRaises(ValueError):
            RenderQuality(braille_min_width=-1)

    def test_with_overrides_returns_new_config(self) -> None:
        base = RenderConfig(title="a")
        changed = base.with_overrides(title="b")
        self.assertEqual(base.title, "a")
        self.assertEqual(changed.title, "b")

    def test_quality_threshold_is_configurable(self) -> None:
        self.assertTrue(RenderQuality().use_subcell(101))
        self.assertFalse(RenderQuality().use_subcell(100))
        self.assertTrue(RenderQuality(braille_min_width=20).use_subcell(40))
        self.assertFalse(RenderQuality(subcell_lines=False).use_subcell(400))

    def test_line_style_presets(self) -> None:
        self.assertFalse(LineStyle.points_only().show_lines)
        self.assertFalse(LineStyle.lines_only().show_points)
        self.assertEqual(LineStyle.ascii().point_char, "o")
        self.assertTrue(LineStyle.unicode_smooth().directional)
        self.assertEqual(LineStyle.dashed().line_char, "╌")


class ColorTests(unittest.TestCase):
    def test_named_and_hex_colors(self) -> None:
        self.assertEqual(escape_for("Red"), "\x1b[31m")
        self.assertEqual(escape_for("#ff8000"), "\x1b[38;2;255;128;0m")
        self.assertTrue(is_valid_color("00ff00"))
        self.assertFalse(is_valid_color("#12345"))
        with self.assertRaises(ValueError):
            escape_for("nope")

    def test_colorize(self) -> None:
        self.assertEqual(colorize("x", "green"), f"\x1b[32mx{RESET}")
        self.assertEqual(colorize("x", None), "x")
        self.assertTrue(colorize("x", None, bold=True).startswith("\x1b[1m"))


class DisplayTests(unittest.TestCase):
    def test_small_terminal_is_clamped_to_minimum(self) -> None:
        with mock.patch("termplot.display._detect_terminal_size", return_value=(20, 8)):
            self.assertEqual(resolve_default_canvas_size(), (40, 12))

    def test_invalid_arguments(self) -> None:
        with self.assertRaises(ValueError):
            resolve_default_canvas_size(min_width=0)


if __name__ == "__main__":
    unittest.main()
