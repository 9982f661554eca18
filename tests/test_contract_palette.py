from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from branchborder.palette import (
    DEFAULT_COLORS,
    PRIMARY_COLORS_KEY,
    env_primary_colors,
    palette_from_settings,
    parse_color_list,
    resolve_palette,
)


class TestPaletteContract(unittest.TestCase):
    def test_default_palette_has_eleven_fixed_swatches(self) -> None:
        self.assertEqual(len(DEFAULT_COLORS), 11)
        self.assertEqual(DEFAULT_COLORS[0], "#E53935")
        self.assertEqual(DEFAULT_COLORS[-1], "#F4511E")

    def test_missing_override_uses_default(self) -> None:
        self.assertEqual(resolve_palette(None), list(DEFAULT_COLORS))
        self.assertEqual(resolve_palette("#AAAAAA"), list(DEFAULT_COLORS))
        self.assertEqual(resolve_palette({"a": "#AAAAAA"}), list(DEFAULT_COLORS))

    def test_override_is_filtered_and_keeps_order(self) -> None:
        got = resolve_palette(["#BBBBBB", "", "   ", 7, None, "#AAAAAA"])
        self.assertEqual(got, ["#BBBBBB", "#AAAAAA"])

    def test_override_empty_after_filtering_falls_back(self) -> None:
        self.assertEqual(resolve_palette(["", 3, "  "]), list(DEFAULT_COLORS))
        self.assertEqual(resolve_palette([]), list(DEFAULT_COLORS))

    def test_settings_key_is_read(self) -> None:
        doc = {PRIMARY_COLORS_KEY: ["#123456"]}
        self.assertEqual(palette_from_settings(doc), ["#123456"])
        self.assertEqual(palette_from_settings(doc, ["#ABCDEF"]), ["#ABCDEF"])
        self.assertEqual(palette_from_settings(None), list(DEFAULT_COLORS))

    def test_comma_list_parsing(self) -> None:
        self.assertEqual(parse_color_list(" #A00 , ,#0A0 "), ["#A00", "#0A0"])
        self.assertIsNone(parse_color_list(" , "))
        self.assertIsNone(parse_color_list(None))

    def test_env_override(self) -> None:
        with patch.dict(os.environ, {"BRANCHBORDER_PRIMARY_COLORS": "#111111,#222222"}):
            self.assertEqual(env_primary_colors(), ["#111111", "#222222"])
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(env_primary_colors())


if __name__ == "__main__":
    unittest.main(verbosity=2)
