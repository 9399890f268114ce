import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from pinepreview.themes import DEFAULT_THEME_NAME, ThemePalette, darker_hex, get_theme, list_themes


def _channels(color_hex: str) -> tuple[int, int, int]:
    value = color_hex.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


class ThemeTests(unittest.TestCase):
    def test_darker_background_is_deterministic_and_darker(self):
        palette = ThemePalette("Paper", "#F0E8D8", "#333333", "#E0D8C8", "atelier-dune-light")
        first = palette.darker_background
        self.assertEqual(first, palette.darker_background)
        self.assertEqual(first, darker_hex("#F0E8D8"))
        self.assertNotEqual(first.lower(), "#f0e8d8")
        for darker, original in zip(_channels(first), _channels("#F0E8D8")):
            self.assertLessEqual(darker, original)

    def test_invalid_colors_are_rejected(self):
        with self.assertRaises(ValueError):
            ThemePalette("Broken", "white", "#000000", "#eeeeee", "ayu")
        with self.assertRaises(ValueError):
            ThemePalette("Broken", "#ffffff", "#00000", "#eeeeee", "ayu")

    def test_short_hex_is_accepted(self):
        palette = ThemePalette("Short", "#fff", "#000", "#eee", "ayu")
        self.assertEqual(palette.background, "#fff")
        self.assertEqual(len(palette.darker_background), 7)

    def test_lookup_falls_back_to_default(self):
        self.assertEqual(get_theme(None).name, DEFAULT_THEME_NAME)
        self.assertEqual(get_theme("Nope").name, DEFAULT_THEME_NAME)
        self.assertEqual(get_theme("Pine Dark").syntax, "tomorrow-night")
        self.assertEqual(list_themes(), sorted(list_themes()))
        self.assertIn("Ayu", list_themes())


if __name__ == "__main__":
    unittest.main()
