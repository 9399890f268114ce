"""Built-in preview palettes."""

from __future__ import annotations

import re
from dataclasses import dataclass

from PySide6.QtGui import QColor

DEFAULT_THEME_NAME = "Pine Light"
# QColor.darker() factor for alternating table rows.
DARKER_FACTOR = 108

_HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def darker_hex(color_hex: str, factor: int = DARKER_FACTOR) -> str:
    return QColor(color_hex).darker(factor).name()


@dataclass(frozen=True)
class ThemePalette:
    name: str
    background: str
    text: str
    code: str
    syntax: str

    def __post_init__(self) -> None:
        for attr in ("background", "text", "code"):
            value = getattr(self, attr)
            if not isinstance(value, str) or not _HEX_COLOR_PATTERN.match(value):
                raise ValueError(f"{self.name}: {attr} must be a #rgb or #rrggbb color, got {value!r}")

    @property
    def darker_background(self) -> str:
        return darker_hex(self.background)


THEMES: dict[str, ThemePalette] = {
    "Pine Light": ThemePalette(
        name="Pine Light",
        background="#FFFFFF",
        text="#24292E",
        code="#F3F4F4",
        syntax="atelier-dune-light",
    ),
    "Pine Dark": ThemePalette(
        name="Pine Dark",
        background="#1E2227",
        text="#D7DAE0",
        code="#2C313A",
        syntax="tomorrow-night",
    ),
    "Ayu": ThemePalette(
        name="Ayu",
        background="#0F1419",
        text="#E6E1CF",
        code="#191F26",
        syntax="ayu",
    ),
}


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_theme(name: str | None) -> ThemePalette:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    return THEMES.get(name, THEMES[DEFAULT_THEME_NAME])
