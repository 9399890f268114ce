"""pinepreview: themed HTML preview documents for an embedded web view."""

from __future__ import annotations

from .assets import AssetCache, AssetText, ThemeCache, load_text
from .config import AppConfig, load_config, save_config
from .document import TextDirection, build_document
from .extensions import discover_extensions
from .preview import PreviewRenderer
from .themes import ThemePalette, get_theme

__all__ = [
    "AppConfig",
    "AssetCache",
    "AssetText",
    "PreviewRenderer",
    "TextDirection",
    "ThemeCache",
    "ThemePalette",
    "build_document",
    "discover_extensions",
    "get_theme",
    "load_config",
    "load_text",
    "save_config",
]
