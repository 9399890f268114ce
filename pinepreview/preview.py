"""Preview renderer that owns the asset cache and extension list."""

from __future__ import annotations

import logging
from pathlib import Path

from .assets import ThemeCache
from .config import AppConfig
from .document import TextDirection, build_document
from .extensions import discover_extensions, extensions_dir
from .themes import ThemePalette, get_theme

logger = logging.getLogger(__name__)


class PreviewRenderer:
    """Builds preview pages from cached assets and the current appearance.

    ``initialize()`` must run once before the first ``assemble()``. Appearance
    settings are read from ``config`` on every call, so a page never carries a
    theme from an earlier render. After the syntax theme changes, call
    ``reload_syntax_theme()``.
    """

    def __init__(self, config: AppConfig, resources_dir: Path | str | None = None) -> None:
        self.config = config
        self.theme_cache = ThemeCache(
            lambda: self.palette().syntax,
            resources_dir or config.resources.directory,
        )
        self._extension_scripts: list[str] = []

    @property
    def extension_scripts(self) -> list[str]:
        return list(self._extension_scripts)

    def palette(self) -> ThemePalette:
        return get_theme(self.config.appearance.theme)

    def initialize(self) -> None:
        self.theme_cache.initialize()
        self.rescan_extensions()

    def reload_syntax_theme(self) -> None:
        self.theme_cache.reload_syntax_theme()

    def rescan_extensions(self) -> list[str]:
        if not self.config.extensions.enabled:
            logger.debug("extensions disabled in settings")
            self._extension_scripts = []
        else:
            self._extension_scripts = discover_extensions(extensions_dir(self.config.extensions.directory))
        return self.extension_scripts

    def assemble(
        self,
        content: str,
        direction: TextDirection | str | None = TextDirection.NATURAL,
        scroll_offset: int = 0,
    ) -> str:
        return build_document(
            self.theme_cache.assets,
            self.palette(),
            content,
            direction=direction,
            scroll_offset=scroll_offset,
            use_system_appearance=self.config.appearance.use_system_appearance,
            extension_scripts=self._extension_scripts,
        )
