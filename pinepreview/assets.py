"""Bundled resource loading and the process-wide preview asset cache."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path, PurePosixPath
from typing import Callable

logger = logging.getLogger(__name__)

RESOURCES_DIR_ENV = "PINEPREVIEW_RESOURCES_DIR"
BASE_STYLESHEET = ("Markdown", "css")
ENGINE_SCRIPT = ("highlight-js/highlight", "js")
SYNTAX_STYLES_PREFIX = "highlight-js/styles"

STATE_UNINITIALIZED = "uninitialized"
STATE_LOADED = "loaded"


@dataclass(frozen=True)
class AssetText:
    """Outcome of reading one bundled resource."""

    name: str
    text: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None

    def or_empty(self) -> str:
        return self.text if self.text is not None else ""


@dataclass(frozen=True)
class AssetCache:
    base_stylesheet: str = ""
    syntax_theme_stylesheet: str = ""
    engine_script: str = ""


def resources_dir(explicit: Path | str | None = None) -> Path:
    """Resolve the bundled resource root from argument, env, or package data."""
    if explicit:
        return Path(explicit).expanduser()
    env_value = os.environ.get(RESOURCES_DIR_ENV, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    return Path(__file__).resolve().parent / "resources"


def syntax_stylesheet_name(syntax: str) -> str:
    return f"{SYNTAX_STYLES_PREFIX}/{syntax}"


def load_text(resource_name: str, resource_type: str, root: Path | str | None = None) -> AssetText:
    """Read a bundled resource as UTF-8, reporting failure instead of raising."""
    label = f"{resource_name}.{resource_type}"
    base = resources_dir(root)
    # Resource names come from theme settings; keep lookups inside the root.
    # Checked on the name, so symlinked resources inside the root still load.
    name_path = PurePosixPath(label)
    if name_path.is_absolute() or ".." in name_path.parts:
        return AssetText(label, error=f"resource path escapes {base}")
    candidate = base / label
    if not candidate.is_file():
        return AssetText(label, error=f"resource not found: {candidate}")
    try:
        return AssetText(label, text=candidate.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        return AssetText(label, error=f"unreadable resource {candidate}: {exc}")


class ThemeCache:
    """Holds stylesheet and highlighter text loaded once and reused per render.

    The cache starts ``uninitialized`` and moves to ``loaded`` on the first
    ``initialize()``. Only the syntax-theme stylesheet depends on the active
    theme, so ``reload_syntax_theme()`` refreshes that one asset and leaves the
    base stylesheet and engine script alone. A resource that fails to load is
    cached as an empty string; the cache object is swapped as a whole on every
    change.
    """

    def __init__(self, syntax_source: Callable[[], str], resources_dir: Path | str | None = None) -> None:
        self._syntax_source = syntax_source
        self._resources_dir = resources_dir
        self._assets = AssetCache()
        self._state = STATE_UNINITIALIZED

    @property
    def state(self) -> str:
        return self._state

    @property
    def assets(self) -> AssetCache:
        return self._assets

    def initialize(self) -> AssetCache:
        if self._state == STATE_LOADED:
            logger.debug("theme cache already loaded; skipping initialize")
            return self._assets

        base = self._load(*BASE_STYLESHEET)
        engine = self._load(*ENGINE_SCRIPT)
        syntax = self._load_syntax()
        self._assets = AssetCache(
            base_stylesheet=base.or_empty(),
            syntax_theme_stylesheet=syntax.or_empty(),
            engine_script=engine.or_empty(),
        )
        self._state = STATE_LOADED
        logger.info(
            "preview assets loaded (base=%s, engine=%s, syntax=%s)",
            base.ok,
            engine.ok,
            syntax.ok,
        )
        return self._assets

    def reload_syntax_theme(self) -> None:
        syntax = self._load_syntax()
        self._assets = replace(self._assets, syntax_theme_stylesheet=syntax.or_empty())

    def _load_syntax(self) -> AssetText:
        syntax = (self._syntax_source() or "").strip()
        if not syntax:
            logger.warning("no syntax theme selected; highlighting will be unstyled")
            return AssetText(SYNTAX_STYLES_PREFIX, error="empty syntax theme identifier")
        return self._load(syntax_stylesheet_name(syntax), "css")

    def _load(self, resource_name: str, resource_type: str) -> AssetText:
        result = load_text(resource_name, resource_type, self._resources_dir)
        if not result.ok:
            logger.warning("bundled asset unavailable, using empty text: %s", result.error)
        return result
