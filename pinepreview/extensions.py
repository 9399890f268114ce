"""User extension script discovery."""

from __future__ import annotations

import html
import logging
import os
from pathlib import Path
from typing import Iterable

from PySide6.QtCore import QUrl

from .config import app_support_dir

logger = logging.getLogger(__name__)

EXTENSIONS_DIR_ENV = "PINEPREVIEW_EXTENSIONS_DIR"
EXTENSION_SUFFIX = ".js"


def extensions_dir(configured: str | Path | None = None) -> Path:
    """Resolve the extensions directory from config, env, or the app folder."""
    if configured:
        return Path(configured).expanduser()
    env_value = os.environ.get(EXTENSIONS_DIR_ENV, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    return app_support_dir() / "plugins"


def discover_extensions(directory: str | Path | None) -> list[str]:
    """Return file URLs for every extension script in ``directory``.

    Entries are sorted by file name so script order stays stable between
    scans. A missing or unreadable directory yields an empty list.
    """
    if directory is None:
        return []
    root = Path(directory).expanduser()
    try:
        entries = sorted(root.iterdir(), key=lambda entry: entry.name)
    except FileNotFoundError:
        logger.debug("extensions directory %s does not exist", root)
        return []
    except OSError as exc:
        logger.warning("cannot read extensions directory %s: %s", root, exc)
        return []

    scripts: list[str] = []
    for entry in entries:
        if entry.suffix != EXTENSION_SUFFIX or not entry.is_file():
            continue
        # Default QUrl formatting is percent-decoded, matching what the page loads.
        scripts.append(QUrl.fromLocalFile(str(entry.absolute())).toString())
    logger.info("discovered %d extension script(s) in %s", len(scripts), root)
    return scripts


def script_tags(scripts: Iterable[str]) -> str:
    return " ".join(f"<script src='{html.escape(src, quote=True)}'></script>" for src in scripts)
