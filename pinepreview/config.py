"""Persistent preview settings and platform paths."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .themes import DEFAULT_THEME_NAME

logger = logging.getLogger(__name__)

CONFIG_VERSION = 1
APP_DIR_NAME = "pinepreview"


@dataclass
class AppearanceConfig:
    theme: str = DEFAULT_THEME_NAME
    use_system_appearance: bool = False


@dataclass
class ExtensionsConfig:
    enabled: bool = True
    directory: str | None = None


@dataclass
class ResourcesConfig:
    directory: str | None = None


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    appearance: AppearanceConfig = field(default_factory=AppearanceConfig)
    extensions: ExtensionsConfig = field(default_factory=ExtensionsConfig)
    resources: ResourcesConfig = field(default_factory=ResourcesConfig)


def app_support_dir() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "PinePreview"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "PinePreview"
    return Path.home() / ".config" / APP_DIR_NAME


def config_path() -> Path:
    return app_support_dir() / "config.json"


def _merge(dataclass_type, raw: Any):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize(cfg: AppConfig) -> None:
    cfg.appearance.theme = str(cfg.appearance.theme or DEFAULT_THEME_NAME)
    cfg.appearance.use_system_appearance = bool(cfg.appearance.use_system_appearance)
    cfg.extensions.enabled = bool(cfg.extensions.enabled)
    if cfg.extensions.directory is not None:
        cfg.extensions.directory = str(cfg.extensions.directory)
    if cfg.resources.directory is not None:
        cfg.resources.directory = str(cfg.resources.directory)


def load_config(path: Path | None = None) -> AppConfig:
    """Load settings, falling back to defaults for a missing or broken file."""
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return AppConfig()
    if not isinstance(raw, dict):
        logger.warning("ignoring config %s: expected a JSON object", path)
        return AppConfig()

    try:
        version = int(raw.get("config_version", CONFIG_VERSION))
    except (TypeError, ValueError):
        version = CONFIG_VERSION

    cfg = AppConfig(
        config_version=version,
        appearance=_merge(AppearanceConfig, raw.get("appearance", {})),
        extensions=_merge(ExtensionsConfig, raw.get("extensions", {})),
        resources=_merge(ResourcesConfig, raw.get("resources", {})),
    )
    _normalize(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
