"""Configuration loading for svg-textdraw.

Configuration lives in a YAML file. Lookup order:

1. an explicit path passed to ``Config.load``
2. ``$SVG_TEXTDRAW_CONFIG``
3. ``./svg-textdraw.yaml``
4. ``~/.config/svg-textdraw/config.yaml``

A missing file yields the defaults. Example::

    font_dirs:
      - ~/fonts
    font_overrides:
      Brand Sans: ~/fonts/BrandSans-Regular.ttf
    default_family: sans-serif
    background: white
    log_level: INFO
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from svg_textdraw.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SVG_TEXTDRAW_CONFIG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Options:
    """Render-time options threaded through the drawing pipeline."""

    scale: float = 1.0
    background: str | None = None
    default_family: str = "sans-serif"


@dataclass
class Config:
    font_dirs: list[Path] = field(default_factory=list)
    font_overrides: dict[str, Path] = field(default_factory=dict)
    default_family: str = "sans-serif"
    background: str | None = None
    log_level: str = "WARNING"
    source: Path | None = None

    @staticmethod
    def search_paths() -> list[Path]:
        paths = []
        env = os.environ.get(CONFIG_ENV_VAR)
        if env:
            paths.append(Path(env))
        paths.append(Path.cwd() / "svg-textdraw.yaml")
        paths.append(Path.home() / ".config" / "svg-textdraw" / "config.yaml")
        return paths

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Load configuration from ``path`` or the first existing default.

        Raises:
            ConfigError: if an explicit path does not exist or the file
                does not hold a valid configuration.
        """
        if path is not None:
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")
            return cls.from_file(path)
        for candidate in cls.search_paths():
            if candidate.is_file():
                return cls.from_file(candidate)
        return cls()

    @classmethod
    def from_file(cls, path: Path) -> Config:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        config = cls.from_dict(data or {})
        config.source = path
        logger.debug("Loaded config from %s", path)
        return config

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a mapping")
        unknown = set(data) - {
            "font_dirs",
            "font_overrides",
            "default_family",
            "background",
            "log_level",
        }
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        config = cls()
        if "font_dirs" in data:
            dirs = data["font_dirs"]
            if not isinstance(dirs, list) or not all(isinstance(d, str) for d in dirs):
                raise ConfigError("'font_dirs' must be a list of paths")
            config.font_dirs = [Path(d).expanduser() for d in dirs]
        if "font_overrides" in data:
            overrides = data["font_overrides"]
            if not isinstance(overrides, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in overrides.items()
            ):
                raise ConfigError("'font_overrides' must map family names to paths")
            config.font_overrides = {k: Path(v).expanduser() for k, v in overrides.items()}
        if "default_family" in data:
            if not isinstance(data["default_family"], str) or not data["default_family"].strip():
                raise ConfigError("'default_family' must be a non-empty string")
            config.default_family = data["default_family"].strip()
        if "background" in data:
            if data["background"] is not None and not isinstance(data["background"], str):
                raise ConfigError("'background' must be a color string")
            config.background = data["background"]
        if "log_level" in data:
            level = str(data["log_level"]).upper()
            if level not in LOG_LEVELS:
                raise ConfigError(f"'log_level' must be one of {', '.join(LOG_LEVELS)}")
            config.log_level = level
        return config

    def options(self, scale: float = 1.0) -> Options:
        return Options(
            scale=scale,
            background=self.background,
            default_family=self.default_family,
        )
