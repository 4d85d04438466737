"""
YAML → typed config loader.

Loads tracker defaults from defaults.yaml (bundled with the package) and
optionally merges user overrides from <data dir>/config.yaml.

Usage:
    from strain.core.config_loader import load_config
    cfg = load_config()
    days = cfg.default_days

If the bundled YAML cannot be parsed, the Python defaults from config.py are
used (no crash). A user override file with parse errors is logged and ignored.
"""

from __future__ import annotations

import importlib.resources
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .config import (
    BUNDLED_CONFIG_FILENAME,
    DATA_DIR_ENV,
    DEFAULT_DATA_DIRNAME,
    DEFAULT_THEME,
    THEMES,
    USER_CONFIG_FILENAME,
)

logger = logging.getLogger(__name__)


@dataclass
class DaySeed:
    """A day to create on first run."""

    name: str
    exercises: list[str] = field(default_factory=list)


@dataclass
class TrackerConfig:
    """Resolved configuration values."""

    default_days: list[DaySeed] = field(default_factory=list)
    themes: tuple[str, ...] = THEMES
    default_theme: str = DEFAULT_THEME


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse_yaml(text: str, source: object) -> dict[str, Any]:
    """Parse one YAML document; anything but a mapping counts as empty."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.warning("Ignoring config %s: %s", source, e)
        return {}
    return data if isinstance(data, dict) else {}


def _read_bundled() -> dict[str, Any]:
    try:
        resource = importlib.resources.files("strain").joinpath(BUNDLED_CONFIG_FILENAME)
        text = resource.read_text(encoding="utf-8")
    except (OSError, ModuleNotFoundError) as e:
        logger.warning("Bundled %s unavailable: %s", BUNDLED_CONFIG_FILENAME, e)
        return {}
    return _parse_yaml(text, BUNDLED_CONFIG_FILENAME)


def _read_user(data_dir: Path) -> dict[str, Any]:
    path = data_dir / USER_CONFIG_FILENAME
    if not path.is_file():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Ignoring config %s: %s", path, e)
        return {}
    return _parse_yaml(text, path)


def _parse_day_seeds(raw: Any) -> list[DaySeed]:
    if not isinstance(raw, list):
        return []
    seeds: list[DaySeed] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        name = str(item.get("name") or "").strip()
        if not name:
            continue
        exercises = [
            str(ex).strip() for ex in item.get("exercises") or [] if str(ex).strip()
        ]
        seeds.append(DaySeed(name=name, exercises=exercises))
    return seeds


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_default_data_dir() -> Path:
    """Return $STRAIN_HOME if set, else ~/.strain."""
    env = os.environ.get(DATA_DIR_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / DEFAULT_DATA_DIRNAME


def load_raw_config(data_dir: Path | None = None) -> dict[str, Any]:
    """
    Read the bundled defaults, then let <data dir>/config.yaml replace any
    top-level key it sets. Every key is a scalar or a list, so a key in the
    user file replaces the bundled value whole.
    """
    base = Path(data_dir) if data_dir is not None else get_default_data_dir()
    return {**_read_bundled(), **_read_user(base)}
def load_config(data_dir: Path | None = None) -> TrackerConfig:
    """Load YAML configuration and resolve it into a TrackerConfig."""
    raw = load_raw_config(data_dir)

    themes_raw = raw.get("themes")
    themes = (
        tuple(str(t) for t in themes_raw)
        if isinstance(themes_raw, list) and themes_raw
        else THEMES
    )
    default_theme = str(raw.get("default_theme") or DEFAULT_THEME)
    if default_theme not in themes:
        logger.warning("default_theme %r not in themes; using %r", default_theme, themes[0])
        default_theme = themes[0]

    return TrackerConfig(
        default_days=_parse_day_seeds(raw.get("default_days")),
        themes=themes,
        default_theme=default_theme,
    )
