#!/usr/bin/env python3
"""
Settings
========
Loads configs/app.yaml (or the file named by $BIGRAMKIT_CONFIG) once and
serves nested values by dotted path:

    get_setting("generation.max_length")     # 50
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"
CONFIG_ENV_VAR = "BIGRAMKIT_CONFIG"


def config_path() -> Path:
    """App config in use: $BIGRAMKIT_CONFIG if set, else the packaged app.yaml."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else APP_CONFIG_PATH


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    path = config_path()
    if not path.exists():
        raise FileNotFoundError(f"Missing app config: {path}")
    data = yaml.safe_load(path.read_text())
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"App config must be a mapping: {path}")
    return data or {}


def reload_app_config() -> dict:
    """Drop the cached config (e.g. after changing $BIGRAMKIT_CONFIG)."""
    load_app_config.cache_clear()
    return load_app_config()


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a user path against ``base`` (default: working directory)."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if not path.is_absolute():
        path = ((base or Path.cwd()) / path).resolve()
    return path


__all__ = [
    "load_app_config",
    "reload_app_config",
    "config_path",
    "get_setting",
    "resolve_path",
    "PACKAGE_ROOT",
    "APP_CONFIG_PATH",
    "CONFIG_ENV_VAR",
]
