"""Persistent JSON config helpers.

Stores default include/exclude patterns and svn client settings.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .patterns import DEFAULT_EXCLUDES, DEFAULT_INCLUDES
from .repository.svn import DEFAULT_SVN_BINARY, DEFAULT_TIMEOUT_SECONDS

APP_NAME = "branchscan"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_STYLE = "monokai"


@dataclass(frozen=True)
class Settings:
    """Effective settings after merging config defaults."""

    includes: str = DEFAULT_INCLUDES
    excludes: str = DEFAULT_EXCLUDES
    svn_binary: str = DEFAULT_SVN_BINARY
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    style: str = DEFAULT_STYLE


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def _load_string(data: dict[str, object], key: str, default: str, *, allow_empty: bool = False) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    if not stripped and not allow_empty:
        return default
    return stripped


def _load_timeout(data: dict[str, object]) -> float:
    """Read a positive timeout; booleans and non-numbers fall back to the default."""
    value = data.get("timeout_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_TIMEOUT_SECONDS
    return float(value)


def load_settings() -> Settings:
    data = load_config()
    return Settings(
        includes=_load_string(data, "includes", DEFAULT_INCLUDES),
        excludes=_load_string(data, "excludes", DEFAULT_EXCLUDES, allow_empty=True),
        svn_binary=_load_string(data, "svn_binary", DEFAULT_SVN_BINARY),
        timeout_seconds=_load_timeout(data),
        style=_load_string(data, "style", DEFAULT_STYLE),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "Settings",
    "load_config",
    "save_config",
    "load_settings",
]
