"""Persistent JSON config helpers.

Stores scan mode, catalog-load strictness, UI theme, and the games directory
that holds per-title catalogs. All access is defensive: malformed or missing
config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "lazydlc"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_GAMES_DIR = Path(user_data_dir(APP_NAME, appauthor=False)) / "games"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored to keep runtime behavior non-fatal when
    config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_flag(key: str) -> bool:
    """Only explicit booleans are accepted; anything else reads as ``False``."""
    value = load_config().get(key)
    return value if isinstance(value, bool) else False


def _save_flag(key: str, enabled: bool) -> None:
    config = load_config()
    config[key] = bool(enabled)
    save_config(config)


def load_full_scan() -> bool:
    """Return whether archive scans should continue past a mismatched title id."""
    return _load_flag("full_scan")


def save_full_scan(enabled: bool) -> None:
    """Persist full-scan preference."""
    _save_flag("full_scan", enabled)


def load_strict_catalog_load() -> bool:
    """Return whether catalog load failures should propagate instead of yielding an empty catalog."""
    return _load_flag("strict_catalog_load")


def save_strict_catalog_load(enabled: bool) -> None:
    """Persist catalog-load strictness preference."""
    _save_flag("strict_catalog_load", enabled)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_games_dir() -> Path:
    """Return the directory holding per-title catalogs.

    A persisted ``games_dir`` string overrides the platform data directory;
    blank or non-string values are ignored.
    """
    value = load_config().get("games_dir")
    if isinstance(value, str) and value.strip():
        return Path(value.strip()).expanduser()
    return DEFAULT_GAMES_DIR


def save_games_dir(path: Path) -> None:
    """Persist games directory override."""
    config = load_config()
    config["games_dir"] = str(path)
    save_config(config)
