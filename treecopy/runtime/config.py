"""Read-only JSON config helpers.

Reads the preferred theme, extra excluded names, and output toggles.
Malformed or missing config falls back to defaults.
The config is never written by the application.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from ..logging import get_logger

APP_NAME = "treecopy"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

logger = get_logger(__name__)


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_bool(key: str, default: bool) -> bool:
    """Only explicit booleans are accepted; anything else yields ``default``."""
    value = load_config().get(key)
    return value if isinstance(value, bool) else default


def load_theme_name() -> str | None:
    """Load theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_extra_excludes() -> frozenset[str]:
    """Load additional entry names to skip while building the tree.

    Non-string and blank items are dropped; a non-list value yields nothing.
    """
    value = load_config().get("exclude")
    if not isinstance(value, list):
        return frozenset()
    return frozenset(item.strip() for item in value if isinstance(item, str) and item.strip())


def load_use_gitignore() -> bool:
    return _load_bool("use_gitignore", True)


def load_ascii_tree() -> bool:
    return _load_bool("ascii_tree", True)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_ascii_tree",
    "load_config",
    "load_extra_excludes",
    "load_theme_name",
    "load_use_gitignore",
]
