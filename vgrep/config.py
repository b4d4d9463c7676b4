"""Persistent JSON config helpers.

Holds user defaults for the theme, the layout, and the external grep command.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "vgrep"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


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


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def load_dual_mode() -> bool:
    """Return whether the dual-column layout is the default.

    Only explicit boolean values are accepted; any other type falls back to
    ``False``.
    """
    value = load_config().get("dual")
    return value if isinstance(value, bool) else False


def load_grep_command() -> str | None:
    """Load the external search command used by the delegated matcher."""
    return _load_string("grep_command")
