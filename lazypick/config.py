"""Persistent JSON config helpers.

Stores the preferred UI theme and inline viewport height.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .render import VIEWPORT_ROWS

APP_NAME = "lazypick"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
MIN_HEIGHT = 8
MAX_HEIGHT = VIEWPORT_ROWS


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

    Any filesystem error is ignored to keep runtime behavior non-fatal when
    config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_preferences(theme_name: str | None, height: int | None) -> None:
    """Persist theme and viewport height; ``None``/invalid values are skipped."""
    config = load_config()
    stripped = str(theme_name).strip() if theme_name is not None else ""
    if stripped:
        config["theme"] = stripped
    valid_height = coerce_height(height)
    if valid_height is not None:
        config["height"] = valid_height
    save_config(config)


def coerce_height(value: object) -> int | None:
    """Validate a viewport height; booleans and out-of-range ints are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if not MIN_HEIGHT <= value <= MAX_HEIGHT:
        return None
    return value


def load_height() -> int:
    """Return persisted viewport height, defaulting to the standard 12 rows."""
    height = coerce_height(load_config().get("height"))
    return VIEWPORT_ROWS if height is None else height
