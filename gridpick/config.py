"""Saved picker defaults in a JSON file under the user config directory.

Every accessor validates its value and falls back to the built-in default,
so a hand-edited or corrupt file never stops the picker from starting.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .ignore_rules import DEFAULT_IGNORE_FILE
from .keys import DEFAULT_SELECT_ALL_KEY, RESERVED_KEYS
from .layout import MAX_COLUMNS, MIN_COLUMN_WIDTH

APP_NAME = "gridpick"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Return the saved settings, or ``{}`` if there is no usable JSON object."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Write ``data`` as indented JSON; an unwritable location is not an error."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_positive_int(key: str, default: int) -> int:
    """Read a positive integer; booleans and other types fall back to ``default``."""
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _load_nonempty_str(key: str) -> str | None:
    value = load_config().get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def load_theme_name() -> str | None:
    return _load_nonempty_str("theme")


def load_ignore_file() -> Path:
    """Return the configured ignore file, ``.gitignore`` in the cwd by default."""
    return Path(_load_nonempty_str("ignore_file") or DEFAULT_IGNORE_FILE)


def load_max_columns() -> int:
    return _load_positive_int("max_columns", MAX_COLUMNS)


def load_min_column_width() -> int:
    return _load_positive_int("min_column_width", MIN_COLUMN_WIDTH)


def load_select_all_key() -> str:
    """Return a single printable select-all key, ``a`` by default.

    Keys already bound to movement, toggle, submit or cancel fall back too.
    """
    value = _load_nonempty_str("select_all_key")
    if value is None or len(value) != 1 or not value.isprintable() or value in RESERVED_KEYS:
        return DEFAULT_SELECT_ALL_KEY
    return value
