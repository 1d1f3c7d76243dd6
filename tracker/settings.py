from __future__ import annotations

"""Loading and saving of user settings.

The settings are stored as a list of dictionaries to preserve order.
Each dictionary contains ``key``, ``value`` and ``type`` entries.
"""

from pathlib import Path
import json
import logging
from typing import Any, List, Dict

from . import DEFAULT_REST_DURATION

# Path to the JSON file where settings are persisted.
SETTINGS_PATH = Path(__file__).resolve().parents[1] / "data" / "settings.json"

# Default settings written on first run.
DEFAULT_SETTINGS: List[Dict[str, Any]] = [
    {"key": "default_rest_time", "value": DEFAULT_REST_DURATION, "type": "int"},
    {"key": "weight_unit", "value": "kg", "type": "str"},
    {"key": "auto_start_rest_timer", "value": True, "type": "bool"},
    {"key": "show_previous_workout_data", "value": True, "type": "bool"},
]

# Settings are only read from disk once per path.
_settings_cache: List[Dict[str, Any]] | None = None
_cache_path: Path | None = None


def load_settings(path: Path | None = None) -> List[Dict[str, Any]]:
    """Load settings from ``path`` or create the defaults."""
    path = Path(path or SETTINGS_PATH)
    if path.exists():
        try:
            with path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
            if isinstance(data, list):
                return data
            logging.warning("Ignoring settings file %s: not a list", path)
        except (OSError, ValueError):
            logging.exception("Failed to read settings from %s", path)
    defaults = [item.copy() for item in DEFAULT_SETTINGS]
    save_settings(defaults, path)
    return defaults


def save_settings(settings: List[Dict[str, Any]], path: Path | None = None) -> None:
    """Persist ``settings`` to ``path``."""
    path = Path(path or SETTINGS_PATH)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            json.dump(settings, fh)
    except OSError:
        logging.exception("Failed to write settings to %s", path)


def get_settings(path: Path | None = None) -> List[Dict[str, Any]]:
    """Return the cached settings list, loading from disk if needed."""
    global _settings_cache, _cache_path
    path = Path(path or SETTINGS_PATH)
    if _settings_cache is None or _cache_path != path:
        _settings_cache = load_settings(path)
        _cache_path = path
    return _settings_cache


def clear_cache() -> None:
    """Forget cached settings so the next access reads from disk."""
    global _settings_cache, _cache_path
    _settings_cache = None
    _cache_path = None


def get_value(key: str, path: Path | None = None) -> Any:
    """Fetch the value associated with ``key``.

    Keys missing from the file fall back to :data:`DEFAULT_SETTINGS`.
    """
    for item in get_settings(path):
        if item.get("key") == key:
            return item.get("value")
    for item in DEFAULT_SETTINGS:
        if item["key"] == key:
            return item["value"]
    return None


def set_value(key: str, value: Any, path: Path | None = None) -> None:
    """Update ``key`` with ``value`` and persist the change."""
    settings = get_settings(path)
    for item in settings:
        if item.get("key") == key:
            item["value"] = value
            break
    else:
        settings.append({"key": key, "value": value, "type": type(value).__name__})
    save_settings(settings, path)
