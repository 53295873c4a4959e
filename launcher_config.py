"""
Launcher configuration loading.

The config is a JSON file at ``<config dir>/config.json`` holding launcher
metadata, the games and TUI apps lists, stats and settings. A missing file is
replaced by the built-in defaults (and written to disk); a broken file is left
alone and the defaults are used in memory.
"""

import copy
import json
import os
from typing import Dict, Optional

import constants as cv

ENTRY_DEFAULTS = {
    "id": "",
    "name": "",
    "description": "",
    "icon": "",
    "command": "",
    "path": "",
    "category": "",
    "difficulty": "",
    "version": "",
    "author": "",
    "executable": False,
    "config": {},
}

ENTRY_STATS_DEFAULTS = {
    "times_played": 0,
    "total_time": "",
    "high_score": "",
    "last_played": "",
}

ACHIEVEMENT_DEFAULTS = {
    "id": "",
    "name": "",
    "description": "",
    "unlocked": False,
}

DEFAULT_CONFIG = {
    "launcher": {
        "title": "Terminal Gaming Suite",
        "version": "1.0.0",
        "author": "Your Name",
        "theme": "retro",
    },
    "games": [],
    "tui_apps": [],
    "stats": {
        "global": {
            "games_played": 0,
            "total_time_seconds": 0,
            "achievements_unlocked": 0,
            "favorite_game": "",
            "last_played": "",
        },
        "achievements": [],
    },
    "settings": {
        "theme": "retro",
        "sound_enabled": True,
        "auto_save": True,
        "statistics_tracking": True,
        "notifications": True,
        "backup_saves": True,
        "controller_support": False,
        "terminal_size": "auto",
    },
}


def get_config_path(config_dir=None):
    return os.path.join(config_dir or cv.CONFIG_DIR, cv.CONFIG_FILE_NAME)


def get_default_config() -> Dict:
    """Return a fresh copy of the built-in default configuration"""
    return copy.deepcopy(DEFAULT_CONFIG)


def _same_type(value, default):
    """True when *value* has the JSON type of *default* (bools are not ints)"""
    if isinstance(default, bool) or isinstance(value, bool):
        return type(value) is type(default)
    return isinstance(value, type(default))


def _merged(defaults, raw):
    """Overlay *raw* onto a copy of *defaults*, keeping only dict input.

    A value whose type differs from its default is replaced by the default;
    keys without a default are kept as they are.
    """
    result = copy.deepcopy(defaults)
    if isinstance(raw, dict):
        for key, value in raw.items():
            if key not in defaults or _same_type(value, defaults[key]):
                result[key] = value
    return result


def normalize_entry(raw) -> Dict:
    """Fill in every LaunchableEntry key.

    ``high_score`` and ``stats`` are optional and only kept when present.

    Args:
        raw: Entry dict as read from JSON

    Returns:
        dict: Entry with all keys populated
    """
    entry = _merged(ENTRY_DEFAULTS, raw)
    if isinstance(raw, dict) and isinstance(raw.get("stats"), dict):
        entry["stats"] = _merged(ENTRY_STATS_DEFAULTS, raw["stats"])
    else:
        entry.pop("stats", None)
    if isinstance(raw, dict) and raw.get("high_score"):
        entry["high_score"] = str(raw["high_score"])
    else:
        entry.pop("high_score", None)
    return entry


def _normalize_entries(raw_list):
    if not isinstance(raw_list, list):
        return []
    return [normalize_entry(item) for item in raw_list if isinstance(item, dict)]


def normalize_config(raw: Dict) -> Dict:
    """Return *raw* with missing sections and keys filled from defaults"""
    defaults = get_default_config()
    stats_raw = raw.get("stats") if isinstance(raw.get("stats"), dict) else {}
    achievements = stats_raw.get("achievements")
    return {
        "launcher": _merged(defaults["launcher"], raw.get("launcher")),
        "games": _normalize_entries(raw.get("games")),
        "tui_apps": _normalize_entries(raw.get("tui_apps")),
        "stats": {
            "global": _merged(defaults["stats"]["global"], stats_raw.get("global")),
            "achievements": [
                _merged(ACHIEVEMENT_DEFAULTS, a)
                for a in (achievements if isinstance(achievements, list) else [])
                if isinstance(a, dict)
            ],
        },
        "settings": _merged(defaults["settings"], raw.get("settings")),
    }


def save_config(config: Dict, config_path: str) -> None:
    """Write *config* as pretty-printed JSON, creating the directory.

    Raises:
        OSError: If the directory or file cannot be written
    """
    os.makedirs(os.path.dirname(config_path), exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2, ensure_ascii=False)
        f.write("\n")


def load_config(config_path: Optional[str] = None, logger=None) -> Dict:
    """Load the launcher config, falling back to defaults.

    Missing file: defaults are returned and written to *config_path*.
    Unreadable or malformed file: defaults are returned, the file is untouched.

    Args:
        config_path: Path to config.json (defaults to the per-user location)
        logger: Optional logdog.Logger

    Returns:
        dict: Normalized configuration
    """
    config_path = config_path or get_config_path()

    if not os.path.exists(config_path):
        config = get_default_config()
        try:
            save_config(config, config_path)
            if logger:
                logger.info("Created default config", [("path", config_path)])
        except OSError as e:
            if logger:
                logger.error(
                    "Error writing default config",
                    [("path", config_path), ("error", str(e))],
                )
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        if logger:
            logger.error(
                "Error parsing config", [("path", config_path), ("error", str(e))]
            )
        return get_default_config()

    if not isinstance(raw, dict):
        if logger:
            logger.error(
                "Config top level is not an object", [("path", config_path)]
            )
        return get_default_config()

    config = normalize_config(raw)
    if logger:
        logger.info(
            "Loaded config",
            [
                ("path", config_path),
                ("games", len(config["games"])),
                ("tui_apps", len(config["tui_apps"])),
            ],
        )
    return config
