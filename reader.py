"""
User specs for tui-hub.

A small YAML file next to the config that says where launchable entries
live (``apps_dir``) and where diagnostic logs go (``log_dir``). Environment
variables ``TUI_HUB_APPS_DIR`` and ``TUI_HUB_LOG_DIR`` override the file.
"""

import os

import yaml

import constants as cv


def get_user_specs_path(config_dir=None):
    return os.path.join(config_dir or cv.CONFIG_DIR, cv.USER_SPECS_DATA)


def default_user_specs(config_dir=None):
    """Return the user specs written on first run"""
    config_dir = config_dir or cv.CONFIG_DIR
    return {
        "apps_dir": config_dir,
        "log_dir": os.path.join(config_dir, cv.LOG_DIR_NAME),
    }


def ensure_user_specs(config_dir=None):
    """Create user_specs.yaml with defaults if it does not exist yet.

    Returns:
        str: Path to the user specs file

    Raises:
        OSError: If the directory or file cannot be written
    """
    path = get_user_specs_path(config_dir)
    if os.path.exists(path):
        return path

    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as file:
        yaml.safe_dump(default_user_specs(config_dir), file, default_flow_style=False)
    return path


def load_user_specs(config_dir=None):
    """Load user specs, falling back to defaults for anything missing.

    A missing or unparseable file is treated as empty.
    """
    specs = default_user_specs(config_dir)
    try:
        with open(get_user_specs_path(config_dir), "r", encoding="utf-8") as file:
            loaded = yaml.safe_load(file)
    except (OSError, yaml.YAMLError):
        loaded = None

    if isinstance(loaded, dict):
        specs.update({k: v for k, v in loaded.items() if k in specs and v})
    return specs


def get_apps_base_dir(config_dir=None):
    override = os.environ.get("TUI_HUB_APPS_DIR")
    if override:
        return os.path.expanduser(override)
    return os.path.expanduser(str(load_user_specs(config_dir)["apps_dir"]))


def get_log_dir(config_dir=None):
    override = os.environ.get("TUI_HUB_LOG_DIR")
    if override:
        return os.path.expanduser(override)
    return os.path.expanduser(str(load_user_specs(config_dir)["log_dir"]))
