import os

CONFIG_DIR = os.environ.get(
    "TUI_HUB_HOME", os.path.join(os.path.expanduser("~"), ".config", "tui-hub")
)
CONFIG_FILE_NAME = "config.json"
USER_SPECS_DATA = "user_specs.yaml"
LOG_DIR_NAME = "logs"
LOG_FILE_PREFIX = "logdog"

SCREEN_WIDTH = 80
NAME_COLUMN_WIDTH = 32
KEY_POLL_SECONDS = 0.1
SHELL = "sh"
