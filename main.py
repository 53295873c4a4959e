"""
tui-hub - Terminal launcher for games and TUI applications

Main entry point for the application. Loads the config and launches the
interactive menu.
"""

import sys

import cli_menu
import launcher_config
import logdog
import reader
from menu_state import LauncherSession
from terminal import TerminalError


def main():
    logger = logdog.Logger(reader.get_log_dir())

    # Ensure user_specs.yaml exists (written on first run)
    try:
        reader.ensure_user_specs()
    except OSError as e:
        logger.error("Error writing user specs", [("error", str(e))])

    config = launcher_config.load_config(logger=logger)
    session = LauncherSession.from_config(config)
    logger.info("Starting launcher", [("title", session.title)])

    try:
        cli_menu.display_menu(session, reader.get_apps_base_dir(), logger)
    except TerminalError as e:
        logger.error("Cannot start terminal UI", [("error", str(e))])
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass

    logger.info("Launcher exited")
    return 0


if __name__ == "__main__":
    sys.exit(main())
