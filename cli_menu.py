"""
Interactive launcher menu.

This module runs the full-screen loop: draw the current screen, wait for keys,
dispatch them through the menu state machine, and run the selected entry with
the terminal handed over to it.
"""

import constants as cv
import process_launcher
import renderer
from menu_state import Action, handle_key, handle_resize, set_status
from terminal import Terminal


def _launch_entry(session, terminal, entry, base_dir, logger=None):
    """Run *entry* with the terminal suspended and record the outcome"""
    with terminal.suspended():
        outcome = process_launcher.launch(entry, base_dir, logger)
    set_status(session, outcome)


def process_keys(session, keys, terminal, base_dir, logger=None):
    """Dispatch a batch of keys.

    Returns:
        bool: False once a quit action was requested, True otherwise
    """
    for key in keys:
        action = handle_key(session, key)
        if action is None:
            continue
        if action.kind == Action.QUIT:
            if logger:
                logger.info("Quit requested", [("screen", session.menu_state.value)])
            return False
        if action.kind == Action.LAUNCH:
            _launch_entry(session, terminal, action.entry, base_dir, logger)
    return True


def display_menu(session, base_dir, logger=None, terminal=None):
    """Run the launcher until the user quits.

    The frame is only redrawn after input, a resize, or a child process
    returning, so an idle menu does not flicker.

    Raises:
        terminal.TerminalError: If the terminal cannot be taken over
    """
    terminal = terminal or Terminal()
    with terminal:
        dirty = True
        while True:
            if terminal.consume_resize():
                handle_resize(session, *terminal.size())
                dirty = True

            if dirty:
                terminal.draw(renderer.render(session))
                dirty = False

            keys = terminal.read_keys(cv.KEY_POLL_SECONDS)
            if not keys:
                continue
            if not process_keys(session, keys, terminal, base_dir, logger):
                break
            dirty = True
