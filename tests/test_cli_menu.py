"""Tests for cli_menu module - the interactive loop with a scripted terminal"""

from contextlib import contextmanager
from unittest.mock import patch

import cli_menu
import process_launcher
from menu_state import LauncherSession, MenuState


class FakeTerminal:
    """Terminal stand-in that replays batches of keys"""

    def __init__(self, batches, size=(100, 30)):
        self.batches = list(batches)
        self.frames = []
        self.events = []
        self._size = size
        self._resized = True

    def __enter__(self):
        self.events.append("start")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.events.append("stop")
        return False

    @contextmanager
    def suspended(self):
        self.events.append("suspend")
        try:
            yield
        finally:
            self.events.append("resume")

    def consume_resize(self):
        resized, self._resized = self._resized, False
        return resized

    def size(self):
        return self._size

    def read_keys(self, timeout):
        if not self.batches:
            return ["q"]
        return self.batches.pop(0)

    def draw(self, frame):
        self.frames.append(frame)


APPS = [
    {"id": "a", "name": "Alpha", "command": "alpha", "path": ""},
    {"id": "b", "name": "Beta", "command": "beta", "path": "beta"},
]


def test_quit_restores_terminal():
    session = LauncherSession([], APPS)
    term = FakeTerminal([["q"]])

    cli_menu.display_menu(session, "/base", terminal=term)

    assert term.events == ["start", "stop"]
    assert len(term.frames) == 1


def test_resize_updates_session():
    session = LauncherSession([], APPS)
    cli_menu.display_menu(session, "/base", terminal=FakeTerminal([["q"]], size=(120, 40)))
    assert (session.width, session.height) == (120, 40)


def test_idle_polls_do_not_redraw():
    session = LauncherSession([], APPS)
    term = FakeTerminal([[], [], ["down"], [], ["q"]])

    cli_menu.display_menu(session, "/base", terminal=term)

    assert len(term.frames) == 2
    assert session.selected_tui_app == 1


def test_launch_suspends_terminal_and_sets_status():
    session = LauncherSession([], APPS)
    term = FakeTerminal([["down", "enter"], ["q"]])

    with patch.object(process_launcher, "launch", return_value="Returned from Beta") as launch:
        cli_menu.display_menu(session, "/base", terminal=term)

    launch.assert_called_once_with(APPS[1], "/base", None)
    assert term.events == ["start", "suspend", "resume", "stop"]
    assert session.status == "Returned from Beta"
    assert "Returned from Beta" in term.frames[-1]
    assert session.menu_state == MenuState.TUI_APPS_MENU


def test_failed_launch_keeps_menu_usable():
    session = LauncherSession([], APPS)
    term = FakeTerminal([["enter"], ["down"], ["q"]])
    outcome = "Error launching Alpha: exit status 127"

    with patch.object(process_launcher, "launch", return_value=outcome):
        cli_menu.display_menu(session, "/base", terminal=term)

    assert session.status == outcome
    assert session.selected_tui_app == 1


def test_launch_on_empty_list_does_nothing():
    session = LauncherSession([], [])
    term = FakeTerminal([["enter", " "], ["q"]])

    with patch.object(process_launcher, "launch") as launch:
        cli_menu.display_menu(session, "/base", terminal=term)

    launch.assert_not_called()
    assert "suspend" not in term.events


def test_process_keys_stops_at_quit():
    session = LauncherSession([], APPS)
    keep_going = cli_menu.process_keys(session, ["left", "q", "right"], FakeTerminal([]), "/base")

    assert keep_going is False
    assert session.menu_state == MenuState.MAIN_MENU


def test_process_keys_navigates_screens():
    session = LauncherSession([], APPS)
    keep_going = cli_menu.process_keys(session, ["left", "s", "esc", "c"], FakeTerminal([]), "/base")

    assert keep_going is True
    assert session.menu_state == MenuState.CREDITS_MENU


def test_real_launch_through_loop(tmp_path):
    marker = tmp_path / "ran.txt"
    apps = [{"id": "t", "name": "Touch", "command": f"touch {marker}", "path": ""}]
    session = LauncherSession([], apps)

    cli_menu.display_menu(session, str(tmp_path), terminal=FakeTerminal([["enter"], ["q"]]))

    assert marker.exists()
    assert session.status == "Returned from Touch"
