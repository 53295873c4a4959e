"""
Menu state machine for the launcher.

``LauncherSession`` holds everything the screens need; ``handle_key`` routes a
key to the handler of the current screen and returns an optional action for
the event loop (quit, or launch an entry).
"""

from enum import Enum
from typing import Dict, List, Optional


class MenuState(Enum):
    MAIN_MENU = "main"
    TUI_APPS_MENU = "tui_apps"
    STATS_MENU = "stats"
    OPTIONS_MENU = "options"
    CREDITS_MENU = "credits"


class Action:
    """Side effect requested by a key press"""

    QUIT = "quit"
    LAUNCH = "launch"

    def __init__(self, kind: str, entry: Optional[Dict] = None):
        self.kind = kind
        self.entry = entry

    def __eq__(self, other):
        if not isinstance(other, Action):
            return NotImplemented
        return self.kind == other.kind and self.entry == other.entry

    def __repr__(self):
        name = self.entry.get("name") if self.entry else None
        return f"Action({self.kind!r}, {name!r})"


class LauncherSession:
    """Launcher state: entry lists, selections, current screen and viewport"""

    def __init__(
        self,
        games: List[Dict],
        tui_apps: List[Dict],
        stats: Optional[Dict] = None,
        title: str = "Terminal Gaming Suite",
    ):
        self.games = list(games)
        self.tui_apps = list(tui_apps)
        self.selected_game = 0
        self.selected_tui_app = 0
        self.menu_state = MenuState.TUI_APPS_MENU
        self.width = 0
        self.height = 0
        self.stats = dict(stats or {})
        self.title = title
        self.status = ""

    @classmethod
    def from_config(cls, config: Dict) -> "LauncherSession":
        return cls(
            games=config.get("games", []),
            tui_apps=config.get("tui_apps", []),
            stats=config.get("stats", {}).get("global", {}),
            title=config.get("launcher", {}).get("title", "Terminal Gaming Suite"),
        )


QUIT_KEYS = ("q", "ctrl+c")
UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")
SWAP_KEYS = ("left", "right")
LAUNCH_KEYS = ("enter", " ")
BACK_KEYS = ("q", "esc", "backspace")

MAIN_MENU_SHORTCUTS = {
    "t": MenuState.TUI_APPS_MENU,
    "s": MenuState.STATS_MENU,
    "o": MenuState.OPTIONS_MENU,
    "c": MenuState.CREDITS_MENU,
}


def _move(index, count, step):
    """Move a selection by *step*, clamped to the list bounds"""
    if count <= 0:
        return 0
    return max(0, min(count - 1, index + step))


def _launch_action(entries, index):
    """Launch action for entries[index], or None when the list is empty"""
    if not entries:
        return None
    return Action(Action.LAUNCH, entries[_move(index, len(entries), 0)])


def _switch(session, state):
    session.menu_state = state
    session.status = ""


def _handle_main_menu_key(session, key):
    if key in QUIT_KEYS:
        return Action(Action.QUIT)
    if key in UP_KEYS:
        session.selected_game = _move(session.selected_game, len(session.games), -1)
    elif key in DOWN_KEYS:
        session.selected_game = _move(session.selected_game, len(session.games), 1)
    elif key in SWAP_KEYS:
        _switch(session, MenuState.TUI_APPS_MENU)
    elif key in LAUNCH_KEYS:
        return _launch_action(session.games, session.selected_game)
    elif key in MAIN_MENU_SHORTCUTS:
        _switch(session, MAIN_MENU_SHORTCUTS[key])
    return None


def _handle_tui_apps_menu_key(session, key):
    # No Stats/Options/Credits shortcuts from here
    if key in QUIT_KEYS:
        return Action(Action.QUIT)
    if key in UP_KEYS:
        session.selected_tui_app = _move(
            session.selected_tui_app, len(session.tui_apps), -1
        )
    elif key in DOWN_KEYS:
        session.selected_tui_app = _move(
            session.selected_tui_app, len(session.tui_apps), 1
        )
    elif key in SWAP_KEYS:
        _switch(session, MenuState.MAIN_MENU)
    elif key in LAUNCH_KEYS:
        return _launch_action(session.tui_apps, session.selected_tui_app)
    return None


def _handle_back_only_key(session, key):
    if key in BACK_KEYS:
        _switch(session, MenuState.MAIN_MENU)
    return None


KEY_HANDLERS = {
    MenuState.MAIN_MENU: _handle_main_menu_key,
    MenuState.TUI_APPS_MENU: _handle_tui_apps_menu_key,
    MenuState.STATS_MENU: _handle_back_only_key,
    MenuState.OPTIONS_MENU: _handle_back_only_key,
    MenuState.CREDITS_MENU: _handle_back_only_key,
}

_missing = set(MenuState) - set(KEY_HANDLERS)
if _missing:
    raise RuntimeError(f"No key handler for menu states: {sorted(s.name for s in _missing)}")


def handle_key(session: LauncherSession, key: Optional[str]) -> Optional[Action]:
    """Apply *key* to *session* and return the requested action, if any.

    Keys the current screen does not know are ignored.
    """
    if not key:
        return None
    return KEY_HANDLERS[session.menu_state](session, key)


def handle_resize(session: LauncherSession, width: int, height: int) -> None:
    session.width = max(0, int(width))
    session.height = max(0, int(height))


def set_status(session: LauncherSession, message: str) -> None:
    """Record the outcome of the last launch for display"""
    session.status = message or ""
