"""
Screen rendering.

``render`` turns a ``LauncherSession`` into the text of one frame. It does not
touch the session or the terminal; ``cli_menu`` writes the result out.
"""

import constants as cv
import styles as st
from menu_state import LauncherSession, MenuState

TUI_APPS_HEADER = "🖥️  TUI Applications"
STATS_HEADER = "📊 Statistics"
OPTIONS_HEADER = "⚙️  Options"
CREDITS_HEADER = "Credits"

LIST_LEGEND = [("enter", "launch"), ("↑↓", "navigate"), ("←→", "swap menu"), ("q", "quit")]
MAIN_MENU_LEGEND = LIST_LEGEND[:-1] + [
    ("t", "apps"),
    ("s", "stats"),
    ("o", "options"),
    ("c", "credits"),
    ("q", "quit"),
]
BACK_LEGEND = [("esc", "back")]


def _legend(bindings):
    parts = [
        st.style(key, st.KEY) + st.style(f": {label}", st.COMMAND) for key, label in bindings
    ]
    return st.style(" • ", st.COMMAND).join(parts)


def _rule_width(session):
    return session.width if session.width > 0 else cv.SCREEN_WIDTH


def _name_cell(entry):
    text = f"{entry.get('icon', '')} {entry.get('name', '')}".strip()
    return st.truncate(text, cv.NAME_COLUMN_WIDTH - 3)


def format_entry_row(entry, selected):
    """Render one list row with the description at a fixed column.

    The name cell is padded to ``NAME_COLUMN_WIDTH`` display cells so that the
    description column lines up whatever glyphs the name uses.
    """
    name_style = st.SELECTED if selected else st.NORMAL
    desc_style = st.SELECTED if selected else st.DESC
    name = st.style(_name_cell(entry), name_style, padded=True)
    description = st.style(entry.get("description", ""), desc_style, padded=True)
    return st.pad_to(name, cv.NAME_COLUMN_WIDTH) + description


def _render_entry_list(session, header, entries, selected_index, legend):
    lines = [st.style(header, st.HEADER, padded=True), ""]
    lines.append(
        st.pad_to(st.style("Name", st.NORMAL, padded=True), cv.NAME_COLUMN_WIDTH)
        + st.style("Description", st.NORMAL, padded=True)
    )
    lines.append("─" * _rule_width(session))

    if not entries:
        lines.append(st.style("Nothing configured yet. Add entries to config.json.", st.DESC, padded=True))
    for i, entry in enumerate(entries):
        lines.append(format_entry_row(entry, i == selected_index))

    lines.append("")
    lines.append(_legend(legend))
    return lines


def _render_main_menu(session):
    header = f"🎮 {session.title}"
    return _render_entry_list(
        session, header, session.games, session.selected_game, MAIN_MENU_LEGEND
    )


def _render_tui_apps_menu(session):
    return _render_entry_list(
        session,
        TUI_APPS_HEADER,
        session.tui_apps,
        session.selected_tui_app,
        LIST_LEGEND,
    )


def _stat_line(label, value):
    return st.style(f"{label}:", st.NORMAL, padded=True) + st.style(str(value), st.COMMAND)


def _render_stats_menu(session):
    stats = session.stats
    return [
        st.style(STATS_HEADER, st.HEADER, padded=True),
        "",
        _stat_line("Games Played", stats.get("games_played", 0)),
        _stat_line("Total Time", f"{stats.get('total_time_seconds', 0)} seconds"),
        _stat_line("Achievements", stats.get("achievements_unlocked", 0)),
        _stat_line("Favorite Game", stats.get("favorite_game", "")),
        "",
        _legend(BACK_LEGEND),
    ]


def _render_options_menu(session):
    return [
        st.style(OPTIONS_HEADER, st.HEADER, padded=True),
        "",
        st.style("[Coming Soon]", st.DESC),
        "",
        _legend(BACK_LEGEND),
    ]


def _render_credits_menu(session):
    return [
        st.style(CREDITS_HEADER, st.HEADER, padded=True),
        "",
        st.style(session.title, st.NORMAL, padded=True),
        st.style("Developed with love", st.DESC, padded=True),
        "",
        _legend(BACK_LEGEND),
    ]


SCREEN_RENDERERS = {
    MenuState.MAIN_MENU: _render_main_menu,
    MenuState.TUI_APPS_MENU: _render_tui_apps_menu,
    MenuState.STATS_MENU: _render_stats_menu,
    MenuState.OPTIONS_MENU: _render_options_menu,
    MenuState.CREDITS_MENU: _render_credits_menu,
}

_missing = set(MenuState) - set(SCREEN_RENDERERS)
if _missing:
    raise RuntimeError(f"No renderer for menu states: {sorted(s.name for s in _missing)}")


def render(session: LauncherSession) -> str:
    """Return the full frame for the current screen"""
    lines = SCREEN_RENDERERS[session.menu_state](session)
    if session.status:
        lines.extend(["", st.style(session.status, st.DESC)])
    return "\n".join(lines)
