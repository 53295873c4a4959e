"""ANSI styles and width-aware text helpers for the launcher screens."""

import re
import unicodedata

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

RESET = "\033[0m"
BOLD = "\033[1m"


def _fg(hex_color):
    r, g, b = (int(hex_color[i : i + 2], 16) for i in (1, 3, 5))
    return f"\033[38;2;{r};{g};{b}m"


def _bg(hex_color):
    r, g, b = (int(hex_color[i : i + 2], 16) for i in (1, 3, 5))
    return f"\033[48;2;{r};{g};{b}m"


WHITE = _fg("#FFFFFF")
PURPLE_BG = _bg("#7C3AED")
BLUE = _fg("#60A5FA")
GREEN = _fg("#34D399")
GRAY = _fg("#9CA3AF")

HEADER = BOLD + WHITE + PURPLE_BG
SELECTED = BOLD + WHITE + PURPLE_BG
NORMAL = WHITE
COMMAND = BOLD + BLUE
KEY = BOLD + GREEN
DESC = GRAY


def style(text, codes, padded=False):
    """Wrap *text* in ANSI *codes*; *padded* adds one cell on each side"""
    if padded:
        text = f" {text} "
    return f"{codes}{text}{RESET}"


EMOJI_PRESENTATION = "\ufe0f"


def char_width(char):
    """Terminal cells taken by *char*: 2 for wide, 0 for combining/zero-width"""
    if unicodedata.combining(char) or unicodedata.category(char) in ("Mn", "Me", "Cf"):
        return 0
    if unicodedata.east_asian_width(char) in ("F", "W"):
        return 2
    return 1


def _clusters(text):
    """Yield (chunk, cells) for each base character and its zero-width marks.

    A base followed by U+FE0F is drawn as a two-cell emoji.
    """
    chunk = ""
    cells = 0
    for char in text:
        w = char_width(char)
        if w == 0 and chunk:
            chunk += char
            if char == EMOJI_PRESENTATION:
                cells = 2
            continue
        if chunk:
            yield chunk, cells
        chunk, cells = char, w
    if chunk:
        yield chunk, cells


def display_width(text):
    """Visible width of *text*, ignoring ANSI codes"""
    return sum(cells for _, cells in _clusters(ANSI_RE.sub("", text)))


def truncate(text, width):
    """Cut plain *text* to at most *width* cells, ending with an ellipsis"""
    if display_width(text) <= width:
        return text
    if width <= 0:
        return ""

    result = []
    used = 0
    for chunk, cells in _clusters(text):
        if used + cells > width - 1:
            break
        result.append(chunk)
        used += cells
    return "".join(result) + "…"


def pad_to(text, width):
    """Pad *text* (may contain ANSI codes) with spaces to *width* cells"""
    missing = width - display_width(text)
    return text + " " * missing if missing > 0 else text
