"""
Raw terminal control for the launcher.

``Terminal`` puts stdin in raw mode, switches to the alternate screen and turns
on mouse reporting. ``suspended()`` gives the terminal back (cooked mode, main
screen) for the duration of a child process and takes it again afterwards.
Key bytes are decoded into names such as "up", "enter" or "q".
"""

import os
import select
import shutil
import signal
import sys
from contextlib import contextmanager
from typing import List, Optional

if sys.platform != "win32":
    import termios
    import tty

import constants as cv

ENTER_ALT_SCREEN = "\033[?1049h"
EXIT_ALT_SCREEN = "\033[?1049l"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
MOUSE_ON = "\033[?1002h\033[?1006h"
MOUSE_OFF = "\033[?1006l\033[?1002l"
CLEAR_SCREEN = "\033[H\033[2J"

ESC = 0x1B

SINGLE_BYTE_KEYS = {
    b"\r": "enter",
    b"\n": "enter",
    b"\x7f": "backspace",
    b"\x08": "backspace",
    b"\x03": "ctrl+c",
    b"\x1b": "esc",
    b"\t": "tab",
}

ESCAPE_SEQUENCE_KEYS = {
    b"\x1b[A": "up",
    b"\x1b[B": "down",
    b"\x1b[C": "right",
    b"\x1b[D": "left",
    b"\x1bOA": "up",
    b"\x1bOB": "down",
    b"\x1bOC": "right",
    b"\x1bOD": "left",
}


class TerminalError(Exception):
    """The terminal cannot be used for the interactive menu"""


def decode_key(data: bytes) -> Optional[str]:
    """Name of the key encoded by *data*, or None for anything unknown.

    Mouse reports and unrecognized escape sequences decode to None.
    """
    if not data:
        return None
    if data in SINGLE_BYTE_KEYS:
        return SINGLE_BYTE_KEYS[data]
    if data in ESCAPE_SEQUENCE_KEYS:
        return ESCAPE_SEQUENCE_KEYS[data]
    if data[0] == ESC:
        return None
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    if len(text) == 1 and text.isprintable():
        return text
    return None


def _utf8_length(lead):
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def split_keys(data: bytes) -> List[str]:
    """Split one read's worth of bytes into key names.

    Handles several keys arriving together (fast typing, pasted text) and CSI
    sequences of any length, including SGR and legacy X10 mouse reports.
    """
    keys = []
    i = 0
    while i < len(data):
        if data[i] == ESC and i + 1 < len(data) and data[i + 1] == ord("["):
            j = i + 2
            while j < len(data) and not 0x40 <= data[j] <= 0x7E:
                j += 1
            end = j + 1
            if end == i + 3 and data[j : j + 1] == b"M":
                # legacy X10 mouse report: three payload bytes follow
                end = i + 6
        elif data[i] == ESC and i + 2 < len(data) and data[i + 1] == ord("O"):
            end = i + 3
        else:
            end = i + _utf8_length(data[i])
        key = decode_key(data[i:end])
        if key:
            keys.append(key)
        i = end
    return keys


class Terminal:
    """Full-screen terminal session on stdin/stdout"""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._fd = None
        self._saved_settings = None
        self._previous_winch = None
        self._resized = False

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False

    def start(self):
        """Take over the terminal.

        Raises:
            TerminalError: If stdin/stdout is not a usable terminal
        """
        if sys.platform == "win32":
            raise TerminalError("tui-hub needs a POSIX terminal")
        if not (self.stdin.isatty() and self.stdout.isatty()):
            raise TerminalError("stdin and stdout must be attached to a terminal")
        try:
            self._fd = self.stdin.fileno()
            self._saved_settings = termios.tcgetattr(self._fd)
        except (termios.error, OSError, ValueError) as e:
            raise TerminalError(f"Cannot initialize terminal: {e}") from e

        self._acquire()
        self._previous_winch = signal.signal(signal.SIGWINCH, self._on_resize)
        self._resized = True

    def stop(self):
        """Give the terminal back in the state it was found"""
        if self._saved_settings is None:
            return
        signal.signal(signal.SIGWINCH, self._previous_winch or signal.SIG_DFL)
        self._release()
        self._saved_settings = None

    def _write(self, text):
        self.stdout.write(text)
        self.stdout.flush()

    def _acquire(self):
        tty.setraw(self._fd)
        self._write(ENTER_ALT_SCREEN + HIDE_CURSOR + MOUSE_ON)

    def _release(self):
        self._write(MOUSE_OFF + SHOW_CURSOR + EXIT_ALT_SCREEN)
        termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_settings)

    @contextmanager
    def suspended(self):
        """Hand the terminal to someone else for the duration of the block"""
        self._release()
        try:
            yield
        finally:
            self._acquire()
            self._resized = True

    def _on_resize(self, signum, frame):
        self._resized = True

    def consume_resize(self) -> bool:
        """True once after each resize (and after start/suspend)"""
        resized, self._resized = self._resized, False
        return resized

    def size(self):
        size = shutil.get_terminal_size((cv.SCREEN_WIDTH, 24))
        return size.columns, size.lines

    def read_keys(self, timeout: float) -> List[str]:
        """Wait up to *timeout* seconds for input and return decoded keys"""
        ready = select.select([self._fd], [], [], timeout)[0]
        if not ready:
            return []
        return split_keys(os.read(self._fd, 1024))

    def draw(self, frame: str):
        """Replace the screen contents with *frame*"""
        self._write(CLEAR_SCREEN + frame.replace("\n", "\r\n"))
