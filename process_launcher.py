"""
Running launcher entries as child processes.

The entry's ``command`` is run through ``sh -c`` after changing into its
``path`` (relative to the apps base directory). The call blocks until the child
exits; the caller is expected to have handed the terminal over first.
"""

import os
import shlex
import signal
import subprocess
from contextlib import contextmanager
from typing import Dict, Optional

import constants as cv

CURRENT_DIR_PATHS = ("", ".", "./")
INTERRUPT_SIGNALS = (signal.SIGINT, signal.SIGQUIT)


def resolve_working_dir(entry: Dict, base_dir: str) -> Optional[str]:
    """Directory to change into before running *entry*, or None for no change"""
    path = (entry.get("path") or "").strip()
    if path in CURRENT_DIR_PATHS:
        return None
    return os.path.join(base_dir, path)


def build_shell_command(entry: Dict, base_dir: str) -> str:
    """Build the ``sh -c`` script for *entry*.

    Examples:
        path "" and command "echo hi"   -> "echo hi"
        path "sub/dir"                  -> "cd '<base>/sub/dir' && <command>"
    """
    command = entry.get("command", "")
    working_dir = resolve_working_dir(entry, base_dir)
    if working_dir is None:
        return command
    return f"cd {shlex.quote(working_dir)} && {command}"


def _restore_default_signals():
    for signum in INTERRUPT_SIGNALS:
        signal.signal(signum, signal.SIG_DFL)


@contextmanager
def _ignore_interrupts():
    """Let Ctrl+C reach the child only; the launcher keeps running"""
    previous = {signum: signal.signal(signum, signal.SIG_IGN) for signum in INTERRUPT_SIGNALS}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def _describe_failure(returncode):
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status {returncode}"


def launch(entry: Dict, base_dir: str, logger=None) -> str:
    """Run *entry* synchronously and return the outcome message.

    Never raises for a failing or missing command: the failure is reported in
    the returned message so the menu can keep going.

    Args:
        entry: LaunchableEntry dict (uses ``name``, ``command``, ``path``)
        base_dir: Directory relative entry paths are resolved against
        logger: Optional logdog.Logger

    Returns:
        str: "Returned from <name>" or "Error launching <name>: <detail>"
    """
    name = entry.get("name", "")
    script = build_shell_command(entry, base_dir)
    if logger:
        logger.info("Launching entry", [("id", entry.get("id", "")), ("command", script)])

    try:
        with _ignore_interrupts():
            result = subprocess.run(
                [cv.SHELL, "-c", script],
                env=os.environ.copy(),
                preexec_fn=_restore_default_signals,
            )
    except OSError as e:
        if logger:
            logger.error("Launch failed", [("id", entry.get("id", "")), ("error", str(e))])
        return f"Error launching {name}: {e}"

    if result.returncode != 0:
        detail = _describe_failure(result.returncode)
        if logger:
            logger.warn(
                "Entry exited with error",
                [("id", entry.get("id", "")), ("returncode", result.returncode)],
            )
        return f"Error launching {name}: {detail}"

    if logger:
        logger.info("Returned from entry", [("id", entry.get("id", ""))])
    return f"Returned from {name}"
