"""Tests for process_launcher module"""

import os
import signal
import subprocess
from unittest.mock import MagicMock, patch

import process_launcher


def _entry(command, path="", name="Test App"):
    return {"id": "test", "name": name, "command": command, "path": path}


def test_resolve_working_dir_empty_path():
    assert process_launcher.resolve_working_dir(_entry("echo hi"), "/base") is None


def test_resolve_working_dir_current_dir():
    for path in (".", "./"):
        assert process_launcher.resolve_working_dir(_entry("ls", path), "/base") is None


def test_resolve_working_dir_relative_path():
    result = process_launcher.resolve_working_dir(_entry("ls", "sub/dir"), "/base")
    assert result == os.path.join("/base", "sub/dir")


def test_build_shell_command_without_path():
    assert process_launcher.build_shell_command(_entry("echo hi"), "/base") == "echo hi"


def test_build_shell_command_with_path():
    script = process_launcher.build_shell_command(_entry("./run.sh", "sub/dir"), "/base")
    assert script == "cd /base/sub/dir && ./run.sh"


def test_build_shell_command_quotes_directory():
    script = process_launcher.build_shell_command(_entry("make", "my games"), "/base")
    assert script == "cd '/base/my games' && make"


def test_launch_success_message():
    assert process_launcher.launch(_entry("true"), "/tmp") == "Returned from Test App"


def test_launch_echo_runs(tmp_path):
    target = tmp_path / "out.txt"
    entry = _entry(f"echo hi > {target}", name="Echo")

    assert process_launcher.launch(entry, str(tmp_path)) == "Returned from Echo"
    assert target.read_text() == "hi\n"


def test_launch_changes_into_entry_path(tmp_path):
    sub = tmp_path / "sub" / "dir"
    sub.mkdir(parents=True)
    entry = _entry("pwd > where.txt", path="sub/dir")

    process_launcher.launch(entry, str(tmp_path))

    assert (sub / "where.txt").read_text().strip() == os.path.realpath(str(sub))


def test_launch_missing_command_reports_error():
    entry = _entry("definitely-not-a-real-command-xyz", name="Ghost")
    outcome = process_launcher.launch(entry, "/tmp")
    assert outcome.startswith("Error launching Ghost: ")
    assert outcome.endswith("exit status 127")


def test_launch_nonzero_exit_reports_status():
    outcome = process_launcher.launch(_entry("exit 3"), "/tmp")
    assert outcome == "Error launching Test App: exit status 3"


def test_launch_missing_directory_reports_error(tmp_path):
    outcome = process_launcher.launch(_entry("true", path="nope"), str(tmp_path))
    assert outcome.startswith("Error launching Test App: exit status")


def test_launch_spawn_failure_reports_error():
    with patch.object(subprocess, "run", side_effect=FileNotFoundError("No such file: 'sh'")):
        outcome = process_launcher.launch(_entry("echo hi"), "/tmp")
    assert outcome == "Error launching Test App: No such file: 'sh'"


def test_launch_killed_by_signal():
    result = MagicMock(returncode=-9)
    with patch.object(subprocess, "run", return_value=result):
        outcome = process_launcher.launch(_entry("sleep 100"), "/tmp")
    assert outcome == "Error launching Test App: signal: 9"


def test_launch_inherits_environment(monkeypatch):
    monkeypatch.setenv("TUI_HUB_TEST_MARKER", "present")
    result = MagicMock(returncode=0)
    with patch.object(subprocess, "run", return_value=result) as mock_run:
        process_launcher.launch(_entry("echo hi"), "/tmp")

    args, kwargs = mock_run.call_args
    assert args[0] == ["sh", "-c", "echo hi"]
    assert kwargs["env"]["TUI_HUB_TEST_MARKER"] == "present"


def test_launch_restores_interrupt_handlers():
    before = signal.getsignal(signal.SIGINT)
    process_launcher.launch(_entry("true"), "/tmp")
    assert signal.getsignal(signal.SIGINT) == before


def test_launch_logs_outcome():
    logger = MagicMock()
    process_launcher.launch(_entry("exit 1"), "/tmp", logger=logger)

    logger.info.assert_called_once()
    logger.warn.assert_called_once()
    message, fields = logger.warn.call_args[0]
    assert ("returncode", 1) in fields
