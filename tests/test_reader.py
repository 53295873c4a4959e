"""Tests for reader module - user specs"""

import os

import yaml

import reader


def test_ensure_user_specs_writes_defaults(tmp_path):
    config_dir = str(tmp_path / "hub")
    path = reader.ensure_user_specs(config_dir)

    with open(path, "r", encoding="utf-8") as f:
        specs = yaml.safe_load(f)
    assert specs == {
        "apps_dir": config_dir,
        "log_dir": os.path.join(config_dir, "logs"),
    }


def test_ensure_user_specs_keeps_existing(tmp_path):
    path = tmp_path / "user_specs.yaml"
    path.write_text("apps_dir: /opt/games\n")

    reader.ensure_user_specs(str(tmp_path))

    assert path.read_text() == "apps_dir: /opt/games\n"


def test_load_user_specs_fills_missing_keys(tmp_path):
    (tmp_path / "user_specs.yaml").write_text("apps_dir: /opt/games\nunknown: 1\n")

    specs = reader.load_user_specs(str(tmp_path))

    assert specs["apps_dir"] == "/opt/games"
    assert specs["log_dir"] == os.path.join(str(tmp_path), "logs")
    assert "unknown" not in specs


def test_load_user_specs_broken_yaml(tmp_path):
    (tmp_path / "user_specs.yaml").write_text("apps_dir: [unclosed\n")
    assert reader.load_user_specs(str(tmp_path)) == reader.default_user_specs(str(tmp_path))


def test_apps_dir_expands_home(tmp_path, monkeypatch):
    monkeypatch.delenv("TUI_HUB_APPS_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / "user_specs.yaml").write_text("apps_dir: ~/games\n")

    assert reader.get_apps_base_dir(str(tmp_path)) == os.path.join(str(tmp_path), "games")


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("TUI_HUB_APPS_DIR", "/srv/apps")
    monkeypatch.setenv("TUI_HUB_LOG_DIR", "/var/log/hub")

    assert reader.get_apps_base_dir(str(tmp_path)) == "/srv/apps"
    assert reader.get_log_dir(str(tmp_path)) == "/var/log/hub"


def test_log_dir_default(tmp_path, monkeypatch):
    monkeypatch.delenv("TUI_HUB_LOG_DIR", raising=False)
    assert reader.get_log_dir(str(tmp_path)) == os.path.join(str(tmp_path), "logs")
