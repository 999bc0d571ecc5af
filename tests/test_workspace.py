"""Tests for habitflow/workspace.py and habitflow/fileio.py: settings, clock, files."""

from datetime import date

import yaml

from habitflow.fileio import read_json, read_yaml, write_json_atomic
from habitflow.workspace import (
    get_user_timezone,
    habits_path,
    load_settings,
    settings_path,
    today_str,
    workspace_root,
)


def test_workspace_root_from_env(workspace):
    assert workspace_root() == workspace.resolve()
    assert habits_path() == workspace.resolve() / "habitflow" / "habits.json"


def test_load_settings(workspace):
    settings = load_settings(workspace)
    assert settings["timezone"] == "UTC"
    assert settings["log_level"] == "DEBUG"


def test_load_settings_defaults(tmp_path):
    settings = load_settings(tmp_path)
    assert settings == {"timezone": "UTC", "log_level": "INFO"}


def test_load_settings_unreadable_yaml(workspace):
    settings_path(workspace).write_text("timezone: [unclosed", encoding="utf-8")
    assert load_settings(workspace)["timezone"] == "UTC"


def test_unknown_timezone_falls_back_to_utc(workspace):
    settings_path(workspace).write_text(yaml.dump({"timezone": "Mars/Olympus_Mons"}), encoding="utf-8")
    assert get_user_timezone(workspace).key == "UTC"


def test_configured_timezone(workspace):
    settings_path(workspace).write_text(yaml.dump({"timezone": "Asia/Tokyo"}), encoding="utf-8")
    assert get_user_timezone(workspace).key == "Asia/Tokyo"
    assert read_yaml(settings_path(workspace)) == {"timezone": "Asia/Tokyo"}


def test_today_str_is_iso_date(workspace):
    day = date.fromisoformat(today_str(workspace))
    assert abs((day - date.today()).days) <= 1


def test_json_round_trip(tmp_path):
    path = tmp_path / "nested" / "doc.json"
    write_json_atomic(path, {"name": "Café ☕"})
    assert read_json(path) == {"name": "Café ☕"}


def test_read_json_missing(tmp_path):
    assert read_json(tmp_path / "missing.json") is None
