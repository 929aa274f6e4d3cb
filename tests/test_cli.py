import json

import pytest

from gator.cli import USAGE, build_commands, main


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    config = {"db_url": str(tmp_path / "gator.db"), "current_user_name": ""}
    (tmp_path / ".gatorconfig.json").write_text(json.dumps(config), encoding="utf-8")
    return tmp_path


def test_build_commands_registers_every_command():
    cmds = build_commands()
    names = ["register", "login", "reset", "users", "agg", "addfeed", "feeds", "follow", "following", "unfollow"]
    assert all(name in cmds for name in names)
    assert "help" not in cmds


def test_missing_command_prints_usage(home, capsys):
    assert main([]) == 1
    assert USAGE in capsys.readouterr().err


def test_unknown_command_fails(home, capsys):
    assert main(["dance"]) == 1
    assert "command not found" in capsys.readouterr().err


def test_missing_config_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert main(["users"]) == 1
    assert capsys.readouterr().err.startswith("error reading config:")


def test_register_then_users_across_runs(home, capsys):
    assert main(["register", "alice"]) == 0
    assert main(["register", "bob"]) == 0
    assert main(["login", "alice"]) == 0
    capsys.readouterr()
    assert main(["users"]) == 0
    assert capsys.readouterr().out.splitlines() == ["* alice (current)", "* bob"]
    saved = json.loads((home / ".gatorconfig.json").read_text(encoding="utf-8"))
    assert saved["current_user_name"] == "alice"


def test_logged_in_command_without_user_fails(home, capsys):
    assert main(["addfeed", "Blog", "https://example.com/feed"]) == 1
    assert "no rows in result set" in capsys.readouterr().err


def test_addfeed_then_following(home, capsys):
    assert main(["register", "alice"]) == 0
    assert main(["addfeed", "Blog", "https://example.com/feed"]) == 0
    capsys.readouterr()
    assert main(["following"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Feed follows for user alice:", "* Blog"]


def test_handler_error_exits_with_failure(home, capsys):
    assert main(["login", "ghost"]) == 1
    assert capsys.readouterr().err.startswith("couldn't find user")