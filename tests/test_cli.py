"""
Tests for the hubline shell — argument parsing, startup and the input loop
"""

import logging

import pytest

from hubline.cli import Shell, build_parser, main
from hubline.config import ConfigManager
from hubline.settings import GLOBAL


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep user config out, and detach the file log after each test."""
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_DIR", tmp_path / "user")
    for var in ("HUBLINE_LOG_LEVEL", "HUBLINE_SYMBOLS", "HUBLINE_LOG_STDOUT", "HUBLINE_DIR"):
        monkeypatch.delenv(var, raising=False)
    yield
    logger = logging.getLogger("hubline")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def feed(monkeypatch, *lines):
    """Make input() return the given lines, then EOF."""
    pending = list(lines)

    def fake_input(prompt=""):
        if not pending:
            raise EOFError
        return pending.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.dir is None
        assert args.debug is False

    def test_dir_and_debug(self):
        args = build_parser().parse_args(["-d", "/tmp/x", "--debug"])
        assert args.dir == "/tmp/x"
        assert args.debug is True

    def test_version_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["--version"])
        assert exc.value.code == 0
        assert "hubline" in capsys.readouterr().out


class TestShell:

    def test_startup_creates_identity(self, tmp_path):
        shell = Shell(tmp_path, ConfigManager(tmp_path))
        nick = shell.session.store.raw(GLOBAL, "nick")
        assert nick.startswith("hubline_")
        assert shell.session.store.raw(GLOBAL, "download_dir") == str(tmp_path / "downloads")

    def test_starts_with_hand_broken_settings(self, tmp_path):
        (tmp_path / "settings.yaml").write_text(
            "global:\n  nick:\n  slots: 2\nhubs:\n  foo:\n    hubname: '#foo'\n", encoding="utf-8")
        shell = Shell(tmp_path, ConfigManager(tmp_path))
        assert shell.session.store.raw(GLOBAL, "nick").startswith("hubline_")
        assert shell.session.store.raw(GLOBAL, "slots") == "2"
        assert shell.session.store.hub_scopes() == {}

    def test_settings_persist(self, tmp_path):
        shell = Shell(tmp_path, ConfigManager(tmp_path))
        shell.dispatcher.dispatch("/set slots 3")
        again = Shell(tmp_path, ConfigManager(tmp_path))
        assert again.session.store.raw(GLOBAL, "slots") == "3"

    def test_prompt(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HUBLINE_SYMBOLS", "ascii")
        shell = Shell(tmp_path, ConfigManager(tmp_path))
        assert shell.prompt == "main > "

    def test_candidates(self, tmp_path):
        shell = Shell(tmp_path, ConfigManager(tmp_path))
        assert shell.candidate("/vers", 0) == "/version "
        assert shell.candidate("/vers", 1) is None

    def test_debug_flag(self, tmp_path):
        Shell(tmp_path, ConfigManager(tmp_path), debug=True)
        assert logging.getLogger("hubline").level == logging.DEBUG
        assert (tmp_path / "hubline.log").exists()

    def test_run_until_quit(self, tmp_path, monkeypatch, capsys):
        feed(monkeypatch, "/version", "/quit", "/set slots 7")
        shell = Shell(tmp_path, ConfigManager(tmp_path))
        assert shell.run() == 0
        assert shell.services.quit_requested is True
        assert shell.session.store.raw(GLOBAL, "slots") == "10"
        assert "Python" in capsys.readouterr().out

    def test_run_until_eof(self, tmp_path, monkeypatch):
        feed(monkeypatch, "/set slots 5")
        shell = Shell(tmp_path, ConfigManager(tmp_path))
        assert shell.run() == 0
        assert shell.session.store.raw(GLOBAL, "slots") == "5"


class TestMain:

    def test_invalid_config(self, tmp_path, capsys):
        (tmp_path / "config.yaml").write_text("logging:\n  level: LOUD\n", encoding="utf-8")
        assert main(["--dir", str(tmp_path)]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_runs_shell(self, tmp_path, monkeypatch):
        feed(monkeypatch)
        assert main(["--dir", str(tmp_path)]) == 0
        assert (tmp_path / "settings.yaml").exists()
