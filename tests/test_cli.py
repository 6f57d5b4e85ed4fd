"""Tests for CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from tickbox import cli
from tickbox.cli import EXIT_BACKEND_FAILURE, EXIT_CANCELLED, app
from tickbox.config import Config
from tickbox.models import BackendError, CharPress, Key, KeyPress

runner = CliRunner()

DOWN = KeyPress(Key.DOWN)
SPACE = KeyPress(Key.SPACE)
ENTER = KeyPress(Key.ENTER)
ESC = KeyPress(Key.ESC)


@pytest.fixture
def scripted_backend(monkeypatch, terminal_factory):
    """Make the CLI use a scripted terminal. Returns a setter for the events."""
    terminals = []

    def use(events):
        term = terminal_factory(events)
        terminals.append(term)
        monkeypatch.setattr(cli, "_make_backend", lambda: term)
        return term

    use.terminals = terminals
    return use


class TestCliImport:
    def test_help_command_works(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0, result.output
        assert "Pick one or more options" in result.output


class TestPick:
    def test_prints_chosen_options(self, scripted_backend):
        scripted_backend([SPACE, DOWN, SPACE, ENTER])

        result = runner.invoke(app, ["pick", "apple", "banana", "cherry", "--item", "fruit"])

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == ["apple", "banana"]

    def test_header_uses_item_description(self, scripted_backend):
        term = scripted_backend([SPACE, ENTER])

        runner.invoke(app, ["pick", "apple", "-i", "fruit"])

        assert "Select one or more fruit:" in term.screen_text(frame=0)

    def test_json_output(self, scripted_backend):
        scripted_backend([DOWN, SPACE, ENTER])

        result = runner.invoke(app, ["pick", "apple", "banana", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == ["banana"]

    def test_cancel_exits_nonzero(self, scripted_backend):
        scripted_backend([SPACE, ESC])

        result = runner.invoke(app, ["pick", "apple"])

        assert result.exit_code == EXIT_CANCELLED
        assert "apple" not in result.stdout

    def test_quit_letter_exits_nonzero(self, scripted_backend):
        scripted_backend([CharPress("q")])

        result = runner.invoke(app, ["pick", "apple"])

        assert result.exit_code == EXIT_CANCELLED

    def test_backend_failure(self, scripted_backend):
        scripted_backend([BackendError(OSError("tty gone"))])

        result = runner.invoke(app, ["pick", "apple"])

        assert result.exit_code == EXIT_BACKEND_FAILURE
        assert scripted_backend.terminals[0].released == 1

    def test_no_options(self, scripted_backend):
        scripted_backend([])

        result = runner.invoke(app, ["pick"])

        assert result.exit_code == 1
        assert "No options" in result.output

    def test_options_from_file(self, scripted_backend, tmp_path):
        options_file = tmp_path / "options.txt"
        options_file.write_text("red\n\ngreen\nblue\n")
        term = scripted_backend([DOWN, SPACE, ENTER])

        result = runner.invoke(app, ["pick", "--from-file", str(options_file)])

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == ["green"]
        assert "blue" in term.screen_text(frame=0)

    def test_missing_options_file(self, scripted_backend, tmp_path):
        scripted_backend([])

        result = runner.invoke(app, ["pick", "--from-file", str(tmp_path / "missing.txt")])

        assert result.exit_code == 1

    def test_log_file_written(self, scripted_backend, tmp_path):
        import logging

        log_file = tmp_path / "tickbox.log"
        scripted_backend([SPACE, ENTER])
        pkg_logger = logging.getLogger("tickbox")
        saved_handlers, saved_level = pkg_logger.handlers[:], pkg_logger.level
        try:
            result = runner.invoke(
                app, ["pick", "apple", "--log-file", str(log_file), "--verbose"]
            )
        finally:
            for handler in pkg_logger.handlers[:]:
                if handler not in saved_handlers:
                    pkg_logger.removeHandler(handler)
                    handler.close()
            pkg_logger.setLevel(saved_level)

        assert result.exit_code == 0, result.output
        assert "session ended: confirmed" in log_file.read_text()


class TestConfigCommand:
    def test_shows_settings(self):
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0, result.output
        assert "vim_keys" in result.output
        assert "cursor_glyph" in result.output

    def test_sets_value(self, isolated_config):
        result = runner.invoke(app, ["config", "cursor_glyph", ">"])

        assert result.exit_code == 0, result.output
        assert Config.load(isolated_config).cursor_glyph == ">"

    def test_sets_toggle(self, isolated_config):
        result = runner.invoke(app, ["config", "vim_keys", "off"])

        assert result.exit_code == 0, result.output
        assert Config.load(isolated_config).vim_keys is False

    @pytest.mark.parametrize(
        "key,value", [("header_style", "notacolor"), ("cursor_glyph", "ab")]
    )
    def test_rejects_invalid_value(self, isolated_config, key, value):
        result = runner.invoke(app, ["config", key, value])

        assert result.exit_code == 1
        assert "Invalid value" in result.output
        assert getattr(Config.load(isolated_config), key) == Config.DEFAULTS[key]

    def test_unknown_key(self):
        result = runner.invoke(app, ["config", "bogus", "1"])

        assert result.exit_code == 1
        assert "Unknown config key" in result.output

    def test_missing_value(self):
        result = runner.invoke(app, ["config", "cursor_glyph"])

        assert result.exit_code == 1
