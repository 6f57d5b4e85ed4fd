"""Pytest fixtures for tickbox tests."""

import pytest

from tickbox.backend import BackendFailure


class ScriptedTerminal:
    """Terminal double: replays scripted events and records drawn cells."""

    def __init__(self, events=(), width=120, height=24, fail_init=False):
        self.events = list(events)
        self.width = width
        self.height = height
        self.fail_init = fail_init
        self.initialized = 0
        self.released = 0
        self.cursor_hidden = False
        self.cells: dict[tuple[int, int], tuple[str, str]] = {}
        self.frames: list[dict[tuple[int, int], tuple[str, str]]] = []

    def initialize(self):
        if self.fail_init:
            raise BackendFailure("no terminal available")
        self.initialized += 1

    def release(self):
        self.released += 1

    def poll_event(self):
        if not self.events:
            raise RuntimeError("scripted terminal ran out of events")
        return self.events.pop(0)

    def clear_screen(self, fg, bg):
        self.cells = {}

    def set_cell(self, column, row, char, fg, bg):
        self.cells[(column, row)] = (char, fg)

    def hide_cursor(self):
        self.cursor_hidden = True

    def flush(self):
        self.frames.append(dict(self.cells))

    def size(self):
        return self.width, self.height

    def row_text(self, row, frame=None):
        """Text of one row of a frame (latest by default), trailing blanks removed."""
        cells = self.frames[-1] if frame is None else self.frames[frame]
        columns = {col: char for (col, r), (char, _) in cells.items() if r == row}
        if not columns:
            return ""
        return "".join(columns.get(c, " ") for c in range(max(columns) + 1)).rstrip()

    def screen_text(self, frame=None):
        cells = self.frames[-1] if frame is None else self.frames[frame]
        last_row = max((r for _, r in cells), default=-1)
        return "\n".join(self.row_text(r, frame) for r in range(last_row + 1))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config at a temp dir and clear the config cache around each test."""
    from tickbox.config import clear_config_cache

    monkeypatch.setenv("TICKBOX_CONFIG_DIR", str(tmp_path / "config"))
    clear_config_cache()

    yield tmp_path / "config"

    clear_config_cache()


@pytest.fixture
def terminal_factory():
    """Return the ScriptedTerminal class for building scripted backends."""
    return ScriptedTerminal
