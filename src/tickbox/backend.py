"""Terminal backend: display ownership, key input and cell drawing."""

from __future__ import annotations

import logging
from typing import Protocol

import readchar
from rich.console import Console
from rich.live import Live
from rich.style import Style
from rich.text import Text

from tickbox.models import BackendError, CharPress, Event, Key, KeyPress

logger = logging.getLogger("tickbox.backend")


class TickboxError(Exception):
    """Base class for tickbox errors."""

    pass


class BackendFailure(TickboxError):
    """Raised when the terminal cannot be acquired or fails mid-session."""

    pass


class TerminalBackend(Protocol):
    """Protocol for swappable terminal implementations."""

    def initialize(self) -> None:
        """Take over the display. Raises BackendFailure if that is not possible."""
        ...

    def release(self) -> None:
        """Give the display back. Called once per successful initialize()."""
        ...

    def poll_event(self) -> Event:
        """Block until the next key press or backend error."""
        ...

    def clear_screen(self, fg: str, bg: str) -> None: ...

    def set_cell(self, column: int, row: int, char: str, fg: str, bg: str) -> None: ...

    def hide_cursor(self) -> None: ...

    def flush(self) -> None: ...

    def size(self) -> tuple[int, int]:
        """Return (width, height) in cells."""
        ...


_NAMED_KEYS: dict[str, Key] = {
    readchar.key.UP: Key.UP,
    readchar.key.DOWN: Key.DOWN,
    readchar.key.SPACE: Key.SPACE,
    readchar.key.ENTER: Key.ENTER,
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    readchar.key.ESC: Key.ESC,
    readchar.key.CTRL_C: Key.CTRL_C,
    "\x10": Key.CTRL_P,
    "\x0e": Key.CTRL_N,
}


ESCAPE_SEQUENCE_PREFIXES = ("\x1b[", "\x1bO")


def decode_key(raw: str) -> CharPress | KeyPress:
    """Convert a key string from readchar into an event.

    On POSIX readchar reads one more byte after ESC, so a lone Esc press arrives
    as ESC followed by whatever was typed next. Anything starting with ESC
    that is not a CSI/SS3 sequence is treated as Esc.
    """
    if raw in _NAMED_KEYS:
        return KeyPress(_NAMED_KEYS[raw])
    if raw.startswith("\x1b") and not raw.startswith(ESCAPE_SEQUENCE_PREFIXES):
        return KeyPress(Key.ESC)
    if len(raw) == 1 and raw.isprintable():
        return CharPress(raw)
    return KeyPress(Key.UNKNOWN)


class RichTerminal:
    """Rich + readchar implementation.

    Cells are collected in memory and shown on flush() through a Live display
    on the alternate screen. Keys come from readchar.
    """

    def __init__(self, console: Console | None = None, screen: bool = True):
        self._console = console or Console()
        self._screen = screen
        self._live: Live | None = None
        self._cells: dict[tuple[int, int], tuple[str, Style]] = {}
        self._blank = Style()

    def initialize(self) -> None:
        if not self._console.is_terminal:
            raise BackendFailure("stdout is not a terminal")
        live = Live(
            Text(),
            console=self._console,
            screen=self._screen,
            auto_refresh=False,
            transient=True,
        )
        try:
            live.start()
        except OSError as e:
            raise BackendFailure(f"could not start terminal display: {e}") from e
        self._live = live
        logger.debug("terminal acquired (%dx%d)", *self.size())

    def release(self) -> None:
        if self._live is None:
            return
        self._live.stop()
        self._live = None
        self._console.show_cursor(True)
        logger.debug("terminal released")

    def poll_event(self) -> Event:
        try:
            raw = readchar.readkey()
        except KeyboardInterrupt:
            return KeyPress(Key.CTRL_C)
        except Exception as e:  # surfaced to the session as a BackendError event
            return BackendError(e)
        return decode_key(raw)

    def clear_screen(self, fg: str, bg: str) -> None:
        self._cells.clear()
        self._blank = Style.parse(fg) + Style(bgcolor=bg)

    def set_cell(self, column: int, row: int, char: str, fg: str, bg: str) -> None:
        self._cells[(column, row)] = (char, Style.parse(fg) + Style(bgcolor=bg))

    def hide_cursor(self) -> None:
        self._console.show_cursor(False)

    def flush(self) -> None:
        if self._live is None:
            return
        self._live.update(self.compose(), refresh=True)

    def size(self) -> tuple[int, int]:
        width, height = self._console.size
        return width, height

    def compose(self) -> Text:
        """Build the current frame as styled text, one line per row."""
        text = Text(end="")
        if not self._cells:
            return text
        last_row = max(row for _, row in self._cells)
        for row in range(last_row + 1):
            columns = [col for col, r in self._cells if r == row]
            for column in range(max(columns) + 1 if columns else 0):
                char, style = self._cells.get((column, row), (" ", self._blank))
                text.append(char, style)
            if row < last_row:
                text.append("\n")
        return text
