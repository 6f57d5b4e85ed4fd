"""Data models for tickbox."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum


class SessionState(Enum):
    """Lifecycle state of a selection session."""

    ACTIVE = "active"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not SessionState.ACTIVE


class Key(Enum):
    """Named (non-printable) keys understood by the widget."""

    UP = "up"
    DOWN = "down"
    SPACE = "space"
    ENTER = "enter"
    ESC = "esc"
    CTRL_C = "ctrl_c"
    CTRL_P = "ctrl_p"
    CTRL_N = "ctrl_n"
    UNKNOWN = "unknown"


class Action(Enum):
    """Logical input events, independent of how the terminal encodes keys."""

    CURSOR_UP = "cursor_up"
    CURSOR_DOWN = "cursor_down"
    TOGGLE = "toggle"
    CONFIRM = "confirm"
    ABORT = "abort"
    QUIT = "quit"


@dataclass(frozen=True)
class CharPress:
    """A single printable character was typed."""

    char: str


@dataclass(frozen=True)
class KeyPress:
    """A named key was pressed."""

    key: Key


@dataclass(frozen=True)
class BackendError:
    """The terminal backend failed while waiting for input."""

    cause: Exception


Event = CharPress | KeyPress | BackendError


@dataclass(frozen=True)
class Placement:
    """Where each character of a laid-out string ends up.

    ``cells[i]`` is the absolute ``(column, row)`` of character ``i``;
    ``next_row`` is the first row below the text.
    """

    cells: list[tuple[int, int]]
    next_row: int

    @property
    def rows_used(self) -> int:
        return len({row for _, row in self.cells})


@dataclass
class PromptResult:
    """Outcome of one interactive session."""

    selections: list[bool] = field(default_factory=list)
    state: SessionState = SessionState.ACTIVE

    @property
    def confirmed(self) -> bool:
        return self.state is SessionState.CONFIRMED

    @property
    def cancelled(self) -> bool:
        return self.state is SessionState.CANCELLED

    def chosen(self, options: Sequence[str]) -> list[str]:
        """Return the option labels whose flag is set."""
        return [opt for opt, selected in zip(options, self.selections) if selected]
