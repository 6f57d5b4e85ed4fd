"""tickbox - pick one or more options from a list in the terminal."""

__version__ = "0.1.0"

from tickbox.backend import BackendFailure, RichTerminal, TerminalBackend, TickboxError
from tickbox.models import Action, PromptResult, SessionState
from tickbox.session import SelectionSession, prompt, select_options
from tickbox.state import SelectionState

__all__ = [
    "Action",
    "BackendFailure",
    "PromptResult",
    "RichTerminal",
    "SelectionSession",
    "SelectionState",
    "SessionState",
    "TerminalBackend",
    "TickboxError",
    "prompt",
    "select_options",
]
