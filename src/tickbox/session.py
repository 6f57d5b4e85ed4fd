"""Interactive selection session and the prompt() entry point."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from tickbox.backend import BackendFailure, RichTerminal, TerminalBackend
from tickbox.keymap import build_keymap, resolve_action
from tickbox.models import BackendError, PromptResult
from tickbox.renderer import FrameRenderer
from tickbox.state import SelectionState
from tickbox.theme import Theme

if TYPE_CHECKING:
    from tickbox.config import Config

logger = logging.getLogger("tickbox.session")


class SelectionSession:
    """One run of the widget: owns the backend for the duration of run()."""

    def __init__(
        self,
        options: Sequence[str],
        item_description: str = "",
        backend: TerminalBackend | None = None,
        config: Config | None = None,
    ):
        if config is None:
            from tickbox.config import Config

            config = Config.load()
        self.state = SelectionState(options, item_description)
        self.backend = backend or RichTerminal()
        self.keymap = build_keymap(vim_keys=config.vim_keys, emacs_keys=config.emacs_keys)
        self.renderer = FrameRenderer(self.backend, Theme.from_config(config))

    def run(self) -> PromptResult:
        """Run until the user confirms or cancels.

        Returns:
            PromptResult with the selection flags at the time the session ended.

        Raises:
            BackendFailure: If the terminal can't be acquired or fails while waiting
                for input. The terminal is released first if it was acquired.
        """
        state = self.state
        if not state.options:
            logger.warning("selection session started with no options; only abort can end it")
        logger.debug("starting session with %d options", len(state.options))

        self.backend.initialize()
        try:
            self.renderer.render(state)
            while not state.is_finished:
                event = self.backend.poll_event()
                if isinstance(event, BackendError):
                    logger.error("terminal backend failed: %s", event.cause)
                    raise BackendFailure(f"terminal backend failed: {event.cause}") from event.cause
                state.handle(resolve_action(event, self.keymap))
                self.renderer.render(state)
        finally:
            self.backend.release()

        logger.debug("session ended: %s", state.state.value)
        return state.result()


def prompt(
    options: Sequence[str],
    item_description: str,
    *,
    backend: TerminalBackend | None = None,
    config: Config | None = None,
) -> list[bool] | None:
    """Let the user pick one or more options.

    Returns:
        One flag per option when the user confirmed, or None when they aborted.
        Toggles made before aborting are discarded.
    """
    result = SelectionSession(options, item_description, backend, config).run()
    if result.cancelled:
        return None
    return result.selections


def select_options(
    options: Sequence[str],
    item_description: str,
    *,
    backend: TerminalBackend | None = None,
    config: Config | None = None,
) -> list[str] | None:
    """Like prompt(), but return the chosen labels instead of flags."""
    selections = prompt(options, item_description, backend=backend, config=config)
    if selections is None:
        return None
    return [opt for opt, selected in zip(options, selections) if selected]
