"""Selection state machine."""

from collections.abc import Sequence

from tickbox.models import Action, PromptResult, SessionState

CONFIRM_REJECTED_MSG = "Make a selection before continuing!"


class SelectionState:
    """Cursor, selection flags and validation message for one session.

    This is the only writer of that state. Renderers read it through the
    public attributes and never assign to them.

    Example:
        state = SelectionState(["apple", "banana"], "fruit")
        state.handle(Action.TOGGLE)
        state.handle(Action.CONFIRM)
        state.result().selections  # [True, False]
    """

    def __init__(self, options: Sequence[str], item_description: str = ""):
        self.options: tuple[str, ...] = tuple(options)
        self.item_description = item_description
        self.selections: list[bool] = [False] * len(self.options)
        self.cursor = 0
        self.error_message = ""
        self.state = SessionState.ACTIVE

    @property
    def any_selected(self) -> bool:
        return any(self.selections)

    @property
    def is_finished(self) -> bool:
        return self.state.is_terminal

    def move_cursor_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_cursor_down(self) -> None:
        if self.cursor < len(self.options) - 1:
            self.cursor += 1

    def toggle_under_cursor(self) -> None:
        if not self.options:
            return
        self.selections[self.cursor] = not self.selections[self.cursor]

    def attempt_confirm(self) -> None:
        """Finish the session, unless nothing is selected yet."""
        if self.any_selected:
            self.state = SessionState.CONFIRMED
        else:
            self.error_message = CONFIRM_REJECTED_MSG

    def cancel(self) -> None:
        self.state = SessionState.CANCELLED

    def handle(self, action: Action | None) -> None:
        """Apply one logical input event.

        The previous error message is cleared first, whichever branch runs.
        Unrecognized input (None) only clears the message. Input after the
        session has finished is ignored.
        """
        if self.is_finished:
            return
        self.error_message = ""

        if action in (Action.ABORT, Action.QUIT):
            self.cancel()
        elif action is Action.CONFIRM:
            self.attempt_confirm()
        elif action is Action.CURSOR_UP:
            self.move_cursor_up()
        elif action is Action.CURSOR_DOWN:
            self.move_cursor_down()
        elif action is Action.TOGGLE:
            self.toggle_under_cursor()

    def result(self) -> PromptResult:
        return PromptResult(selections=list(self.selections), state=self.state)
