"""Frame renderer: paints the selection state onto a terminal backend."""

from tickbox.backend import TerminalBackend
from tickbox.layout import available_width, layout_text
from tickbox.state import SelectionState
from tickbox.theme import Theme

HEADER_PREFIX = "Select one or more"
FOOTER_MSG = "Move cursor with standard directionals; Select with SPACE; confirm with ENTER"

# Frame geometry
ORIGIN_COLUMN = 2
ORIGIN_ROW = 1
OPTION_TEXT_OFFSET = 2  # Option text starts after the cursor glyph


def header_text(item_description: str) -> str:
    return f"{HEADER_PREFIX} {item_description}:"


class FrameRenderer:
    """Draws header, options, footer and error line for a SelectionState."""

    def __init__(self, backend: TerminalBackend, theme: Theme | None = None):
        self._backend = backend
        self.theme = theme or Theme()

    def render(self, state: SelectionState) -> None:
        """Redraw the whole frame from the current state."""
        theme = self.theme
        self._backend.clear_screen(theme.option, theme.background)
        self._backend.hide_cursor()

        x = ORIGIN_COLUMN
        y = self._print(x, ORIGIN_ROW, header_text(state.item_description), theme.header)
        y += 1
        y = self._print_options(x, y, state)
        y += 1
        y = self._print(x, y, FOOTER_MSG, theme.header)
        y += 1

        if state.error_message:
            self._print(x, y, state.error_message, theme.error)

        self._backend.flush()

    def _print_options(self, x: int, y: int, state: SelectionState) -> int:
        theme = self.theme
        for i, option in enumerate(state.options):
            style = theme.selected if state.selections[i] else theme.option
            if i == state.cursor:
                self._backend.set_cell(x, y, theme.cursor_glyph, theme.cursor, theme.background)
            y = self._print(x + OPTION_TEXT_OFFSET, y, option, style)
        return y

    def _print(self, x: int, y: int, text: str, style: str) -> int:
        terminal_width, _ = self._backend.size()
        # Terminals too narrow for any text degrade to one character per row
        width = max(1, available_width(terminal_width, x))
        placement = layout_text(x, y, text, width)
        for char, (column, row) in zip(text, placement.cells):
            self._backend.set_cell(column, row, char, style, self.theme.background)
        return placement.next_row
