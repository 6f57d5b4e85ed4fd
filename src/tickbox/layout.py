"""Text placement for wrapped labels."""

from tickbox.models import Placement

CONTINUATION_INDENT = 2  # Extra columns for wrapped continuation rows
RIGHT_MARGIN = 3  # Columns kept free on the right edge


def available_width(terminal_width: int, origin_column: int) -> int:
    """Width left for text starting at origin_column.

    May be zero or negative on very narrow terminals; callers must not pass
    such a value to layout_text.
    """
    return terminal_width - origin_column - RIGHT_MARGIN


def layout_text(origin_column: int, origin_row: int, text: str, width: int) -> Placement:
    """Place text left-to-right, wrapping every `width` characters.

    Args:
        origin_column: Column of the first character
        origin_row: Row of the first character
        text: Characters to place
        width: Characters per row (must be >= 1)

    Returns:
        Placement with one (column, row) per character and the row below the text.
        Empty text places nothing but still reserves one row.
    """
    if width < 1:
        raise ValueError(f"layout width must be at least 1, got {width}")

    cells: list[tuple[int, int]] = []
    row = origin_row
    for i in range(len(text)):
        row = origin_row + i // width
        column = origin_column + i % width
        if row > origin_row:
            column += CONTINUATION_INDENT
        cells.append((column, row))

    return Placement(cells=cells, next_row=row + 1)

