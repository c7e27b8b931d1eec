"""Column-grid geometry for the picker.

Items fill columns top to bottom: column ``c`` holds the linear indexes
``[c * items_per_column, (c + 1) * items_per_column)``. All columns share one
row window, so a single scroll offset applies to the whole grid.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

MIN_COLUMN_WIDTH = 40
MAX_COLUMNS = 4
COLUMN_GAP = 2
# Top border, header, stats row, separator, bottom border.
FIXED_HEADER_ROWS = 5
# "│ " on the left and " │" on the right.
BOX_HORIZONTAL_CHROME = 4


@dataclass(frozen=True)
class GridLayout:
    terminal_width: int
    terminal_height: int
    column_count: int
    items_per_column: int
    column_widths: tuple[int, ...]
    visible_rows_per_column: int
    scroll_offset: int = 0

    @property
    def max_scroll_offset(self) -> int:
        return max(0, self.items_per_column - self.visible_rows_per_column)


def _column_widths(terminal_width: int, column_count: int) -> tuple[int, ...]:
    inner = max(1, terminal_width - BOX_HORIZONTAL_CHROME)
    available = max(column_count, inner - COLUMN_GAP * (column_count - 1))
    base, extra = divmod(available, column_count)
    return tuple(max(1, base + (1 if idx < extra else 0)) for idx in range(column_count))


def compute_layout(
    terminal_width: int,
    terminal_height: int,
    item_count: int,
    *,
    min_column_width: int = MIN_COLUMN_WIDTH,
    max_columns: int = MAX_COLUMNS,
) -> GridLayout:
    """Derive the grid for a terminal size and item count.

    Every input, including a 1x1 terminal and zero items, yields a layout with
    at least one column and one visible row.
    """
    width = max(1, terminal_width)
    height = max(1, terminal_height)
    count = max(0, item_count)
    if count == 0:
        column_count = 1
    else:
        column_count = max(1, min(max(1, max_columns), width // max(1, min_column_width)))
    items_per_column = -(-count // column_count)
    return GridLayout(
        terminal_width=width,
        terminal_height=height,
        column_count=column_count,
        items_per_column=items_per_column,
        column_widths=_column_widths(width, column_count),
        visible_rows_per_column=max(1, height - FIXED_HEADER_ROWS),
    )


def column_range(layout: GridLayout, item_count: int, column: int) -> range:
    """Return the linear indexes shown in ``column`` (possibly empty)."""
    start = min(item_count, column * layout.items_per_column)
    stop = min(item_count, start + layout.items_per_column)
    return range(start, stop)


def column_of(layout: GridLayout, index: int) -> int:
    if layout.items_per_column <= 0:
        return 0
    return index // layout.items_per_column


def row_of(layout: GridLayout, index: int) -> int:
    if layout.items_per_column <= 0:
        return 0
    return index % layout.items_per_column


def scroll_to_row(layout: GridLayout, row: int) -> GridLayout:
    """Move the scroll offset minimally so ``row`` is inside the window."""
    offset = layout.scroll_offset
    visible = layout.visible_rows_per_column
    if row < offset:
        offset = row
    elif row >= offset + visible:
        offset = row - visible + 1
    offset = max(0, min(offset, layout.max_scroll_offset))
    if offset == layout.scroll_offset:
        return layout
    return replace(layout, scroll_offset=offset)


def relayout(
    previous: GridLayout | None,
    terminal_width: int,
    terminal_height: int,
    item_count: int,
    cursor_index: int,
    **limits: int,
) -> GridLayout:
    """Recompute geometry for a new size, keeping the old offset where valid."""
    fresh = compute_layout(terminal_width, terminal_height, item_count, **limits)
    if previous is not None:
        fresh = replace(fresh, scroll_offset=max(0, min(previous.scroll_offset, fresh.max_scroll_offset)))
    return scroll_to_row(fresh, row_of(fresh, cursor_index))
