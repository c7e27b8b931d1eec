"""Frame composition for the picker.

``build_frame`` is a pure function of session state and theme; it returns the
screen rows. ``render_frame`` joins them and writes the whole frame with one
``os.write`` call so a partially drawn screen is never visible.
"""

from __future__ import annotations

import os
import sys

from .ansi import clip_ansi_line, fit_ansi_cell
from .layout import BOX_HORIZONTAL_CHROME, COLUMN_GAP, FIXED_HEADER_ROWS
from .registry import Item
from .session import PickerSession
from .ui_theme import PickerTheme

TITLE = "gridpick"
MIN_BOX_WIDTH = 12
EMPTY_LIST_TEXT = "(no items)"
INDICATOR_ON = "[x]"
INDICATOR_OFF = "[ ]"


def header_text(select_all_key: str) -> str:
    return (
        'Select files (Use "Space" to select; '
        f'"{select_all_key}" to select all files; '
        'arrows to move between rows and columns; "Enter" to confirm; "Esc" to cancel):'
    )


def stats_text(session: PickerSession, theme: PickerTheme) -> str:
    stats = session.stats
    parts = [
        f"{theme.stats}Total characters in selected files: {stats.total_characters} ; "
        f"selected files: {stats.enabled_count}{theme.reset}"
    ]
    if stats.first_ignored_enabled_id is not None:
        parts.append(
            f"{theme.warning}Attention file selected from ignore list: "
            f"{stats.first_ignored_enabled_id}{theme.reset}"
        )
    if stats.unreadable_ids:
        parts.append(f"{theme.error}unreadable: {len(stats.unreadable_ids)}{theme.reset}")
    if session.status_message:
        parts.append(f"{theme.warning}{session.status_message}{theme.reset}")
    return " ; ".join(parts)


def _indicator(item: Item, ignored: bool, theme: PickerTheme) -> str:
    if not item.enabled:
        return INDICATOR_OFF
    style = theme.indicator_ignored if ignored else theme.indicator_enabled
    return f"{style}{INDICATOR_ON}{theme.reset}"


def format_cell(item: Item, ignored: bool, width: int, theme: PickerTheme, *, is_cursor: bool) -> str:
    """Render one grid cell padded to ``width`` columns."""
    if is_cursor:
        mark = INDICATOR_ON if item.enabled else INDICATOR_OFF
        return f"{theme.cursor}{fit_ansi_cell(f'{mark} {item.label}', width)}\033[0m"
    label_style = theme.style_for_category(item.category)
    text = f"{_indicator(item, ignored, theme)} {label_style}{item.label}{theme.reset}"
    return fit_ansi_cell(text, width)


def grid_rows(session: PickerSession, theme: PickerTheme, inner_width: int) -> list[str]:
    """Return the visible grid rows, each exactly ``inner_width`` wide."""
    layout = session.layout
    items = session.items
    if not items:
        return [fit_ansi_cell(EMPTY_LIST_TEXT, inner_width)]

    gap = " " * COLUMN_GAP
    first_row = layout.scroll_offset
    last_row = min(layout.items_per_column, first_row + layout.visible_rows_per_column)
    rows: list[str] = []
    for row in range(first_row, last_row):
        cells: list[str] = []
        for column, width in enumerate(layout.column_widths):
            index = column * layout.items_per_column + row
            if index >= len(items):
                cells.append(" " * width)
                continue
            item = items[index]
            cells.append(
                format_cell(
                    item,
                    session.is_ignored(item.id),
                    width,
                    theme,
                    is_cursor=index == session.cursor.selected_index,
                )
            )
        rows.append(fit_ansi_cell(gap.join(cells), inner_width))
    return rows


def _horizontal(left: str, right: str, width: int, theme: PickerTheme, title: str = "") -> str:
    fill = max(0, width - 2)
    label = f"─ {title} " if title and len(title) + 3 <= fill else ""
    body = label + "─" * (fill - len(label))
    return f"{theme.border}{left}{body}{right}{theme.reset}"


def _boxed(text: str, inner_width: int, theme: PickerTheme) -> str:
    side = f"{theme.border}│{theme.reset}"
    return f"{side} {fit_ansi_cell(text, inner_width)} {side}"


def build_frame(session: PickerSession, theme: PickerTheme) -> list[str]:
    """Compose all screen rows for the current session state.

    Terminals too small for the box get the bare grid rows only, clipped to
    the available width and height.
    """
    width = session.layout.terminal_width
    height = session.layout.terminal_height
    if width < MIN_BOX_WIDTH or height < FIXED_HEADER_ROWS + 1:
        rows = grid_rows(session, theme, width)
        return [clip_ansi_line(row, width) for row in rows[:height]]

    inner = width - BOX_HORIZONTAL_CHROME
    lines = [
        _horizontal("┌", "┐", width, theme, TITLE),
        _boxed(f"{theme.header}{header_text(session.select_all_key)}{theme.reset}", inner, theme),
        _boxed(stats_text(session, theme), inner, theme),
        _horizontal("├", "┤", width, theme),
    ]
    lines.extend(_boxed(row, inner, theme) for row in grid_rows(session, theme, inner))
    lines.append(_horizontal("└", "┘", width, theme))
    return lines


def render_frame(session: PickerSession, theme: PickerTheme, fd: int | None = None) -> None:
    """Write the full frame to ``fd`` (stdout by default) in one call."""
    out = "\033[H\033[J" + "\r\n".join(build_frame(session, theme))
    os.write(sys.stdout.fileno() if fd is None else fd, out.encode("utf-8", errors="replace"))
    session.dirty = False
