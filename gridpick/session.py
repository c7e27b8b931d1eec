"""Picker session state and its single update function.

The session owns the item registry, grid layout, cursor, and derived stats.
Key presses, terminal resizes, and ignore-rule loads all arrive as messages
to :meth:`PickerSession.update`, which mutates state, reads any newly needed
sizes, recomputes stats, and marks the frame dirty. Rendering happens outside
this module, after ``update`` returns.
"""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .content import ContentReader, read_character_count
from .ignore_rules import EMPTY_RULES, IgnoreRuleSet, IgnoreRulesLoaded
from .keys import (
    CANCEL_KEYS,
    DEFAULT_SELECT_ALL_KEY,
    MOVE_DOWN_KEYS,
    MOVE_LEFT_KEYS,
    MOVE_RIGHT_KEYS,
    MOVE_UP_KEYS,
    RESERVED_KEYS,
    SUBMIT_KEYS,
    TOGGLE_KEYS,
    KeyBinding,
    KeyDispatcher,
)
from .layout import (
    MAX_COLUMNS,
    MIN_COLUMN_WIDTH,
    column_of,
    column_range,
    relayout,
    row_of,
    scroll_to_row,
)
from .registry import Item, ItemRegistry
from .stats import SelectionStats, populate_sizes, recompute

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 4.0


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


Message = KeyPressed | Resized | IgnoreRulesLoaded


class Outcome(enum.Enum):
    CONTINUE = "continue"
    SUBMIT = "submit"
    CANCEL = "cancel"


@dataclass
class CursorState:
    """Cursor position; ``active_column`` always follows ``selected_index``."""

    active_column: int = 0
    selected_index: int = 0


class PickerSession:
    """Mutable state for one picker run."""

    def __init__(
        self,
        paths: Iterable[str],
        width: int,
        height: int,
        *,
        reader: ContentReader = read_character_count,
        rules: IgnoreRuleSet = EMPTY_RULES,
        min_column_width: int = MIN_COLUMN_WIDTH,
        max_columns: int = MAX_COLUMNS,
        select_all_key: str = DEFAULT_SELECT_ALL_KEY,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.registry = ItemRegistry(paths)
        self.reader = reader
        self.rules = rules
        if select_all_key in RESERVED_KEYS:
            select_all_key = DEFAULT_SELECT_ALL_KEY
        self.select_all_key = select_all_key
        self._limits = {"min_column_width": min_column_width, "max_columns": max_columns}
        self._clock = clock
        self.cursor = CursorState()
        self.layout = relayout(None, width, height, len(self.registry), 0, **self._limits)
        self.stats = SelectionStats()
        self.status_message = ""
        self.status_message_until = 0.0
        self.dirty = True
        self.outcome = Outcome.CONTINUE
        self._keys = KeyDispatcher().register(
            KeyBinding(MOVE_DOWN_KEYS, self.move_down),
            KeyBinding(MOVE_UP_KEYS, self.move_up),
            KeyBinding(MOVE_RIGHT_KEYS, lambda: self.move_column(1)),
            KeyBinding(MOVE_LEFT_KEYS, lambda: self.move_column(-1)),
            KeyBinding(TOGGLE_KEYS, self.toggle_current),
            KeyBinding((select_all_key,), self.toggle_all),
            KeyBinding(SUBMIT_KEYS, lambda: self._finish(Outcome.SUBMIT)),
            KeyBinding(CANCEL_KEYS, lambda: self._finish(Outcome.CANCEL)),
        )

    @property
    def items(self) -> list[Item]:
        return self.registry.items

    def is_ignored(self, item_id: str) -> bool:
        return self.rules.matches(item_id)

    def result(self) -> list[str] | None:
        """Return enabled ids after submission, ``None`` after cancellation."""
        if self.outcome is Outcome.SUBMIT:
            return self.registry.enabled_ids()
        return None

    def update(self, message: Message) -> Outcome:
        """Apply one message and report whether the session should end."""
        if self.outcome is not Outcome.CONTINUE:
            return self.outcome
        if isinstance(message, KeyPressed):
            if self._keys.dispatch(message.key):
                self.dirty = True
        elif isinstance(message, Resized):
            self.resize(message.width, message.height)
        elif isinstance(message, IgnoreRulesLoaded):
            self.apply_rules(message.rules, message.warning)
        return self.outcome

    def tick(self) -> None:
        """Expire the status message once its display time has passed."""
        if self.status_message and self._clock() >= self.status_message_until:
            self.status_message = ""
            self.status_message_until = 0.0
            self.dirty = True

    def set_status_message(self, message: str) -> None:
        self.status_message = message
        self.status_message_until = self._clock() + STATUS_MESSAGE_SECONDS
        self.dirty = True

    def _finish(self, outcome: Outcome) -> bool:
        self.outcome = outcome
        return True

    def _move_to(self, index: int) -> bool:
        if index == self.cursor.selected_index:
            return False
        self.cursor.selected_index = index
        self.cursor.active_column = column_of(self.layout, index)
        self._scroll_to_cursor()
        return True

    def _scroll_to_cursor(self) -> None:
        self.layout = scroll_to_row(self.layout, row_of(self.layout, self.cursor.selected_index))

    def _current_column_range(self) -> range:
        return column_range(self.layout, len(self.registry), self.cursor.active_column)

    def move_down(self) -> bool:
        span = self._current_column_range()
        if self.cursor.selected_index + 1 >= span.stop:
            return False
        return self._move_to(self.cursor.selected_index + 1)

    def move_up(self) -> bool:
        span = self._current_column_range()
        if self.cursor.selected_index <= span.start:
            return False
        return self._move_to(self.cursor.selected_index - 1)

    def move_column(self, delta: int) -> bool:
        """Jump to the same row in a neighbouring column.

        When the target column is shorter, the cursor lands on its last item.
        Moving into a column with no items does nothing.
        """
        target = self.cursor.active_column + delta
        if target < 0 or target >= self.layout.column_count:
            return False
        span = column_range(self.layout, len(self.registry), target)
        if not span:
            return False
        row = row_of(self.layout, self.cursor.selected_index)
        return self._move_to(min(span.start + row, span.stop - 1))

    def toggle_current(self) -> bool:
        if not 0 <= self.cursor.selected_index < len(self.registry):
            return False
        self._after_toggle(self.registry.toggle(self.cursor.selected_index))
        return True

    def toggle_all(self) -> bool:
        if not len(self.registry):
            return False
        self._after_toggle(self.registry.toggle_all())
        return True

    def _after_toggle(self, newly_enabled: list[Item]) -> None:
        failures = populate_sizes(newly_enabled, self.reader)
        if failures:
            noun = "file" if failures == 1 else "files"
            self.set_status_message(f"Error reading {failures} {noun}; see log")
        self.recompute_stats()

    def recompute_stats(self) -> None:
        self.stats = recompute(self.registry, self.is_ignored)
        self.dirty = True

    def resize(self, width: int, height: int) -> bool:
        """Recompute layout for a new terminal size; selection is untouched."""
        width, height = max(1, width), max(1, height)
        if (width, height) == (self.layout.terminal_width, self.layout.terminal_height):
            return False
        self.layout = relayout(
            self.layout,
            width,
            height,
            len(self.registry),
            self.cursor.selected_index,
            **self._limits,
        )
        self.cursor.active_column = column_of(self.layout, self.cursor.selected_index)
        self.dirty = True
        return True

    def apply_rules(self, rules: IgnoreRuleSet, warning: str | None = None) -> None:
        self.rules = rules
        logger.debug("loaded %d ignore patterns", len(rules))
        if warning:
            self.set_status_message(warning)
        self.recompute_stats()
