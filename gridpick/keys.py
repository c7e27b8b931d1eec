"""Key-token dispatch table for the picker."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

MOVE_DOWN_KEYS = ("DOWN", "j")
MOVE_UP_KEYS = ("UP", "k")
MOVE_RIGHT_KEYS = ("RIGHT", "l")
MOVE_LEFT_KEYS = ("LEFT", "h")
TOGGLE_KEYS = ("SPACE",)
SUBMIT_KEYS = ("ENTER",)
CANCEL_KEYS = ("ESC", "q", "CTRL_C")
DEFAULT_SELECT_ALL_KEY = "a"
# Tokens with a fixed binding; the select-all key must not shadow them.
RESERVED_KEYS = frozenset(
    MOVE_DOWN_KEYS + MOVE_UP_KEYS + MOVE_RIGHT_KEYS + MOVE_LEFT_KEYS + TOGGLE_KEYS + SUBMIT_KEYS + CANCEL_KEYS
)


@dataclass(frozen=True)
class KeyBinding:
    """Key tokens that all trigger ``handler``."""

    keys: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyDispatcher:
    """Exact-match key table; later bindings overwrite earlier ones."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register(self, *bindings: KeyBinding) -> KeyDispatcher:
        for binding in bindings:
            for key in binding.keys:
                self._handlers[key] = binding.handler
        return self

    def bound_keys(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def dispatch(self, key: str) -> bool | None:
        """Invoke the handler bound to ``key``; ``None`` when unbound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()
