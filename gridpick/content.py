"""Content length probing for selected items.

The picker only needs a character count per path; the text itself is
discarded immediately.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

ContentReader = Callable[[str], int]


class ContentReadError(Exception):
    """Raised when an item's content cannot be read."""

    def __init__(self, item_id: str, reason: str) -> None:
        super().__init__(f"{item_id}: {reason}")
        self.item_id = item_id
        self.reason = reason


def read_text(path: Path) -> str:
    """Decode a file as UTF-8, UTF-8 with BOM, or latin-1, in that order.

    The last resort is UTF-8 with replacement characters, so only I/O errors
    escape.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def make_file_reader(base_dir: Path | None = None) -> ContentReader:
    """Return a reader resolving item ids relative to ``base_dir``."""

    def read_character_count(item_id: str) -> int:
        path = Path(item_id)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        try:
            return len(read_text(path))
        except OSError as exc:
            raise ContentReadError(item_id, exc.strerror or str(exc)) from exc

    return read_character_count


read_character_count = make_file_reader()
