"""ANSI-aware text measurement and cell padding.

The grid renderer styles labels before fitting them into fixed-width cells,
so clipping and padding must skip escape sequences when counting columns.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
RESET = "\033[0m"
_WIDE_EAST_ASIAN = frozenset({"W", "F"})


def char_display_width(ch: str) -> int:
    """Columns one character occupies: 0 for combining marks, 2 for wide CJK."""
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in _WIDE_EAST_ASIAN else 1


def _segments(text: str) -> Iterator[tuple[bool, str]]:
    """Split ``text`` into ``(is_escape, chunk)`` pairs, in order."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        if match.start() > pos:
            yield False, text[pos : match.start()]
        yield True, match.group(0)
        pos = match.end()
    if pos < len(text):
        yield False, text[pos:]


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Keep at most ``max_cols`` visible columns of a styled line.

    Escapes before the cut are kept; if any were kept, a reset is appended so
    the style cannot leak into the next cell.
    """
    if max_cols <= 0:
        return ""
    pieces: list[str] = []
    used = 0
    for is_escape, chunk in _segments(text):
        if used >= max_cols:
            break
        if is_escape:
            pieces.append(chunk)
            continue
        for ch in chunk:
            width = char_display_width(ch)
            if used + width > max_cols:
                # A wide character straddling the edge ends the line.
                used = max_cols
                break
            pieces.append(ch)
            used += width
    clipped = "".join(pieces)
    if "\x1b" in clipped and not clipped.endswith(RESET):
        clipped += RESET
    return clipped


def fit_ansi_cell(text: str, width: int) -> str:
    """Clip then right-pad ``text`` so it occupies exactly ``width`` columns."""
    if width <= 0:
        return ""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * (width - display_width(clipped))
