"""Raw key decoding for the picker.

Bytes from the tty are turned into key tokens: ``"UP"``, ``"SPACE"``,
``"ESC"``, ``"CTRL_C"`` and so on for special keys, and the character itself
for printable input. A lone Escape resolves after a short wait instead of
blocking for the next key.
"""

from __future__ import annotations

import codecs
import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
# Any escape sequence other than an arrow (Home, PgUp, F-keys, Ctrl+arrows).
UNKNOWN_KEY = "UNKNOWN"
# Bytes read while resolving an escape that belong to the next key.
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b" ": "SPACE",
}

_ARROW_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _wait_byte(fd: int, timeout_ms: int | None) -> bytes | None:
    """Read one byte, waiting at most ``timeout_ms`` (forever when ``None``)."""
    if timeout_ms is not None:
        readable, _, _ = select.select([fd], [], [], max(0, timeout_ms) / 1000.0)
        if not readable:
            return None
    data = os.read(fd, 1)
    return data or None


def _finish_utf8(fd: int, lead: bytes) -> str:
    """Complete a multi-byte UTF-8 character whose first byte was ``lead``."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    text = decoder.decode(lead)
    while not text:
        more = _wait_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if more is None:
            return decoder.decode(b"", final=True)
        text = decoder.decode(more)
    return text


def _decode_escape(fd: int) -> str:
    introducer = _wait_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if introducer is None:
        return "ESC"
    if introducer not in (b"[", b"O"):
        _PENDING_BYTES.append(introducer)
        return "ESC"
    final = _wait_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final in _ARROW_KEYS:
        return _ARROW_KEYS[final]
    # Unknown sequence: consume parameter bytes up to the final byte.
    while final is not None and not b"@" <= final <= b"~":
        final = _wait_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return UNKNOWN_KEY


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` if ``timeout_ms`` passes first."""
    if _PENDING_BYTES:
        first: bytes | None = _PENDING_BYTES.pop(0)
    else:
        first = _wait_byte(fd, timeout_ms)
    if first is None:
        return ""
    if first == b"\x1b":
        return _decode_escape(fd)
    named = _CONTROL_KEYS.get(first)
    if named is not None:
        return named
    return _finish_utf8(fd, first)
