"""Raw-mode and alternate-screen handling for the picker.

Keys are read from ``key_fd`` and frames go to ``frame_fd``. Both are the
same ``/dev/tty`` descriptor when stdin or stdout is redirected.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

# Alternate screen on, cursor hidden; EXIT_SEQUENCE undoes both.
ENTER_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
EXIT_SEQUENCE = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Saves tty attributes up front and restores them when the picker ends."""

    def __init__(self, key_fd: int, frame_fd: int) -> None:
        self.key_fd = key_fd
        self.frame_fd = frame_fd
        self._saved_attrs = termios.tcgetattr(key_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.key_fd, termios.TCSAFLUSH)
        os.write(self.frame_fd, ENTER_SEQUENCE)

    def disable_tui_mode(self) -> None:
        """Leave the alternate screen, then put the saved attributes back."""
        os.write(self.frame_fd, EXIT_SEQUENCE)
        termios.tcsetattr(self.key_fd, termios.TCSAFLUSH, self._saved_attrs)

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the body in raw mode; the terminal is restored even on errors."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()
