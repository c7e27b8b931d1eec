"""Interactive event loop for the picker.

Each iteration folds terminal size changes and a finished ignore-rule load
into the session, renders when dirty, then waits briefly for one key. A key
is fully handled (including size reads) before the next one is read, so
renders never overlap state changes.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Callable, Iterable
from pathlib import Path

from .content import ContentReader, read_character_count
from .ignore_rules import DEFAULT_IGNORE_FILE, IgnoreRulesLoader
from .input import read_key
from .keys import DEFAULT_SELECT_ALL_KEY
from .layout import MAX_COLUMNS, MIN_COLUMN_WIDTH
from .render import render_frame
from .session import KeyPressed, Outcome, PickerSession, Resized
from .terminal import TerminalController
from .ui_theme import DEFAULT_THEME, PickerTheme

logger = logging.getLogger(__name__)

KEY_POLL_TIMEOUT_MS = 120


def terminal_size_reader(fd: int) -> Callable[[tuple[int, int]], os.terminal_size]:
    """Return a size query bound to ``fd`` with a fallback when it is not a tty."""

    def get_terminal_size(fallback: tuple[int, int]) -> os.terminal_size:
        try:
            return os.get_terminal_size(fd)
        except OSError:
            return os.terminal_size(fallback)

    return get_terminal_size


def run_session_loop(
    session: PickerSession,
    loader: IgnoreRulesLoader | None,
    key_fd: int,
    out_fd: int,
    theme: PickerTheme,
    *,
    get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size,
    read_key_fn: Callable[..., str] = read_key,
) -> Outcome:
    """Drive ``session`` until it is submitted or cancelled."""
    while True:
        term = get_terminal_size((80, 24))
        session.update(Resized(term.columns, term.lines))
        if loader is not None:
            loaded = loader.poll()
            if loaded is not None:
                session.update(loaded)
                loader = None
        session.tick()
        if session.dirty:
            render_frame(session, theme, out_fd)

        try:
            key = read_key_fn(key_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
        except KeyboardInterrupt:
            key = "CTRL_C"
        if key == "":
            continue
        outcome = session.update(KeyPressed(key))
        if outcome is not Outcome.CONTINUE:
            return outcome


def run_picker(
    paths: Iterable[str],
    *,
    ignore_file: Path = Path(DEFAULT_IGNORE_FILE),
    theme: PickerTheme = DEFAULT_THEME,
    reader: ContentReader = read_character_count,
    min_column_width: int = MIN_COLUMN_WIDTH,
    max_columns: int = MAX_COLUMNS,
    select_all_key: str = DEFAULT_SELECT_ALL_KEY,
    tty_fd: int | None = None,
) -> list[str] | None:
    """Show the picker and return selected paths, or ``None`` if cancelled.

    ``tty_fd`` is used for both keys and frames; it defaults to stdin for
    input and stdout for output.
    """
    key_fd = sys.stdin.fileno() if tty_fd is None else tty_fd
    out_fd = sys.stdout.fileno() if tty_fd is None else tty_fd
    get_terminal_size = terminal_size_reader(out_fd)
    term = get_terminal_size((80, 24))
    session = PickerSession(
        paths,
        term.columns,
        term.lines,
        reader=reader,
        min_column_width=min_column_width,
        max_columns=max_columns,
        select_all_key=select_all_key,
    )
    logger.info("picker started with %d items", len(session.registry))
    loader = IgnoreRulesLoader(ignore_file)
    loader.start()

    terminal = TerminalController(key_fd, out_fd)
    with terminal.raw_mode():
        outcome = run_session_loop(
            session,
            loader,
            key_fd,
            out_fd,
            theme,
            get_terminal_size=get_terminal_size,
        )
    logger.info("picker finished: %s", outcome.value)
    return session.result()
