"""Command-line front door for gridpick.

Collects candidate paths (arguments, a structure listing, or stdin), then
either prints one rendered frame (``--render``) or runs the interactive
picker and prints the selected paths to stdout.
"""

from __future__ import annotations

import argparse
import contextlib
import os
import shutil
import sys
from pathlib import Path

from . import config
from .content import make_file_reader
from .ignore_rules import IgnoreRuleSet
from .log_setup import DEFAULT_LOG_FILE, setup_logging
from .loop import run_picker
from .render import build_frame
from .session import PickerSession
from .stats import populate_sizes, total_characters
from .structure import StructureError, load_structure_paths, paths_from_lines
from .ui_theme import available_theme_names, resolve_theme

TTY_PATH = "/dev/tty"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Pick a subset of file paths in a multi-column terminal grid."
    )
    parser.add_argument("paths", nargs="*", help="Candidate paths. Read from stdin when omitted and piped.")
    parser.add_argument("--structure", metavar="FILE", help="Project-structure JSON listing to take paths from.")
    parser.add_argument("--base-dir", metavar="DIR", default=None, help="Directory relative paths are read from.")
    parser.add_argument("--ignore-file", metavar="FILE", default=None, help="Ignore patterns (default: .gitignore).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--max-columns", type=_positive_int, default=None, help="Upper bound on grid columns.")
    parser.add_argument("--min-column-width", type=_positive_int, default=None, help="Minimum width of one column.")
    parser.add_argument("--render", action="store_true", help="Print one frame and exit without reading keys.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Frame width for --render.")
    parser.add_argument("--height", type=_positive_int, default=None, help="Frame height for --render.")
    parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="PATH",
        help="Pre-select PATH in the --render frame (repeatable).",
    )
    parser.add_argument("--log-file", metavar="FILE", default=None, help="Write the log here instead.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist --theme, --ignore-file, --max-columns and --min-column-width to the config file.",
    )
    return parser


def collect_paths(args: argparse.Namespace) -> list[str]:
    """Return candidate paths from the first source the arguments provide."""
    if args.structure is not None:
        if args.paths:
            raise SystemExit("Cannot combine positional paths with --structure.")
        try:
            return load_structure_paths(Path(args.structure))
        except StructureError as exc:
            raise SystemExit(str(exc)) from exc
    if args.paths:
        return list(args.paths)
    if not sys.stdin.isatty():
        return paths_from_lines(sys.stdin)
    raise SystemExit("No paths given: pass paths, --structure FILE, or pipe paths on stdin.")


def save_defaults(args: argparse.Namespace) -> None:
    data = config.load_config()
    if args.theme is not None:
        data["theme"] = args.theme
    if args.ignore_file is not None:
        data["ignore_file"] = args.ignore_file
    if args.max_columns is not None:
        data["max_columns"] = args.max_columns
    if args.min_column_width is not None:
        data["min_column_width"] = args.min_column_width
    config.save_config(data)


def render_once(
    paths: list[str],
    args: argparse.Namespace,
    ignore_file: Path,
    max_columns: int,
    min_column_width: int,
) -> str:
    """Build a single frame for ``paths`` as plain newline-joined text."""
    term = shutil.get_terminal_size((80, 24))
    reader = make_file_reader(Path(args.base_dir) if args.base_dir else None)
    rules, warning = IgnoreRuleSet.load(ignore_file)
    session = PickerSession(
        paths,
        args.width or term.columns,
        args.height or term.lines,
        reader=reader,
        rules=rules,
        max_columns=max_columns,
        min_column_width=min_column_width,
        select_all_key=config.load_select_all_key(),
    )
    wanted = set(args.select)
    for item in session.items:
        if item.id in wanted:
            item.enabled = True
    populate_sizes([item for item in session.items if item.enabled], reader)
    if warning:
        session.status_message = warning
    session.recompute_stats()
    theme = resolve_theme(args.theme or config.load_theme_name(), no_color=args.no_color)
    return "\n".join(build_frame(session, theme)) + "\n"


@contextlib.contextmanager
def _interactive_tty():
    """Yield a tty fd when stdin/stdout are redirected, else ``None``."""
    if sys.stdin.isatty() and sys.stdout.isatty():
        yield None
        return
    try:
        fd = os.open(TTY_PATH, os.O_RDWR)
    except OSError as exc:
        raise SystemExit(f"Interactive mode needs a terminal: {exc.strerror or exc}") from exc
    try:
        yield fd
    finally:
        os.close(fd)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the picker.

    Exits with status 1 when the picker is cancelled.
    """
    args = build_parser().parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else DEFAULT_LOG_FILE)

    if args.save_defaults:
        save_defaults(args)

    paths = collect_paths(args)
    ignore_file = Path(args.ignore_file) if args.ignore_file else config.load_ignore_file()
    max_columns = args.max_columns or config.load_max_columns()
    min_column_width = args.min_column_width or config.load_min_column_width()

    if args.render:
        sys.stdout.write(render_once(paths, args, ignore_file, max_columns, min_column_width))
        return

    reader = make_file_reader(Path(args.base_dir) if args.base_dir else None)
    theme = resolve_theme(args.theme or config.load_theme_name(), no_color=args.no_color)
    with _interactive_tty() as tty_fd:
        selected = run_picker(
            paths,
            ignore_file=ignore_file,
            theme=theme,
            reader=reader,
            min_column_width=min_column_width,
            max_columns=max_columns,
            select_all_key=config.load_select_all_key(),
            tty_fd=tty_fd,
        )

    if selected is None:
        raise SystemExit(1)
    if not selected:
        print("No files selected.", file=sys.stderr)
        return
    total = total_characters(selected, reader)
    print(f"Total characters in selected files: {total} ; selected files: {len(selected)}", file=sys.stderr)
    for path in selected:
        print(path)


if __name__ == "__main__":
    main()
