"""CLI tests covering path sources, one-shot render, and picker output."""

from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gridpick import cli
from gridpick.log_setup import setup_logging


class _TtyInput(io.StringIO):
    def isatty(self) -> bool:
        return True


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        patcher = mock.patch("gridpick.config.CONFIG_PATH", self.tmp / "config" / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)
        self.addCleanup(setup_logging, None)

    def run_main(self, *argv: str) -> tuple[str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            cli.main(["--log-file", str(self.tmp / "gridpick.log"), *argv])
        return stdout.getvalue(), stderr.getvalue()


class CollectPathsTests(CliTestCase):
    def test_positional_paths_win(self) -> None:
        args = cli.build_parser().parse_args(["a.txt", "b.txt"])
        self.assertEqual(cli.collect_paths(args), ["a.txt", "b.txt"])

    def test_structure_file_is_flattened(self) -> None:
        listing = self.tmp / "structure.json"
        listing.write_text(json.dumps({"src": {"a.ts": "src/a.ts"}, "b.md": "b.md"}), encoding="utf-8")
        args = cli.build_parser().parse_args(["--structure", str(listing)])
        self.assertEqual(cli.collect_paths(args), ["b.md", "src/a.ts"])

    def test_structure_and_positional_paths_conflict(self) -> None:
        args = cli.build_parser().parse_args(["--structure", "s.json", "a.txt"])
        with self.assertRaises(SystemExit):
            cli.collect_paths(args)

    def test_broken_structure_file_exits(self) -> None:
        args = cli.build_parser().parse_args(["--structure", str(self.tmp / "missing.json")])
        with self.assertRaisesRegex(SystemExit, "cannot read structure file"):
            cli.collect_paths(args)

    def test_piped_stdin_supplies_paths(self) -> None:
        args = cli.build_parser().parse_args([])
        with mock.patch("gridpick.cli.sys.stdin", io.StringIO("a.txt\n\nb.txt\n")):
            self.assertEqual(cli.collect_paths(args), ["a.txt", "b.txt"])

    def test_no_source_exits(self) -> None:
        args = cli.build_parser().parse_args([])
        with mock.patch("gridpick.cli.sys.stdin", _TtyInput("")):
            with self.assertRaises(SystemExit):
                cli.collect_paths(args)

    def test_non_positive_column_limit_is_rejected(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            cli.build_parser().parse_args(["--max-columns", "0", "a"])


class RenderModeTests(CliTestCase):
    def test_render_prints_one_frame(self) -> None:
        (self.tmp / "a.txt").write_text("hello", encoding="utf-8")
        ignore_file = self.tmp / "ignore"
        ignore_file.write_text("*.env\n", encoding="utf-8")
        stdout, _stderr = self.run_main(
            "--render",
            "--no-color",
            "--width",
            "160",
            "--height",
            "10",
            "--base-dir",
            str(self.tmp),
            "--ignore-file",
            str(ignore_file),
            "--select",
            "a.txt",
            "--select",
            "x.env",
            "a.txt",
            "x.env",
        )
        lines = stdout.splitlines()
        self.assertTrue(lines[0].startswith("┌─ gridpick "))
        self.assertIn(
            "Total characters in selected files: 5 ; selected files: 2 ; "
            "Attention file selected from ignore list: x.env",
            stdout,
        )
        self.assertIn("[x] a.txt", stdout)

    def test_render_surfaces_unreadable_ignore_file_warning(self) -> None:
        with mock.patch(
            "gridpick.ignore_rules.Path.read_text",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            stdout, _stderr = self.run_main(
                "--render", "--no-color", "--width", "200", "--height", "8", "--ignore-file", "locked", "a"
            )
        self.assertIn("Warning: could not read locked: Permission denied", stdout)


class InteractiveModeTests(CliTestCase):
    def _run_with_selection(self, selected, *argv: str) -> tuple[str, str]:
        with mock.patch("gridpick.cli.run_picker", return_value=selected) as picker_mock, mock.patch(
            "gridpick.cli._interactive_tty", return_value=contextlib.nullcontext(None)
        ):
            result = self.run_main(*argv)
        self.picker_kwargs = picker_mock.call_args.kwargs
        return result

    def test_selection_goes_to_stdout_and_summary_to_stderr(self) -> None:
        (self.tmp / "x.txt").write_text("hello", encoding="utf-8")
        (self.tmp / "y.txt").write_text("abc", encoding="utf-8")
        stdout, stderr = self._run_with_selection(
            ["x.txt", "y.txt"], "--base-dir", str(self.tmp), "x.txt", "y.txt", "z.txt"
        )
        self.assertEqual(stdout, "x.txt\ny.txt\n")
        self.assertIn("Total characters in selected files: 8 ; selected files: 2", stderr)
        self.assertIsNone(self.picker_kwargs["tty_fd"])

    def test_empty_selection_reports_no_files(self) -> None:
        stdout, stderr = self._run_with_selection([], "a.txt")
        self.assertEqual(stdout, "")
        self.assertIn("No files selected.", stderr)

    def test_cancel_exits_with_status_one(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run_with_selection(None, "a.txt")
        self.assertEqual(ctx.exception.code, 1)

    def test_config_defaults_reach_picker_and_cli_overrides_them(self) -> None:
        args = cli.build_parser().parse_args(["--max-columns", "2", "--ignore-file", "custom.ignore"])
        cli.save_defaults(args)
        self._run_with_selection([], "a.txt")
        self.assertEqual(self.picker_kwargs["max_columns"], 2)
        self.assertEqual(self.picker_kwargs["ignore_file"], Path("custom.ignore"))
        self._run_with_selection([], "--max-columns", "3", "a.txt")
        self.assertEqual(self.picker_kwargs["max_columns"], 3)


if __name__ == "__main__":
    unittest.main()
