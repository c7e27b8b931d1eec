from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from gridpick.structure import StructureError, flatten_structure, load_structure_paths, paths_from_lines


class FlattenStructureTests(unittest.TestCase):
    def test_files_come_before_nested_directories(self) -> None:
        structure = {
            "src": {"main.ts": "src/main.ts", "lib": {"util.ts": "src/lib/util.ts"}, "app.ts": "src/app.ts"},
            "README.md": "README.md",
        }
        self.assertEqual(
            flatten_structure(structure),
            ["README.md", "src/main.ts", "src/app.ts", "src/lib/util.ts"],
        )

    def test_non_string_leaves_are_skipped(self) -> None:
        self.assertEqual(flatten_structure({"a": "a.txt", "n": 3, "l": ["x"]}), ["a.txt"])


class LoadStructureTests(unittest.TestCase):
    def test_load_reads_json_listing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "structure.json"
            path.write_text(json.dumps({"docs": {"a.md": "docs/a.md"}}), encoding="utf-8")
            self.assertEqual(load_structure_paths(path), ["docs/a.md"])

    def test_load_errors_are_structure_errors(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing.json"
            with self.assertRaises(StructureError):
                load_structure_paths(missing)

            broken = Path(tmp) / "broken.json"
            broken.write_text("{", encoding="utf-8")
            with self.assertRaises(StructureError):
                load_structure_paths(broken)

            listing = Path(tmp) / "list.json"
            listing.write_text("[]", encoding="utf-8")
            with self.assertRaisesRegex(StructureError, "JSON object"):
                load_structure_paths(listing)


class PathsFromLinesTests(unittest.TestCase):
    def test_blank_lines_are_dropped(self) -> None:
        self.assertEqual(paths_from_lines(["a.txt\n", "\n", "  b/c.py  \n"]), ["a.txt", "b/c.py"])


if __name__ == "__main__":
    unittest.main()
