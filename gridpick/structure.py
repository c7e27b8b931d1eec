"""Candidate path sources for the picker.

A project-structure listing is a JSON object whose string values are relative
file paths and whose object values are nested directories.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path


class StructureError(ValueError):
    """Raised when a structure listing cannot be read or has the wrong shape."""


def flatten_structure(structure: dict[str, object]) -> list[str]:
    """Return file paths with each level's files before its subdirectories' files."""
    files: list[str] = []
    nested: list[str] = []
    for value in structure.values():
        if isinstance(value, str):
            files.append(value)
        elif isinstance(value, dict):
            nested.extend(flatten_structure(value))
    return files + nested


def load_structure_paths(path: Path) -> list[str]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise StructureError(f"cannot read structure file {path}: {exc.strerror or exc}") from exc
    except ValueError as exc:
        raise StructureError(f"invalid JSON in structure file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise StructureError(f"structure file {path} must contain a JSON object")
    return flatten_structure(data)


def paths_from_lines(lines: Iterable[str]) -> list[str]:
    """Strip line endings and drop blank lines."""
    return [line.strip() for line in lines if line.strip()]
