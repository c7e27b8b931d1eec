"""Ignore-file pattern matching used to flag risky selections.

Patterns are flat, whole-path globs: ``*`` matches any run of characters
(including ``/``), a well-formed ``[...]`` is a character class, and any
other character is literal. There is no directory-prefix matching and no
``!`` negation, so this is deliberately not a complete gitignore
implementation. Matches only colour an item and raise a warning; they never
prevent selecting it.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Queue

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILE = ".gitignore"


def _bracket_class(pattern: str, start: int) -> tuple[str, int] | None:
    """Return the regex class for a ``[...]`` opening at ``start`` and the index after it.

    ``None`` means the bracket is empty, unclosed or an invalid range, and the
    caller treats ``[`` as a literal character.
    """
    close = pattern.find("]", start + 1)
    if close <= start + 1:
        return None
    body = pattern[start + 1 : close].replace("\\", "\\\\").replace("[", "\\[")
    regex = f"[{body}]"
    try:
        re.compile(regex)
    except re.error:
        return None
    return regex, close + 1


def pattern_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate one glob pattern into an anchored regular expression.

    ``*.env`` becomes ``^.*\\.env$``, so it matches ``.env`` itself as well as
    ``config/prod.env``. ``*.py[cod]`` becomes ``^.*\\.py[cod]$``.
    """
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "*":
            parts.append(".*")
            i += 1
            continue
        if ch == "[":
            bracket = _bracket_class(pattern, i)
            if bracket is not None:
                parts.append(bracket[0])
                i = bracket[1]
                continue
        parts.append(re.escape(ch))
        i += 1
    return re.compile(f"^{''.join(parts)}$")


def parse_patterns(text: str) -> tuple[str, ...]:
    """Return non-empty, non-comment pattern lines with surrounding space removed."""
    patterns: list[str] = []
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)
    return tuple(patterns)


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Ordered ignore patterns with their compiled matchers."""

    patterns: tuple[str, ...] = ()
    regexes: tuple[re.Pattern[str], ...] = ()

    @classmethod
    def from_patterns(cls, patterns: tuple[str, ...] | list[str]) -> IgnoreRuleSet:
        ordered = tuple(patterns)
        return cls(patterns=ordered, regexes=tuple(pattern_to_regex(p) for p in ordered))

    @classmethod
    def from_text(cls, text: str) -> IgnoreRuleSet:
        return cls.from_patterns(parse_patterns(text))

    @classmethod
    def load(cls, path: Path) -> tuple[IgnoreRuleSet, str | None]:
        """Load rules from ``path``, failing soft.

        A missing file yields an empty rule set with no message. Any other read
        error is logged and also returned as a short message so the caller can
        surface it; the rule set is empty in that case too.
        """
        try:
            text = Path(path).read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return cls(), None
        except OSError as exc:
            logger.warning("could not read ignore file %s: %s", path, exc)
            return cls(), f"Warning: could not read {path}: {exc.strerror or exc}"
        return cls.from_text(text), None

    def __len__(self) -> int:
        return len(self.patterns)

    def matches(self, candidate: str) -> bool:
        """Return whether any pattern matches the whole ``candidate`` path."""
        return any(regex.match(candidate) is not None for regex in self.regexes)


EMPTY_RULES = IgnoreRuleSet()


@dataclass(frozen=True)
class IgnoreRulesLoaded:
    """Loader result delivered to the session as a message."""

    rules: IgnoreRuleSet
    warning: str | None = None


class IgnoreRulesLoader:
    """Load an ignore file on a daemon thread and hand the result back.

    The picker keeps drawing with an empty rule set until ``poll`` returns the
    loaded rules, so a slow filesystem never delays the first frame.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._results: Queue[IgnoreRulesLoaded] = Queue()
        self._thread: threading.Thread | None = None

    def _worker(self) -> None:
        rules, warning = IgnoreRuleSet.load(self.path)
        self._results.put(IgnoreRulesLoaded(rules=rules, warning=warning))

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._worker,
            name="gridpick-ignore-rules",
            daemon=True,
        )
        self._thread.start()

    def poll(self) -> IgnoreRulesLoaded | None:
        """Return the loaded result once available, otherwise ``None``."""
        try:
            return self._results.get_nowait()
        except Empty:
            return None

    def wait(self, timeout: float | None = None) -> IgnoreRulesLoaded | None:
        """Block until the result is available (used by non-interactive paths)."""
        try:
            return self._results.get(timeout=timeout)
        except Empty:
            return None
