"""Colour palettes for the picker frame.

Themes are ANSI palettes for the picker chrome plus a lookup table from item
category to label colour. Unknown categories use ``category_fallback``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .registry import Category


@dataclass(frozen=True)
class PickerTheme:
    """Semantic ANSI palette used by the frame renderer."""

    name: str
    reset: str
    border: str
    title: str
    header: str
    stats: str
    warning: str
    error: str
    cursor: str
    indicator_enabled: str
    indicator_ignored: str
    category_fallback: str
    category_styles: dict[Category, str] = field(default_factory=dict)

    def style_for_category(self, category: Category) -> str:
        return self.category_styles.get(category, self.category_fallback)


DEFAULT_THEME = PickerTheme(
    name="default",
    reset="\033[0m",
    border="\033[2m",
    title="\033[1m",
    header="\033[1m",
    stats="\033[34m",
    warning="\033[33m",
    error="\033[31m",
    cursor="\033[30;47m",
    indicator_enabled="\033[32m",
    indicator_ignored="\033[31m",
    category_fallback="\033[37m",
    category_styles={
        Category.SRC: "\033[34m",
        Category.SERVER: "\033[35m",
        Category.SUPABASE: "\033[33m",
        Category.DOCUMENTATION: "\033[36m",
        Category.ALERTS: "\033[32m",
        Category.DOCS: "\033[91m",
        Category.GRAFANA: "\033[94m",
        Category.LOGS: "\033[95m",
        Category.LOKI: "\033[93m",
        Category.PROMTAIL: "\033[96m",
        Category.PROMETHEUS: "\033[92m",
        Category.PUBLIC: "\033[31m",
    },
)

OCEAN_THEME = PickerTheme(
    name="ocean",
    reset="\033[0m",
    border="\033[2;38;5;31m",
    title="\033[1;38;5;45m",
    header="\033[1;38;5;153m",
    stats="\033[38;5;117m",
    warning="\033[38;5;215m",
    error="\033[38;5;203m",
    cursor="\033[30;48;5;153m",
    indicator_enabled="\033[38;5;84m",
    indicator_ignored="\033[38;5;203m",
    category_fallback="\033[38;5;252m",
    category_styles={
        Category.SRC: "\033[38;5;39m",
        Category.SERVER: "\033[38;5;141m",
        Category.SUPABASE: "\033[38;5;222m",
        Category.DOCUMENTATION: "\033[38;5;87m",
        Category.ALERTS: "\033[38;5;84m",
        Category.DOCS: "\033[38;5;210m",
        Category.GRAFANA: "\033[38;5;75m",
        Category.LOGS: "\033[38;5;177m",
        Category.LOKI: "\033[38;5;229m",
        Category.PROMTAIL: "\033[38;5;123m",
        Category.PROMETHEUS: "\033[38;5;120m",
        Category.PUBLIC: "\033[38;5;203m",
    },
)

PLAIN_THEME = PickerTheme(
    name="plain",
    reset="",
    border="",
    title="",
    header="",
    stats="",
    warning="",
    error="",
    # Reverse video keeps the cursor visible without colour.
    cursor="\033[7m",
    indicator_enabled="",
    indicator_ignored="",
    category_fallback="",
)

_THEMES: dict[str, PickerTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Names accepted by ``--theme``; ``plain`` is reached through ``--no-color``."""
    return tuple(sorted(_THEMES))


def normalize_theme_name(name: str | None) -> str:
    """Lower-case and trim ``name``; unknown or empty names map to ``default``."""
    candidate = (name or "").strip().lower()
    return candidate if candidate in _THEMES else DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> PickerTheme:
    return PLAIN_THEME if no_color else _THEMES[normalize_theme_name(name)]
