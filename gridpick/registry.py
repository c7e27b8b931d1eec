"""Selectable item set with per-item enabled flags and categories."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass


class Category(enum.Enum):
    """Top-level directory groups used only for colour-coding labels."""

    SRC = "src"
    SERVER = "server"
    SUPABASE = "supabase"
    DOCUMENTATION = "DOCUMENTATION"
    ALERTS = "alerts"
    DOCS = "docs"
    GRAFANA = "grafana"
    LOGS = "logs"
    LOKI = "loki"
    PROMTAIL = "promtail"
    PROMETHEUS = "prometheus"
    PUBLIC = "public"
    OTHER = "*"


_CATEGORY_BY_SEGMENT: dict[str, Category] = {
    category.value: category for category in Category if category is not Category.OTHER
}


def category_for_path(path: str) -> Category:
    """Return the category named by the first ``/``-separated segment."""
    first_segment = path.split("/", 1)[0]
    return _CATEGORY_BY_SEGMENT.get(first_segment, Category.OTHER)


@dataclass
class Item:
    """One path-backed entry in the picker.

    ``cached_size`` is filled lazily the first time the item is enabled;
    ``read_error`` keeps the reason of the most recent failed read.
    """

    id: str
    label: str
    category: Category
    enabled: bool = False
    cached_size: int | None = None
    read_error: str | None = None


def build_items(paths: Iterable[str]) -> list[Item]:
    """Create items in input order, dropping repeated paths."""
    items: list[Item] = []
    seen: set[str] = set()
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        items.append(Item(id=path, label=path, category=category_for_path(path)))
    return items


class ItemRegistry:
    """Ordered item list addressed by linear index."""

    def __init__(self, paths: Iterable[str]) -> None:
        self.items = build_items(paths)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index: int) -> Item:
        return self.items[index]

    def all_enabled(self) -> bool:
        return bool(self.items) and all(item.enabled for item in self.items)

    def toggle(self, index: int) -> list[Item]:
        """Flip one item and return it when it became enabled."""
        if not 0 <= index < len(self.items):
            return []
        item = self.items[index]
        item.enabled = not item.enabled
        return [item] if item.enabled else []

    def toggle_all(self) -> list[Item]:
        """Enable every item unless all are already enabled, then disable all.

        A mixed selection therefore becomes "all enabled"; only a fully
        enabled registry is cleared. Returns items that changed to enabled.
        """
        target = not self.all_enabled()
        newly_enabled: list[Item] = []
        for item in self.items:
            if target and not item.enabled:
                newly_enabled.append(item)
            item.enabled = target
        return newly_enabled

    def enabled_ids(self) -> list[str]:
        return [item.id for item in self.items if item.enabled]
