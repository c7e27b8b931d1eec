"""Derived selection statistics.

Stats are rebuilt from the item list after every change instead of being
patched incrementally, so repeated toggles cannot drift the totals.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .content import ContentReader, ContentReadError
from .registry import Item, category_for_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionStats:
    enabled_count: int = 0
    total_characters: int = 0
    first_ignored_enabled_id: str | None = None
    unreadable_ids: tuple[str, ...] = ()


def recompute(items: Iterable[Item], is_ignored: Callable[[str], bool]) -> SelectionStats:
    """Aggregate enabled count, character volume, and the ignore warning.

    Only enabled items with a cached size contribute characters; enabled items
    whose last read failed are reported in ``unreadable_ids`` instead.
    """
    enabled_count = 0
    total_characters = 0
    first_ignored: str | None = None
    unreadable: list[str] = []
    for item in items:
        if not item.enabled:
            continue
        enabled_count += 1
        if first_ignored is None and is_ignored(item.id):
            first_ignored = item.id
        if item.cached_size is not None:
            total_characters += item.cached_size
        elif item.read_error is not None:
            unreadable.append(item.id)
    return SelectionStats(
        enabled_count=enabled_count,
        total_characters=total_characters,
        first_ignored_enabled_id=first_ignored,
        unreadable_ids=tuple(unreadable),
    )


def populate_sizes(items: Iterable[Item], reader: ContentReader) -> int:
    """Read sizes for items that do not have one yet.

    Reads run one after another; a failure is logged with the item id and
    recorded on the item, and the remaining items are still read. Returns the
    number of failed reads.
    """
    failures = 0
    for item in items:
        if item.cached_size is not None:
            continue
        try:
            item.cached_size = reader(item.id)
        except ContentReadError as exc:
            item.read_error = exc.reason
            failures += 1
            logger.warning("error reading file %s: %s", item.id, exc.reason)
            continue
        item.read_error = None
    return failures


def total_characters(item_ids: Iterable[str], reader: ContentReader) -> int:
    """Character volume of ``item_ids``, skipping (and logging) unreadable ones."""
    items = [
        Item(id=item_id, label=item_id, category=category_for_path(item_id), enabled=True)
        for item_id in item_ids
    ]
    populate_sizes(items, reader)
    return recompute(items, lambda _item_id: False).total_characters
