from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any


class ContentCollection(Sequence[Any]):
    """Lightweight helper for working with lists of posts and pages in templates.

    Collectors return objects in filesystem order; this is where callers get
    chronological order.
    """

    def __init__(self, items: Iterable[Any]):
        self._items = list(items)
        # Stable sort cache for .sorted()/latest() to avoid recomputing repeatedly
        self._sorted_cache: ContentCollection | None = None

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, item):
        return self._items[item]

    def with_tag(self, tag: str) -> ContentCollection:
        return ContentCollection(p for p in self._items if tag in p.tags)

    def sorted(self, reverse: bool = True) -> ContentCollection:
        """Sort by date, then by source path.

        Items without a date (pages) sort as the oldest.

        Args:
            reverse: If True (default), newest first. If False, oldest first.

        Returns:
            A new ContentCollection with sorted items.
        """
        if self._sorted_cache is None or reverse is False:

            def sort_key(item):
                date = getattr(item, "date", None)
                return (date is not None, date.toordinal() if date else 0, item.path)

            sorted_items = ContentCollection(sorted(self._items, key=sort_key, reverse=reverse))
            if reverse:
                self._sorted_cache = sorted_items
            return sorted_items
        return self._sorted_cache

    def latest(self, count: int = 5) -> ContentCollection:
        return ContentCollection(self.sorted()[:count])

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"ContentCollection({len(self._items)} items)"
