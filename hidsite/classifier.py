"""Path classification for hidsite.

Every source path is claimed by exactly one content kind. Collectors run in
a fixed order and consult the classifier before building anything, so a
path claimed by an earlier phase is never reprocessed by a later one.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum


class ContentKind(str, Enum):
    """Kind of content a source path was classified as."""

    LAYOUT = "layout"
    POST = "post"
    PAGE = "page"
    ASSET = "asset"


class FileClassifier:
    """Registry of claimed paths, earliest writer wins.

    A Site owns one classifier and passes it to every collector.
    """

    def __init__(self) -> None:
        self._kinds: dict[str, ContentKind] = {}

    def claim(self, path: str, kind: ContentKind) -> bool:
        """Record ``path`` as ``kind`` unless it is already claimed.

        Args:
            path: Source path relative to the site root.
            kind: Content kind claiming the path.

        Returns:
            True if this call recorded the claim, False if the path was
            already claimed (by any kind). The first claim is kept.
        """
        if path in self._kinds:
            return False
        self._kinds[path] = ContentKind(kind)
        return True

    def is_claimed(self, path: str) -> bool:
        return path in self._kinds

    def kind_of(self, path: str) -> ContentKind | None:
        return self._kinds.get(path)

    def paths(self, kind: ContentKind | None = None) -> list[str]:
        """Return claimed paths, optionally restricted to one kind."""
        if kind is None:
            return list(self._kinds)
        return [path for path, claimed in self._kinds.items() if claimed == kind]

    def __contains__(self, path: object) -> bool:
        return path in self._kinds

    def __iter__(self) -> Iterator[str]:
        return iter(self._kinds)

    def __len__(self) -> int:
        return len(self._kinds)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"FileClassifier({len(self._kinds)} paths)"
