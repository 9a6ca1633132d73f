"""Layout registry for hidsite.

Layouts are template files under the layout directory. A layout may name a
parent layout in its metadata header (``layout: base``), forming an
inheritance chain that the processor wraps content through, innermost first.

Loading happens in two passes: every layout file is parsed and claimed
first, then parent names are linked. Linking never depends on the order the
filesystem lists files in.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from .classifier import ContentKind, FileClassifier
from .config import ConfigError
from .extractors import FrontmatterError, split_frontmatter
from .utils import iter_files


class LayoutError(ConfigError):
    """Raised when the layout graph cannot be built.

    Attributes:
        layout: Name of the layout that caused the error.
    """

    def __init__(self, layout: str, message: str):
        self.layout = layout
        super().__init__(f"layout '{layout}': {message}")


@dataclass(eq=False)
class Layout:
    """A layout template and its resolved parent.

    Attributes:
        name: Path relative to the layout directory, minus the final extension.
        path: Source path relative to the site root.
        metadata: Parsed metadata header.
        content: Template source following the header.
        parent: Parent layout, linked after every layout has been loaded.
    """

    name: str
    path: str
    metadata: dict[str, Any] = field(default_factory=dict)
    content: str = ""
    parent: Layout | None = None

    @property
    def parent_name(self) -> str | None:
        value = self.metadata.get("layout")
        return str(value) if value else None

    @property
    def filename(self) -> str:
        return self.path

    def chain(self) -> list[Layout]:
        """Return this layout followed by each ancestor up to the root."""
        chain: list[Layout] = []
        current: Layout | None = self
        while current is not None:
            chain.append(current)
            current = current.parent
        return chain

    def __repr__(self) -> str:
        parent = self.parent.name if self.parent else None
        return f"Layout(name={self.name!r}, parent={parent!r})"


def layout_name(rel: str) -> str:
    """Derive a layout name by stripping the final extension.

    Examples:
        >>> layout_name("posts/wide.html")
        'posts/wide'
    """
    pure = PurePosixPath(rel)
    if not pure.suffix:
        return pure.as_posix()
    return pure.with_suffix("").as_posix()


def load_layouts(
    root: Path,
    layout_dir: str,
    classifier: FileClassifier,
    lister: Callable[[Path], list[str]] = iter_files,
) -> dict[str, Layout]:
    """Load every layout under the layout directory and link parents.

    Args:
        root: Site source root.
        layout_dir: Layout directory relative to ``root``.
        classifier: Classifier to claim layout paths in.
        lister: Filesystem enumeration primitive.

    Returns:
        Mapping of layout name to Layout.

    Raises:
        LayoutError: If a layout cannot be read or has a malformed header,
            if two files share a layout name, if a parent does not exist, or
            if a layout takes part in a cycle.
    """
    base = root / layout_dir
    layouts: dict[str, Layout] = {}

    for rel in lister(base):
        name = layout_name(rel)
        path = (PurePosixPath(layout_dir) / rel).as_posix()
        try:
            raw = (base / rel).read_text(encoding="utf-8")
            metadata, content = split_frontmatter(raw)
        except (OSError, UnicodeDecodeError, FrontmatterError) as exc:
            raise LayoutError(name, str(exc)) from exc
        if name in layouts:
            raise LayoutError(name, f"defined by both {layouts[name].path} and {path}")
        layouts[name] =Layout(name=name, path=path, metadata=metadata, content=content)
        classifier.claim(path, ContentKind.LAYOUT)

    for layout in layouts.values():
        parent_name = layout.parent_name
        if parent_name is None:
            continue
        if parent_name not in layouts:
            raise LayoutError(layout.name, f"parent layout '{parent_name}' not found")
        layout.parent = layouts[parent_name]

    for layout in layouts.values():
        _check_acyclic(layout)

    return layouts


def _check_acyclic(layout: Layout) -> None:
    seen = {layout.name}
    current = layout.parent
    while current is not None:
        if current.name in seen:
            raise LayoutError(layout.name, "layout inheritance forms a cycle")
        seen.add(current.name)
        current = current.parent
