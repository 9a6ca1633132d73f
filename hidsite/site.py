"""Site model for hidsite.

The Site owns the configuration, the file classifier and every content
object built from a source tree. Objects are built in four phases, always in
this order:

1. layouts: every file under the layout directory.
2. posts: dated files under the posts directory.
3. pages: files matched by extension anywhere else.
4. assets: every remaining public file.

Each phase method calls the previous one before doing any work of its own,
and caches its result. Later phases depend on the classifier already holding
every path an earlier phase claimed.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from .classifier import FileClassifier
from .collections import ContentCollection
from .config import (
    CONFIG_FILE,
    DEFAULT_INCLUDE_DIR,
    DEFAULT_LAYOUT_DIR,
    DEFAULT_POSTS_DIR,
    DEFAULT_PROCESSOR,
    DEFAULT_SITE_DIR,
    ConfigError,
    load_config,
)
from .content import (
    Asset,
    AssetCollector,
    Collected,
    Page,
    PageCollector,
    Post,
    PostCollector,
    Skipped,
)
from .layouts import Layout, load_layouts
from .processors import ProcessorRegistry, default_processor_registry
from .protocols import Processor
from .utils import iter_files


class Site:
    """The content graph of one site build.

    Attributes:
        source_dir: Root of the site source tree.
        config_file: Configuration file path, relative to ``source_dir``.
        classifier: Record of which content kind claimed each path.
        lister: Filesystem enumeration primitive used by every phase.
    """

    def __init__(
        self,
        source_dir: Path,
        config_file: str | Path = CONFIG_FILE,
        config: dict[str, Any] | None = None,
        processor_registry: ProcessorRegistry | None = None,
        lister: Callable[[Path], list[str]] = iter_files,
    ):
        """Initialize the site.

        Args:
            source_dir: Root of the site source tree.
            config_file: Configuration file, relative to ``source_dir``
                unless absolute.
            config: Configuration to use instead of reading ``config_file``.
            processor_registry: Optional custom processor registry.
            lister: Filesystem enumeration primitive.
        """
        self.source_dir = Path(source_dir)
        self.config_file = Path(config_file)
        self.classifier = FileClassifier()
        self.lister = lister
        self.processor_registry = processor_registry or default_processor_registry
        self._config = config
        self._processor: Processor | None = None
        self._layouts: dict[str, Layout] | None = None
        self._posts: Collected[Post] | None = None
        self._pages: Collected[Page] | None = None
        self._assets: Collected[Asset] | None = None
        self._objects: list[Any] = []

    # Configuration

    @property
    def config(self) -> dict[str, Any]:
        """Merged configuration, loaded once. Empty when the file is unusable."""
        if self._config is None:
            path = self.config_file
            if not path.is_absolute():
                path = self.source_dir / path
            self._config = load_config(path)
        return self._config

    @property
    def layout_dir(self) -> str:
        return str(self.config.get("layout_dir") or DEFAULT_LAYOUT_DIR)

    @property
    def posts_dir(self) -> str:
        return str(self.config.get("posts_dir") or DEFAULT_POSTS_DIR)

    @property
    def include_dir(self) -> str | None:
        configured = self.config.get("include_dir")
        if configured:
            return str(configured)
        if (self.source_dir / DEFAULT_INCLUDE_DIR).is_dir():
            return DEFAULT_INCLUDE_DIR
        return None

    @property
    def site_dir(self) -> str:
        return str(self.config.get("site_dir") or DEFAULT_SITE_DIR)

    @property
    def output_dir(self) -> Path:
        return self.source_dir / self.site_dir

    @property
    def output_rel(self) -> str | None:
        """Output directory relative to the source root, if it lies inside it."""
        try:
            return self.output_dir.resolve().relative_to(self.source_dir.resolve()).as_posix()
        except ValueError:
            return None

    @property
    def include_path(self) -> list[str]:
        """Absolute template search path: layouts, then includes."""
        paths = [str(self.source_dir / self.layout_dir)]
        if self.include_dir is not None:
            paths.append(str(self.source_dir / self.include_dir))
        return paths

    @property
    def processor_args(self) -> dict[str, Any] | list[Any]:
        """Arguments the processor is built with.

        Uses ``processor_args`` from the configuration when present, with a
        relative ``include_path`` resolved against the source root. Otherwise
        points the processor at the layout and include directories and the
        ``default`` layout.
        """
        configured = self.config.get("processor_args")
        if configured is not None:
            if isinstance(configured, dict) and "include_path" in configured:
                configured = dict(configured)
                configured["include_path"] = self._resolve_paths(configured["include_path"])
            return configured
        default = self.layouts().get("default")
        return {
            "include_path": self.include_path,
            "default_layout": default.filename if default else None,
        }

    @property
    def processor_name(self) -> str:
        return str(self.config.get("processor_name") or DEFAULT_PROCESSOR)

    @property
    def processor(self) -> Processor:
        """Processor named by the configuration, created once.

        Raises:
            ConfigError: If the name is not registered.
        """
        if self._processor is None:
            self._processor = self.processor_registry.create(
                self.processor_name, self.processor_args
            )
        return self._processor

    def _resolve_paths(self, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            value = [p for p in value.split(":") if p]
        return [str(self.source_dir / p) for p in value]

    # Build phases

    def layouts(self) -> dict[str, Layout]:
        """Load layouts. First phase; has no prerequisite.

        Raises:
            ConfigError: If the source or layout directory is missing.
            LayoutError: If the layout graph cannot be resolved.
        """
        if self._layouts is None:
            self._require_dir(self.source_dir, "source directory")
            self._require_dir(self.source_dir / self.layout_dir, "layout directory")
            layouts = load_layouts(
                self.source_dir, self.layout_dir, self.classifier, lister=self.lister
            )
            self._objects.extend(layouts.values())
            self._layouts = layouts
        return self._layouts

    def posts(self) -> list[Post]:
        """Collect posts, after layouts."""
        return self._collect_posts().items

    def pages(self) -> list[Page]:
        """Collect pages, after posts."""
        return self._collect_pages().items

    def assets(self) -> list[Asset]:
        """Collect assets, after pages."""
        return self._collect_assets().items

    def load(self) -> Site:
        """Run every phase in order."""
        self.assets()
        return self

    def _collect_posts(self) -> Collected[Post]:
        layouts = self.layouts()
        if self._posts is None:
            self._require_dir(self.source_dir / self.posts_dir, "posts directory")
            self._posts = PostCollector(self).collect(layouts)
            self._objects.extend(self._posts.items)
        return self._posts

    def _collect_pages(self) -> Collected[Page]:
        self._collect_posts()
        if self._pages is None:
            self._pages = PageCollector(self).collect(self.layouts())
            self._objects.extend(self._pages.items)
        return self._pages

    def _collect_assets(self) -> Collected[Asset]:
        self._collect_pages()
        if self._assets is None:
            self._assets = AssetCollector(self).collect()
            self._objects.extend(self._assets.items)
        return self._assets

    # Aggregates

    def objects(self) -> list[Any]:
        """Every object built so far, in production order.

        Calls :meth:`load` first, so the list always covers all four kinds.
        """
        self.load()
        return list(self._objects)

    def skipped(self) -> list[Skipped]:
        """Posts and pages dropped because they failed to build."""
        self.load()
        return self._collect_posts().skipped + self._collect_pages().skipped

    def get_layout_by_name(self, name: str) -> Layout | None:
        return self.layouts().get(name)

    def template_context(self) -> dict[str, Any]:
        """Site-wide variables handed to the processor."""
        self.load()
        return {
            "site": self,
            "config": self.config,
            "posts": ContentCollection(self.posts()).sorted(),
            "pages": ContentCollection(self.pages()),
        }

    @staticmethod
    def _require_dir(path: Path, label: str) -> None:
        if not path.is_dir():
            raise ConfigError(f"Expected {label} at {path}")

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"Site({str(self.source_dir)!r})"
