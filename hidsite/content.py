"""Content objects and collectors for hidsite.

This module discovers posts, pages and plain files in a site source tree and
builds one content object per discovered path.

Key classes:
- Post: A dated content file under the posts directory.
- Page: A content file matched by extension anywhere in the tree.
- Asset: An opaque file copied to the output verbatim.
- Skipped: Why a candidate path was dropped.
- Collected: Successful items plus the skipped candidates of one collector.
- PostCollector, PageCollector, AssetCollector: One collector per kind.

Each collector skips paths already claimed by an earlier phase and claims
every object it builds, so the collectors must run in the order posts,
pages, assets, after the layouts are loaded.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .classifier import ContentKind
from .extractors import parse_post_filename, split_frontmatter
from .layouts import Layout
from .utils import is_private_path, is_within, slugify, titleize

if TYPE_CHECKING:
    from .site import Site

POST_EXTENSIONS = ("md", "mk", "mkd", "mkdn", "markdown")
PAGE_EXTENSIONS = POST_EXTENSIONS + ("textile", "html")

POST_FILE_RE = re.compile(
    r"^[0-9]{4}-[0-9]{2}-[0-9]{2}-.+\.(?:%s)$" % "|".join(POST_EXTENSIONS)
)
PAGE_FILE_RE = re.compile(r"\.(?:%s)$" % "|".join(PAGE_EXTENSIONS))

T = TypeVar("T")


class ContentError(ValueError):
    """Raised when a single content file cannot be built."""


@dataclass(frozen=True)
class Skipped:
    """A candidate path a collector dropped, with the reason."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


@dataclass
class Collected(Generic[T]):
    """Result of one collector pass.

    Attributes:
        items: Successfully built objects, in enumeration order.
        skipped: Candidates that failed to build.
    """

    items: list[T] = field(default_factory=list)
    skipped: list[Skipped] = field(default_factory=list)


def _output_path(site: Site, url: str) -> Path:
    """Map a URL to a file under the output directory.

    Raises:
        ContentError: If the URL resolves outside the output directory.
    """
    rel = url.lstrip("/")
    if not rel or url.endswith("/"):
        rel = f"{rel}index.html"
    target = site.output_dir / rel
    root = site.output_dir.resolve()
    if root not in target.resolve().parents:
        raise ContentError(f"URL '{url}' points outside the output directory")
    return target


@dataclass(eq=False)
class _Document:
    """Shared shape of posts and pages."""

    path: str
    body: str
    metadata: dict[str, Any]
    layout: Layout | None
    site: Site = field(repr=False)

    @property
    def filename(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def title(self) -> str:
        return str(self.metadata.get("title") or titleize(self.filename))

    @property
    def layout_name(self) -> str | None:
        return self.layout.name if self.layout else None

    @property
    def tags(self) -> list[str]:
        tags = self.metadata.get("tags") or []
        if isinstance(tags, str):
            return tags.split()
        return [str(tag) for tag in tags]

    @property
    def url(self) -> str:
        permalink = self.metadata.get("permalink")
        if permalink:
            permalink = str(permalink)
            return permalink if permalink.startswith("/") else f"/{permalink}"
        return self._default_url()

    @property
    def output_path(self) -> Path:
        return _output_path(self.site, self.url)

    def _default_url(self) -> str:
        return "/" + PurePosixPath(self.path).with_suffix(".html").as_posix()


@dataclass(eq=False)
class Post(_Document):
    """A dated post parsed from ``YYYY-MM-DD-slug.ext``.

    Attributes:
        date: Publication date from the filename.
        slug: Slug from the filename.
    """

    date: date
    slug: str

    def _default_url(self) -> str:
        return (
            f"/{self.date.year:04d}/{self.date.month:02d}/{self.date.day:02d}/"
            f"{slugify(self.slug)}.html"
        )


@dataclass(eq=False)
class Page(_Document):
    """A free-form page matched by extension."""


@dataclass(eq=False)
class Asset:
    """A file copied to the output without parsing."""

    path: str
    site: Site = field(repr=False)

    @property
    def url(self) -> str:
        return f"/{self.path}"

    @property
    def output_path(self) -> Path:
        return self.site.output_dir / self.path

    @property
    def source_path(self) -> Path:
        return self.site.source_dir / self.path


def resolve_layout(
    metadata: Mapping[str, Any],
    layouts: Mapping[str, Layout],
    fallbacks: Iterable[str] = ("default",),
) -> Layout | None:
    """Resolve the layout a document renders through.

    An explicit ``layout`` key must name a loaded layout; a false value
    (``layout: null``) disables layouts. Without the key the first existing
    fallback is used.

    Raises:
        ContentError: If the named layout does not exist.
    """
    if "layout" in metadata:
        name = metadata["layout"]
        if not name:
            return None
        if str(name) not in layouts:
            raise ContentError(f"unknown layout '{name}'")
        return layouts[str(name)]
    for fallback in fallbacks:
        if fallback in layouts:
            return layouts[fallback]
    return None


def _read_document(source: Path) -> tuple[dict[str, Any], str]:
    raw = source.read_text(encoding="utf-8")
    return split_frontmatter(raw)


class _DocumentCollector:
    """Common candidate loop for posts and pages."""

    kind = ContentKind.PAGE

    def __init__(self, site: Site, pattern: re.Pattern[str]):
        self.site = site
        self.pattern = pattern

    def candidates(self) -> list[str]:
        raise NotImplementedError

    def build(self, rel: str, layouts: Mapping[str, Layout]) -> Any:
        raise NotImplementedError

    def collect(self, layouts: Mapping[str, Layout]) -> Collected:
        """Build every candidate, claiming successes and recording failures.

        Args:
            layouts: Loaded layouts, for resolving layout names.

        Returns:
            Collected objects and skipped candidates.
        """
        result: Collected = Collected()
        classifier = self.site.classifier
        for rel in self.candidates():
            if classifier.is_claimed(rel):
                continue
            outcome = self._try_build(rel, layouts)
            if isinstance(outcome, Skipped):
                result.skipped.append(outcome)
                continue
            if classifier.claim(rel, self.kind):
                result.items.append(outcome)
        return result

    def _try_build(self, rel: str, layouts: Mapping[str, Layout]) -> Any:
        try:
            item = self.build(rel, layouts)
            _output_path(self.site, item.url)
            return item
        except UnicodeDecodeError:
            return Skipped(rel, "file is not valid UTF-8 text")
        except OSError as exc:
            return Skipped(rel, f"cannot read file: {exc.strerror or exc}")
        except ValueError as exc:
            return Skipped(rel, str(exc))


class PostCollector(_DocumentCollector):
    """Collects dated posts from the posts directory."""

    kind = ContentKind.POST

    def __init__(self, site: Site, pattern: re.Pattern[str] = POST_FILE_RE):
        super().__init__(site, pattern)

    def candidates(self) -> list[str]:
        posts_dir = self.site.posts_dir
        found = []
        for rel in self.site.lister(self.site.source_dir / posts_dir):
            if self.pattern.search(PurePosixPath(rel).name):
                found.append((PurePosixPath(posts_dir) / rel).as_posix())
        return found

    def build(self, rel: str, layouts: Mapping[str, Layout]) -> Post:
        published, slug = parse_post_filename(PurePosixPath(rel).name)
        metadata, body = _read_document(self.site.source_dir / rel)
        layout = resolve_layout(metadata, layouts, fallbacks=("post", "default"))
        return Post(
            path=rel,
            body=body,
            metadata=metadata,
            layout=layout,
            site=self.site,
            date=published,
            slug=slug,
        )


class PageCollector(_DocumentCollector):
    """Collects pages matched by extension anywhere in the source tree."""

    kind = ContentKind.PAGE

    def __init__(self, site: Site, pattern: re.Pattern[str] = PAGE_FILE_RE):
        super().__init__(site, pattern)

    def candidates(self) -> list[str]:
        return [
            rel
            for rel in _public_files(self.site)
            if self.pattern.search(PurePosixPath(rel).name)
        ]

    def build(self, rel: str, layouts: Mapping[str, Layout]) -> Page:
        metadata, body = _read_document(self.site.source_dir / rel)
        layout = resolve_layout(metadata, layouts)
        return Page(path=rel, body=body, metadata=metadata, layout=layout, site=self.site)


class AssetCollector:
    """Wraps every remaining public file as an Asset."""

    def __init__(self, site: Site):
        self.site = site

    def collect(self) -> Collected[Asset]:
        result: Collected[Asset] = Collected()
        classifier = self.site.classifier
        for rel in _public_files(self.site):
            if classifier.claim(rel, ContentKind.ASSET):
                result.items.append(Asset(path=rel, site=self.site))
        return result


def is_post_path(site: Site, rel: str) -> bool:
    """Check if a path is a post candidate: a post filename under the posts directory."""
    return is_within(rel, site.posts_dir) and bool(POST_FILE_RE.search(PurePosixPath(rel).name))


def _public_files(site: Site) -> list[str]:
    """List files that are neither private, claimed, post candidates, nor build output.

    Post candidates that failed to build stay unclaimed, so they are excluded
    by name here rather than by the classifier.
    """
    output = site.output_rel
    return [
        rel
        for rel in site.lister(site.source_dir)
        if not is_private_path(rel)
        and not is_within(rel, output)
        and not site.classifier.is_claimed(rel)
        and not is_post_path(site, rel)
    ]
