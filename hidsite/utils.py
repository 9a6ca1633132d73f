"""Utility functions for hidsite.

This module contains the filesystem and naming helpers shared by the
collectors and the build step.

Key functions:
    iter_files: Enumerate every regular file under a root, recursively.
    is_private_path: Check whether a relative path is a private build input.
    is_within: Check whether a relative path lives under a directory.
    slugify: Convert filenames to URL slugs.
    titleize: Convert filenames to human-readable titles.
    ensure_clean_dir: Ensure a directory exists and is empty.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path, PurePosixPath

DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}-")


def iter_files(root: Path) -> list[str]:
    """List every regular file under a directory.

    Args:
        root: Directory to walk.

    Returns:
        Sorted POSIX paths relative to ``root``. Empty if ``root`` is missing.
    """
    if not root.is_dir():
        return []
    files: list[str] = []
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        files.append(path.relative_to(root).as_posix())
    return sorted(files)


def is_private_path(rel: str) -> bool:
    """Check if a relative path is a private build input.

    Private paths have a component starting with ``_`` (``_layouts``,
    ``_posts``, ``_config.yml``, ``_drafts``) or ``.`` (dotfiles, VCS
    directories).

    Args:
        rel: POSIX path relative to the source root.

    Returns:
        True if any path component starts with an underscore or a dot.
    """
    return any(part.startswith(("_", ".")) for part in PurePosixPath(rel).parts)


def is_within(rel: str, directory: str | None) -> bool:
    """Check if a relative path lives under a relative directory."""
    if not directory:
        return False
    prefix = PurePosixPath(directory).as_posix().strip("/")
    if prefix in ("", "."):
        return False
    return rel == prefix or rel.startswith(prefix + "/")


def slugify(name: str) -> str:
    """Convert a filename stem to a slug, dropping any date prefix.

    Args:
        name: Filename stem.

    Returns:
        URL-friendly slug.

    Examples:
        >>> slugify("2024-01-15-Hello World")
        'hello-world'
    """
    cleaned = DATE_PREFIX_RE.sub("", name)
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Removes date prefixes (YYYY-MM-DD), replaces hyphens and underscores
    with spaces, and capitalizes each word.

    Args:
        filename: Filename with or without extension.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("2024-01-15-hello-world.md")
        'Hello World'

        >>> titleize("getting-started.md")
        'Getting Started'
    """
    base = DATE_PREFIX_RE.sub("", PurePosixPath(filename).stem)
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, removes all contents. Creates the
    directory if it doesn't exist.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(str(path))
    path.mkdir(parents=True, exist_ok=True)
