"""Metadata extractors for hidsite.

This module parses the metadata a source file carries: the YAML header at
the top of layouts, posts and pages, and the date and slug encoded in a
post's filename.

Key functions:
- split_frontmatter: Split a YAML metadata header from the body.
- parse_post_filename: Parse ``YYYY-MM-DD-slug.ext`` into a date and slug.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any

import yaml

FRONTMATTER_OPEN_RE = re.compile(r"^---[ \t]*\r?\n")
FRONTMATTER_CLOSE_RE = re.compile(r"^---[ \t]*(?:\r?\n|\Z)", re.MULTILINE)
POST_NAME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)\.[^.]+$")


class FrontmatterError(ValueError):
    """Raised when a metadata header is present but cannot be parsed."""


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split YAML frontmatter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (metadata dict, remaining body). Content without a header
        yields an empty dict and the text unchanged.

    Raises:
        FrontmatterError: If the header is unterminated, is not valid YAML,
            or does not decode to a mapping.
    """
    opening = FRONTMATTER_OPEN_RE.match(text)
    if not opening:
        return {}, text
    closing = FRONTMATTER_CLOSE_RE.search(text, opening.end())
    if not closing:
        raise FrontmatterError("metadata header is not terminated by '---'")
    try:
        data = yaml.safe_load(text[opening.end() : closing.start()])
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"invalid YAML in metadata header: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"metadata header must be a mapping, got {type(data).__name__}"
        )
    return data, text[closing.end() :]


def parse_post_filename(name: str) -> tuple[date, str]:
    """Extract the publication date and slug from a post filename.

    Args:
        name: Filename such as ``2024-01-15-hello-world.md``.

    Returns:
        Tuple of (date, slug).

    Raises:
        ValueError: If the name has no date prefix or the date is impossible.

    Examples:
        >>> parse_post_filename("2024-01-15-hello-world.md")
        (datetime.date(2024, 1, 15), 'hello-world')
    """
    match = POST_NAME_RE.match(name)
    if not match:
        raise ValueError(f"not a dated post filename: {name}")
    year, month, day, slug = match.groups()
    try:
        published = date(int(year), int(month), int(day))
    except ValueError as exc:
        raise ValueError(f"invalid date in post filename {name}: {exc}") from exc
    return published, slug
