"""Tests for metadata header and post filename parsing."""

from datetime import date

import pytest

from hidsite.extractors import FrontmatterError, parse_post_filename, split_frontmatter


def test_split_frontmatter():
    """Test a YAML header is split from the body."""
    metadata, body = split_frontmatter("---\ntitle: Test\nlayout: default\n---\nContent")
    assert metadata == {"title": "Test", "layout": "default"}
    assert body == "Content"


def test_split_frontmatter_without_header():
    """Test content without a header is returned unchanged."""
    metadata, body = split_frontmatter("# Title\n\nBody")
    assert metadata == {}
    assert body == "# Title\n\nBody"


def test_split_frontmatter_empty_header():
    metadata, body = split_frontmatter("---\n---\nBody")
    assert metadata == {}
    assert body == "Body"


def test_split_frontmatter_header_at_end_of_file():
    metadata, body = split_frontmatter("---\ntitle: Only\n---")
    assert metadata == {"title": "Only"}
    assert body == ""


@pytest.mark.parametrize(
    "text",
    [
        "---\ntitle: [unclosed\n---\nBody",
        "---\n- a\n- b\n---\nBody",
        "---\ntitle: never closed\nBody",
    ],
)
def test_split_frontmatter_malformed(text):
    """Test invalid YAML, non-mapping and unterminated headers are rejected."""
    with pytest.raises(FrontmatterError):
        split_frontmatter(text)


def test_parse_post_filename():
    assert parse_post_filename("2024-01-15-hello-world.md") == (
        date(2024, 1, 15),
        "hello-world",
    )
    assert parse_post_filename("2024-01-15-v1.2-notes.markdown")[1] == "v1.2-notes"


def test_parse_post_filename_rejects_impossible_dates():
    with pytest.raises(ValueError):
        parse_post_filename("2024-02-30-leap.md")
    with pytest.raises(ValueError):
        parse_post_filename("hello.md")
