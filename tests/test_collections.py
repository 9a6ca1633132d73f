from datetime import date

from hidsite.collections import ContentCollection


class FakeItem:
    def __init__(self, path, day=None, tags=None):
        self.path = path
        if day is not None:
            self.date = date(2024, 1, day)
        self.tags = tags or []


def test_sorted_newest_first_with_pages_last():
    items = ContentCollection(
        [
            FakeItem("_posts/2024-01-02-b.md", day=2),
            FakeItem("about.html"),
            FakeItem("_posts/2024-01-03-c.md", day=3, tags=["python"]),
            FakeItem("_posts/2024-01-01-a.md", day=1),
        ]
    )
    assert len(items) == 4
    assert [i.path for i in items.sorted()] == [
        "_posts/2024-01-03-c.md",
        "_posts/2024-01-02-b.md",
        "_posts/2024-01-01-a.md",
        "about.html",
    ]
    assert [i.path for i in items.sorted(reverse=False)][0] == "about.html"
    # cached descending branch
    assert items.sorted() is items.sorted()
    assert items.latest(1)[0].path == "_posts/2024-01-03-c.md"
    assert [i.path for i in items.with_tag("python")] == ["_posts/2024-01-03-c.md"]


def test_same_date_sorts_by_path():
    items = ContentCollection(
        [FakeItem("_posts/2024-01-01-a.md", day=1), FakeItem("_posts/2024-01-01-b.md", day=1)]
    )
    assert [i.path for i in items.sorted(reverse=False)] == [
        "_posts/2024-01-01-a.md",
        "_posts/2024-01-01-b.md",
    ]
    assert items[0].path == "_posts/2024-01-01-a.md"
