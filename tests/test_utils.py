from hidsite import utils


def test_slugify_and_titleize_strip_date():
    assert utils.slugify("2024-01-02-post-title") == "post-title"
    assert utils.slugify("Hello World") == "hello-world"
    assert utils.slugify("!!!") == "index"
    assert utils.titleize("2024-01-02-post-title.md") == "Post Title"
    assert utils.titleize("getting_started.html") == "Getting Started"
    assert utils.titleize(".md") == "Untitled"


def test_iter_files_lists_relative_posix_paths(tmp_path):
    (tmp_path / "a" / "b").mkdir(parents=True)
    (tmp_path / "a" / "b" / "deep.txt").write_text("x", encoding="utf-8")
    (tmp_path / "top.md").write_text("x", encoding="utf-8")
    (tmp_path / "empty").mkdir()

    assert utils.iter_files(tmp_path) == ["a/b/deep.txt", "top.md"]
    assert utils.iter_files(tmp_path / "missing") == []


def test_private_paths():
    assert utils.is_private_path("_config.yml")
    assert utils.is_private_path("_drafts/note.md")
    assert utils.is_private_path("blog/_hidden/file.txt")
    assert utils.is_private_path(".git/HEAD")
    assert utils.is_private_path("css/.DS_Store")
    assert not utils.is_private_path("about.html")
    assert not utils.is_private_path("blog/my_post.md")


def test_is_within():
    assert utils.is_within("public/index.html", "public")
    assert utils.is_within("public", "public")
    assert not utils.is_within("publications/a.md", "public")
    assert not utils.is_within("index.html", None)
    assert not utils.is_within("index.html", ".")


def test_ensure_clean_dir(tmp_path):
    target = tmp_path / "build"
    (target / "nested").mkdir(parents=True)
    (target / "nested" / "old.txt").write_text("old", encoding="utf-8")
    utils.ensure_clean_dir(target)
    assert list(target.iterdir()) == []

    missing = tmp_path / "missing-dir"
    utils.ensure_clean_dir(missing)
    assert missing.exists()
