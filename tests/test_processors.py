"""Tests for the processor registry and the Jinja2 template processor."""

import pytest
from jinja2 import UndefinedError

from hidsite.config import ConfigError
from hidsite.layouts import Layout
from hidsite.processors import ProcessorRegistry, TemplateProcessor


class FakeItem:
    def __init__(self, body, layout=None, metadata=None, title="Fake"):
        self.path = "fake.md"
        self.body = body
        self.layout = layout
        self.metadata = metadata or {}
        self.title = title


def make_chain():
    base = Layout(name="base", path="_layouts/base.html", content="<html>{{ content }}</html>")
    child = Layout(
        name="child",
        path="_layouts/child.html",
        metadata={"layout": "base", "width": "wide"},
        content='<main class="{{ layout.width }}">{{ content }}</main>',
        parent=base,
    )
    return child


def test_template_processor_renders_body_without_layout():
    processor = TemplateProcessor()
    item = FakeItem("Hi {{ page.title }} from {{ config.name }}")
    result = processor.process(item, {"config": {"name": "x"}})
    assert result == "Hi Fake from x"


def test_template_processor_wraps_layout_chain_innermost_first():
    processor = TemplateProcessor()
    item = FakeItem("<p>{{ page.title }}</p>", layout=make_chain())
    assert processor.process(item, {}) == '<html><main class="wide"><p>Fake</p></main></html>'


def test_template_processor_does_not_escape_html():
    processor = TemplateProcessor()
    item = FakeItem("{{ snippet }}")
    assert processor.process(item, {"snippet": "<b>bold</b>"}) == "<b>bold</b>"


def test_template_processor_includes(tmp_path):
    includes = tmp_path / "_includes"
    includes.mkdir()
    (includes / "nav.html").write_text("<nav/>", encoding="utf-8")

    processor = TemplateProcessor(include_path=str(includes))
    item = FakeItem('{% include "nav.html" %}body')
    assert processor.process(item, {}) == "<nav/>body"
    assert processor.include_path == [str(includes)]


def test_template_processor_colon_separated_include_path():
    processor = TemplateProcessor(include_path="a:b", default_layout="_layouts/default.html")
    assert processor.include_path == ["a", "b"]
    assert processor.default_layout == "_layouts/default.html"


def test_strict_processor_rejects_undefined_variables():
    processor = TemplateProcessor(strict=True)
    with pytest.raises(UndefinedError):
        processor.process(FakeItem("{{ missing }}"), {})
    assert TemplateProcessor().process(FakeItem("[{{ missing }}]"), {}) == "[]"


def test_registry_creates_registered_processors():
    registry = ProcessorRegistry()
    assert registry.names() == ["Template"]
    assert isinstance(registry.create("Template"), TemplateProcessor)
    assert isinstance(registry.create("Template", {"strict": True}), TemplateProcessor)
    assert isinstance(registry.create("Template", [["a"]]), TemplateProcessor)


def test_registry_rejects_unknown_names_and_bad_args():
    registry = ProcessorRegistry()
    with pytest.raises(ConfigError, match="unknown processor"):
        registry.create("Missing")
    with pytest.raises(ConfigError, match="invalid processor_args"):
        registry.create("Template", {"INCLUDE_PATH": "x"})


def test_registry_rejects_factories_without_process():
    registry = ProcessorRegistry()
    registry.register("Broken", lambda: object())
    with pytest.raises(ConfigError, match="does not provide process"):
        registry.create("Broken")


def test_registry_accepts_custom_processor():
    class Echo:
        def process(self, item, context):
            return item.body

    registry = ProcessorRegistry()
    registry.register("Echo", Echo)
    assert registry.create("Echo").process(FakeItem("raw"), {}) == "raw"
