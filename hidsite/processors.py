"""Content processors for hidsite.

A processor turns a post or page into its final output. The site picks its
processor by name from configuration (``processor_name``) and builds it once
from ``processor_args``.

Key classes:
- TemplateProcessor: Renders bodies and layout chains with Jinja2.
- ProcessorRegistry: Name to factory lookup used by the site.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .config import ConfigError
from .protocols import Processor, Renderable

ProcessorFactory = Callable[..., Processor]


class TemplateProcessor:
    """Renders content with Jinja2, wrapping it through its layout chain.

    The body is rendered first. Each layout in the chain, innermost first,
    then renders with the previous result available as ``content``.

    Attributes:
        env: Jinja2 environment used for bodies, layouts and includes.
        default_layout: Path of the site's default layout, if any.
    """

    def __init__(
        self,
        include_path: str | list[str] | None = None,
        default_layout: str | None = None,
        strict: bool = False,
        **options: Any,
    ):
        """Initialize the template processor.

        Args:
            include_path: Directories searched by ``{% include %}``, either
                a list or a colon separated string.
            default_layout: Path of the default layout.
            strict: Fail on undefined variables instead of rendering them
                as empty strings.
            **options: Extra keyword arguments for the Jinja2 Environment.
        """
        if isinstance(include_path, str):
            include_path = [p for p in include_path.split(":") if p]
        self.include_path = list(include_path or [])
        self.default_layout = default_layout
        if strict:
            options.setdefault("undefined", StrictUndefined)
        self.env = Environment(
            loader=FileSystemLoader(self.include_path),
            autoescape=False,
            keep_trailing_newline=True,
            **options,
        )

    def process(self, item: Renderable, context: Mapping[str, Any]) -> str:
        """Render a post or page through its layouts.

        Args:
            item: Content object to render.
            context: Site-wide template variables.

        Returns:
            Rendered output.
        """
        variables = dict(context)
        variables["page"] = item
        rendered = self.render_string(item.body, variables)
        if item.layout is None:
            return rendered
        for layout in item.layout.chain():
            variables["layout"] = layout.metadata
            rendered = self.render_string(layout.content, {**variables, "content": rendered})
        return rendered

    def render_string(self, template: str, context: Mapping[str, Any]) -> str:
        """Render a template string.

        Args:
            template: Template source.
            context: Variables to make available in the template.

        Returns:
            Rendered string.
        """
        return self.env.from_string(template).render(**context)


class ProcessorRegistry:
    """Registry of processor factories keyed by name.

    New processors are added by registering a factory; the site resolves its
    processor once, when the configuration is read.
    """

    def __init__(self):
        """Initialize the registry with the bundled processors."""
        self._factories: dict[str, ProcessorFactory] = {}
        self.register("Template", TemplateProcessor)

    def register(self, name: str, factory: ProcessorFactory) -> None:
        """Register a processor factory under a name.

        Args:
            name: Name used by ``processor_name`` in the configuration.
            factory: Callable building the processor from ``processor_args``.
        """
        self._factories[name] = factory

    def names(self) -> list[str]:
        return sorted(self._factories)

    def create(self, name: str, args: Mapping[str, Any] | list[Any] | None = None) -> Processor:
        """Build the processor registered under ``name``.

        Args:
            name: Registered processor name.
            args: Keyword arguments (mapping) or positional arguments (list).

        Returns:
            The processor instance.

        Raises:
            ConfigError: If no processor is registered under ``name`` or the
                factory rejects the arguments.
        """
        factory = self._factories.get(name)
        if factory is None:
            known = ", ".join(self.names())
            raise ConfigError(f"unknown processor '{name}' (known: {known})")
        try:
            if isinstance(args, Mapping):
                processor = factory(**args)
            elif args is None:
                processor = factory()
            else:
                processor = factory(*args)
        except TypeError as exc:
            raise ConfigError(f"invalid processor_args for '{name}': {exc}") from exc
        if not isinstance(processor, Processor):
            raise ConfigError(f"processor '{name}' does not provide process()")
        return processor


# Default processor registry instance
default_processor_registry = ProcessorRegistry()
