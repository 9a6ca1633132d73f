"""Protocol definitions for hidsite.

This module defines the interfaces the site model hands its content to.
Processors are looked up by name in a registry, so any object satisfying
these protocols can render a site.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .layouts import Layout


@runtime_checkable
class Renderable(Protocol):
    """A content object a processor can render.

    Posts and pages satisfy this protocol; assets do not, they are copied.
    """

    path: str
    body: str
    metadata: dict[str, Any]
    layout: Layout | None


@runtime_checkable
class Processor(Protocol):
    """Protocol for rendering content objects.

    Implementations receive a content object's body, metadata and resolved
    layout together with the site context, and return the rendered output.
    """

    @abstractmethod
    def process(self, item: Renderable, context: Mapping[str, Any]) -> str:
        """Render a content object.

        Args:
            item: Post or page to render.
            context: Site-wide variables (configuration, collections).

        Returns:
            Rendered output text.
        """
        ...
