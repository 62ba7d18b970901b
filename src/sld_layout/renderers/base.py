"""Renderer protocol for laid-out single-line diagrams."""

from __future__ import annotations

from typing import Protocol

from sld_layout.types import Diagram


class Renderer(Protocol):
    """Turns a placed, routed and framed diagram into a document string.

    Renderers read world coordinates straight from the diagram and use
    ``diagram.bounds`` as their frame; they never re-run layout.
    """

    def render(self, diagram: Diagram) -> str:
        """Render every connection and component of ``diagram``."""
        ...
