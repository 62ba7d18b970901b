"""Convenience entry points: document → diagram → SVG."""

from __future__ import annotations

from sld_layout.bounds import bounding_box
from sld_layout.config import LayoutConfig
from sld_layout.document import Document, find_matches
from sld_layout.history import RevisionHistory
from sld_layout.layout import compute_layout
from sld_layout.renderers import Renderer, SvgRenderer
from sld_layout.routing import route_connections
from sld_layout.types import Diagram, LayoutResult
from sld_layout.viewport import Repositioned, commit_reposition


def layout_document(document: Document, config: LayoutConfig | None = None) -> Diagram:
    """Run layout, routing and export framing for one revision."""
    config = config or LayoutConfig()
    layout = compute_layout(list(document.components), list(document.connections), config)
    routes = route_connections(layout.placed, list(document.connections), config)
    bounds = bounding_box(layout.placed, config.export_padding)
    return Diagram(layout=layout, routes=routes, bounds=bounds, meta=document.meta)


def render_svg(document: Document, query: str = "", config: LayoutConfig | None = None) -> str:
    """Lay out a document and render it as an export-framed SVG string."""
    diagram = layout_document(document, config)
    renderer: Renderer = SvgRenderer(highlight=find_matches(diagram.layout.placed, query))
    return renderer.render(diagram)


def commit_drag(history: RevisionHistory, layout: LayoutResult, moved: Repositioned) -> Document:
    """Record a finished drag as a new revision.

    The rendered layout is frozen into the revision along with the moved
    component, so nothing else shifts on the next pass.
    """
    document = history.current
    components = commit_reposition(list(document.components), moved, layout.placed)
    return history.push(document.with_components(components))
