"""Layout, routing and viewport engine for electrical single-line diagrams."""

from __future__ import annotations

import logging

from sld_layout.api import commit_drag, layout_document, render_svg
from sld_layout.bounds import bounding_box
from sld_layout.config import RANK_MAP, LayoutConfig, rank_of, snap
from sld_layout.document import Document, find_matches
from sld_layout.errors import DocumentError
from sld_layout.history import RevisionHistory
from sld_layout.layout import build_forest, compute_layout, compute_subtree_heights
from sld_layout.routing import route_between, route_connections
from sld_layout.types import (
    Component,
    ComponentType,
    Connection,
    ConnectionKind,
    Diagram,
    IssueKind,
    LayoutIssue,
    LayoutResult,
    Point,
    ProjectMeta,
    Rect,
    RoutedConnection,
)
from sld_layout.viewport import PointerEvent, Repositioned, ViewState

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "RANK_MAP",
    "Component",
    "ComponentType",
    "Connection",
    "ConnectionKind",
    "Diagram",
    "Document",
    "DocumentError",
    "IssueKind",
    "LayoutConfig",
    "LayoutIssue",
    "LayoutResult",
    "Point",
    "PointerEvent",
    "ProjectMeta",
    "Rect",
    "Repositioned",
    "RevisionHistory",
    "RoutedConnection",
    "ViewState",
    "bounding_box",
    "build_forest",
    "commit_drag",
    "compute_layout",
    "compute_subtree_heights",
    "find_matches",
    "layout_document",
    "rank_of",
    "render_svg",
    "route_between",
    "route_connections",
    "snap",
]
