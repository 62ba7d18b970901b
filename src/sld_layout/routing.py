"""Connection routing — horizontal-tangent cubic Bezier curves between components.

Each curve leaves the right side of the source icon and enters the left side
of the target icon. Both control points are pulled out horizontally, so the
curve is flat at both ends and bends into an S when the endpoints sit at
different heights.
"""

from __future__ import annotations

import logging

from sld_layout.config import LABEL_CHAR_WIDTH, LABEL_HEIGHT, LABEL_PADDING, LayoutConfig
from sld_layout.types import Component, Connection, Point, Rect, RoutedConnection

logger = logging.getLogger(__name__)


def cubic_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Point on a cubic Bezier at parameter ``t``."""
    u = 1 - t
    a = u**3
    b = 3 * u**2 * t
    c = 3 * u * t**2
    d = t**3
    return Point(
        x=a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        y=a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def label_box(anchor: Point, label: str) -> Rect:
    """Background box for a label, centred on its anchor and sized to its text."""
    width = len(label) * LABEL_CHAR_WIDTH + LABEL_PADDING
    return Rect(x=anchor.x - width / 2, y=anchor.y - LABEL_HEIGHT / 2, width=width, height=LABEL_HEIGHT)


def route_between(
    source: Point,
    target: Point,
    connection: Connection,
    config: LayoutConfig | None = None,
) -> RoutedConnection:
    """Route one connection between two component centres."""
    config = config or LayoutConfig()

    start = Point(x=source.x + config.anchor_inset, y=source.y)
    end = Point(x=target.x - config.anchor_inset, y=target.y)

    offset = max(abs(end.x - start.x) * 0.5, config.min_curvature)
    control1 = Point(x=start.x + offset, y=start.y)
    control2 = Point(x=end.x - offset, y=end.y)

    anchor = cubic_point(start, control1, control2, end, 0.5)

    return RoutedConnection(
        connection=connection,
        start=start,
        control1=control1,
        control2=control2,
        end=end,
        label_anchor=anchor,
        label_box=label_box(anchor, connection.label),
    )


def route_connections(
    placed: list[Component],
    connections: list[Connection],
    config: LayoutConfig | None = None,
) -> list[RoutedConnection]:
    """Route every connection whose endpoints are both placed.

    Connections referencing an unknown or unplaced id are skipped. Edges that
    the layout forest discarded (second parents) are routed like any other.
    """
    index: dict[str, Component] = {}
    for comp in placed:
        index.setdefault(comp.id, comp)

    routes: list[RoutedConnection] = []
    for conn in connections:
        source = index.get(conn.from_id)
        target = index.get(conn.to_id)
        if source is None or target is None or not source.is_pinned or not target.is_pinned:
            logger.debug("Not routing %s -> %s: endpoint missing or unplaced", conn.from_id, conn.to_id)
            continue
        routes.append(
            route_between(Point(x=source.x, y=source.y), Point(x=target.x, y=target.y), conn, config)
        )
    return routes
