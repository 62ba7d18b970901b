"""Position assignment — x from type rank, y from recursive band centring."""

from __future__ import annotations

import logging
import math

from sld_layout.config import LayoutConfig, rank_of, snap
from sld_layout.layout.topology import Forest, root_order_key
from sld_layout.types import Component, Point

logger = logging.getLogger(__name__)


def rank_x(comp: Component, config: LayoutConfig) -> float:
    """Snapped x for a component's type rank."""
    return snap(config.base_offset_x + rank_of(comp.type) * config.level_width, config.grid_size)


def assign_positions(
    forest: Forest,
    heights: dict[str, float],
    config: LayoutConfig | None = None,
) -> tuple[dict[str, Point], float]:
    """Assign a position to every node in the forest.

    Roots are stacked top to bottom from ``root_start_y``, each taking a band
    as tall as its subtree plus ``root_gap``. Inside a band the node sits at
    the band centre and its children split the band in proportion to their
    own subtree heights. Pinned axes are kept as-is and anchor their
    children's bands; computed axes are snapped to the grid. A sibling whose
    snapped centre lands too close to the one above is pushed down to the
    next grid line that clears both half-heights.

    Returns ``(positions, cursor)`` where ``cursor`` is the y just past the
    last root band.
    """
    config = config or LayoutConfig()
    positions: dict[str, Point] = {}

    def place(node_id: str, center_y: float) -> None:
        if node_id in positions:
            return
        comp = forest.component(node_id)
        x = comp.x if comp.x is not None else rank_x(comp, config)
        y = comp.y if comp.y is not None else snap(center_y, config.grid_size)
        positions[node_id] = Point(x=x, y=y)

        children = forest.children(node_id)
        if not children:
            return

        band_center = comp.y if comp.y is not None else center_y
        band = heights[node_id]
        child_total = sum(heights[child] for child in children)
        ratio = band / child_total if child_total > 0 else 0.0

        start = band_center - band / 2
        previous: str | None = None
        for child in children:
            share = heights[child] * ratio
            child_center = start + share / 2
            if previous is not None:
                # Snapping can pull neighbours together; keep them a full
                # half-height pair apart, on the grid.
                floor_y = positions[previous].y + (heights[previous] + heights[child]) / 2
                if snap(child_center, config.grid_size) < floor_y:
                    child_center = math.ceil(floor_y / config.grid_size) * config.grid_size
            place(child, child_center)
            if forest.component(child).y is None:
                previous = child
            start += share

    cursor = config.root_start_y
    for root in forest.roots:
        h = heights[root]
        place(root, cursor + h / 2)
        cursor += h + config.root_gap

    # Nodes inside a parent cycle have no root; start each cycle at its
    # highest-ranked member.
    stranded = [n for n in forest.graph.nodes if n not in positions]
    stranded.sort(key=lambda n: root_order_key(forest.component(n)))
    for node_id in stranded:
        if node_id in positions:
            continue
        logger.warning("Component %r is only reachable through a cycle; placing it as a root", node_id)
        h = heights[node_id]
        place(node_id, cursor + h / 2)
        cursor += h + config.root_gap

    return positions, cursor
