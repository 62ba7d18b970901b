"""Layout pipeline: topology → subtree metrics → position assignment.

``compute_layout`` is the entry point. When every component is already
pinned the pipeline is skipped and only the canvas height is recomputed.
"""

from __future__ import annotations

from dataclasses import replace

from sld_layout.config import LayoutConfig
from sld_layout.layout.metrics import compute_subtree_heights, own_height, subtree_height
from sld_layout.layout.placement import assign_positions, rank_x
from sld_layout.layout.topology import Forest, build_forest, orient, root_order_key
from sld_layout.types import Component, Connection, LayoutIssue, LayoutResult

__all__ = [
    "Forest",
    "assign_positions",
    "build_forest",
    "compute_layout",
    "compute_subtree_heights",
    "orient",
    "own_height",
    "rank_x",
    "root_order_key",
    "subtree_height",
]


def compute_layout(
    components: list[Component],
    connections: list[Connection],
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """Resolve a position for every component.

    The input list is never mutated; ``placed`` is a new list in input order.
    """
    config = config or LayoutConfig()

    if all(comp.is_pinned for comp in components):
        max_y = max((comp.y for comp in components), default=0)
        # Dangling references still get reported even though nothing moves.
        forest = build_forest(components, connections)
        return LayoutResult(
            placed=list(components),
            total_height=max(config.min_canvas_height, max_y + config.pinned_canvas_margin),
            issues=list(forest.issues),
        )

    forest = build_forest(components, connections)
    issues: list[LayoutIssue] = list(forest.issues)
    heights = compute_subtree_heights(forest, config, issues)
    positions, cursor = assign_positions(forest, heights, config)

    placed = [
        replace(
            comp,
            x=comp.x if comp.x is not None else positions[comp.id].x,
            y=comp.y if comp.y is not None else positions[comp.id].y,
        )
        for comp in components
    ]

    return LayoutResult(
        placed=placed,
        total_height=max(config.min_canvas_height, cursor + config.canvas_margin),
        issues=issues,
    )
