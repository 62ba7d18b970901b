"""Subtree metrics — vertical space each node's subtree needs."""

from __future__ import annotations

import logging

from sld_layout.config import LayoutConfig
from sld_layout.layout.topology import Forest
from sld_layout.types import Component, IssueKind, LayoutIssue

logger = logging.getLogger(__name__)


def own_height(comp: Component, config: LayoutConfig) -> float:
    """Height of a single node: icon block plus one line per spec."""
    return config.base_node_height + len(comp.specs) * config.spec_line_height


def subtree_height(
    forest: Forest,
    node_id: str,
    config: LayoutConfig,
    memo: dict[str, float],
    visiting: set[str],
    issues: list[LayoutIssue] | None = None,
) -> float:
    """Post-order subtree height, memoised in ``memo``.

    ``visiting`` holds the ids on the current recursion path. Re-entering one
    of them means the parentage is cyclic; that occurrence counts as zero
    height so the walk terminates.
    """
    if node_id in memo:
        return memo[node_id]
    if node_id in visiting:
        logger.warning("Cyclic parentage through %r; treating revisit as empty", node_id)
        if issues is not None:
            issues.append(LayoutIssue(kind=IssueKind.CYCLIC_PARENTAGE, subject=node_id))
        return 0.0

    mine = own_height(forest.component(node_id), config)
    children = forest.children(node_id)
    if not children:
        memo[node_id] = mine
        return mine

    visiting.add(node_id)
    total = sum(subtree_height(forest, child, config, memo, visiting, issues) for child in children)
    visiting.discard(node_id)

    memo[node_id] = max(mine, total)
    return memo[node_id]


def compute_subtree_heights(
    forest: Forest,
    config: LayoutConfig | None = None,
    issues: list[LayoutIssue] | None = None,
) -> dict[str, float]:
    """Subtree height for every node in the forest.

    Roots go first; nodes only reachable through a cycle are visited after,
    in sorted order.
    """
    config = config or LayoutConfig()
    memo: dict[str, float] = {}
    for root in forest.roots:
        subtree_height(forest, root, config, memo, set(), issues)
    for node_id in sorted(forest.graph.nodes):
        subtree_height(forest, node_id, config, memo, set(), issues)
    return memo
