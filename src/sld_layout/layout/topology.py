"""Topology normalisation — rebuild a rooted forest from a flat edge list.

Connections arrive in whatever direction the author recorded them. The
forest orients every edge by type rank: the higher-ranked endpoint is the
parent (the grid ends up as a root, PV arrays as leaves). Terminal loads are
always children. A node keeps the first parent it is given; later edges into
an already-parented node stay drawable but do not shape the layout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import networkx as nx

from sld_layout.config import TERMINAL_TYPES, rank_of
from sld_layout.types import Component, Connection, IssueKind, LayoutIssue

logger = logging.getLogger(__name__)


@dataclass
class Forest:
    """Tree edges (parent → child) over the component set.

    The DiGraph is the arena: every component id is a node carrying its
    ``Component`` under the ``data`` attribute, and only tree edges are
    stored. Connections that were not used as tree edges are kept in
    ``extra_edges`` (still rendered) or ``dropped`` (dangling, never rendered).
    """

    graph: nx.DiGraph
    roots: list[str]
    extra_edges: list[Connection] = field(default_factory=list)
    dropped: list[Connection] = field(default_factory=list)
    issues: list[LayoutIssue] = field(default_factory=list)

    def component(self, node_id: str) -> Component:
        return self.graph.nodes[node_id]["data"]

    def children(self, node_id: str) -> list[str]:
        """Children in stacking order (lexicographic by id)."""
        return sorted(self.graph.successors(node_id))

    def parent(self, node_id: str) -> str | None:
        preds = list(self.graph.predecessors(node_id))
        return preds[0] if preds else None

    @property
    def parent_of(self) -> dict[str, str]:
        return {child: parent for parent, child in self.graph.edges()}


def orient(conn: Connection, source: Component, target: Component) -> tuple[str, str]:
    """Return ``(parent_id, child_id)`` for a connection.

    Equal ranks keep the recorded direction: ``to`` is the parent, as power
    is recorded flowing toward the grid.
    """
    source_terminal = source.type in TERMINAL_TYPES
    target_terminal = target.type in TERMINAL_TYPES
    if source_terminal != target_terminal:
        if target_terminal:
            return conn.from_id, conn.to_id
        return conn.to_id, conn.from_id

    if rank_of(source.type) > rank_of(target.type):
        return conn.from_id, conn.to_id
    return conn.to_id, conn.from_id


def root_order_key(comp: Component) -> tuple[float, str]:
    """Roots stack highest rank first, then by id."""
    return (-rank_of(comp.type), comp.id)


def build_forest(components: list[Component], connections: list[Connection]) -> Forest:
    """Build the layout forest.

    Dangling references are dropped with a warning. Self-loops and edges into
    a node that already has a parent are kept as extra (non-tree) edges.
    """
    graph: nx.DiGraph = nx.DiGraph()
    for comp in components:
        if comp.id in graph:
            logger.warning("Duplicate component id %r, keeping the first", comp.id)
            continue
        graph.add_node(comp.id, data=comp)

    extra_edges: list[Connection] = []
    dropped: list[Connection] = []
    issues: list[LayoutIssue] = []

    for conn in connections:
        missing = [end for end in (conn.from_id, conn.to_id) if end not in graph]
        if missing:
            detail = f"{conn.from_id} -> {conn.to_id}: unknown {', '.join(repr(m) for m in missing)}"
            logger.warning("Dropping connection with dangling reference %s", detail)
            dropped.append(conn)
            issues.append(LayoutIssue(kind=IssueKind.MALFORMED_REFERENCE, subject=missing[0], detail=detail))
            continue

        if conn.from_id == conn.to_id:
            extra_edges.append(conn)
            continue

        parent, child = orient(conn, graph.nodes[conn.from_id]["data"], graph.nodes[conn.to_id]["data"])

        if graph.in_degree(child) > 0 or graph.has_edge(parent, child):
            logger.debug("Ignoring second parent %r for %r", parent, child)
            extra_edges.append(conn)
            continue

        graph.add_edge(parent, child, data=conn)

    roots = [node_id for node_id in graph.nodes if graph.in_degree(node_id) == 0]
    roots.sort(key=lambda n: root_order_key(graph.nodes[n]["data"]))

    return Forest(graph=graph, roots=roots, extra_edges=extra_edges, dropped=dropped, issues=issues)
