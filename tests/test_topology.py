"""Tests for layout/topology.py — forest reconstruction from the connection list.

Covers:
  - orient (rank-based parent/child, terminal loads, equal-rank ties)
  - build_forest (roots, first-writer-wins parentage, dangling references)
"""

from __future__ import annotations

import logging

from sld_layout.layout.topology import build_forest, orient
from sld_layout.types import Component, ComponentType, Connection, IssueKind

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_comp(comp_id: str, comp_type: ComponentType) -> Component:
    return Component(id=comp_id, type=comp_type, label=comp_id)


def make_conn(from_id: str, to_id: str) -> Connection:
    return Connection(from_id=from_id, to_id=to_id)


# ─── orient Tests ─────────────────────────────────────────────────────────────


class TestOrient:
    def test_higher_rank_target_is_parent(self):
        """PV → inverter as recorded: the inverter (higher rank) is the parent."""
        pv = make_comp("pv", ComponentType.PV_ARRAY)
        inv = make_comp("inv", ComponentType.INVERTER)
        assert orient(make_conn("pv", "inv"), pv, inv) == ("inv", "pv")

    def test_reversed_recording_is_corrected(self):
        """Grid → breaker recorded backwards still makes the grid the parent."""
        grid = make_comp("grid", ComponentType.GRID)
        acb = make_comp("acb", ComponentType.AC_BREAKER)
        assert orient(make_conn("grid", "acb"), grid, acb) == ("grid", "acb")

    def test_load_is_always_child_as_target(self):
        """Distribution (rank 3) → load (rank 3.5): load stays the child."""
        db = make_comp("db", ComponentType.AC_DISTRIBUTION)
        load = make_comp("load", ComponentType.LOAD)
        assert orient(make_conn("db", "load"), db, load) == ("db", "load")

    def test_load_is_always_child_as_source(self):
        """Load → distribution: the distribution board is the parent."""
        db = make_comp("db", ComponentType.AC_DISTRIBUTION)
        load = make_comp("load", ComponentType.LOAD)
        assert orient(make_conn("load", "db"), load, db) == ("db", "load")

    def test_load_child_of_higher_rank_meter(self):
        meter = make_comp("m", ComponentType.METER)
        load = make_comp("load", ComponentType.LOAD)
        assert orient(make_conn("m", "load"), meter, load) == ("m", "load")

    def test_equal_rank_keeps_recorded_direction(self):
        """Equal ranks: the recorded ``to`` end is the parent."""
        a = make_comp("a", ComponentType.AC_BREAKER)
        b = make_comp("b", ComponentType.AC_BREAKER)
        assert orient(make_conn("a", "b"), a, b) == ("b", "a")
        assert orient(make_conn("b", "a"), b, a) == ("a", "b")


# ─── build_forest Tests ───────────────────────────────────────────────────────


class TestBuildForest:
    def test_chain_has_single_root(self):
        """PV → DC breaker → inverter → grid: grid is the only root."""
        components = [
            make_comp("pv", ComponentType.PV_ARRAY),
            make_comp("dcb", ComponentType.DC_BREAKER),
            make_comp("inv", ComponentType.INVERTER),
            make_comp("grid", ComponentType.GRID),
        ]
        connections = [make_conn("pv", "dcb"), make_conn("dcb", "inv"), make_conn("inv", "grid")]
        forest = build_forest(components, connections)

        assert forest.roots == ["grid"]
        assert forest.children("grid") == ["inv"]
        assert forest.children("inv") == ["dcb"]
        assert forest.children("dcb") == ["pv"]
        assert forest.children("pv") == []
        assert forest.parent("pv") == "dcb"
        assert forest.parent("grid") is None

    def test_children_sorted_by_id(self):
        """Children come back in lexicographic id order, not insertion order."""
        components = [
            make_comp("grid", ComponentType.GRID),
            make_comp("inv_b", ComponentType.INVERTER),
            make_comp("inv_a", ComponentType.INVERTER),
        ]
        forest = build_forest(components, [make_conn("inv_b", "grid"), make_conn("inv_a", "grid")])
        assert forest.children("grid") == ["inv_a", "inv_b"]

    def test_unconnected_components_are_roots_by_rank(self):
        """Roots are ordered highest rank first, then by id."""
        components = [
            make_comp("pv", ComponentType.PV_ARRAY),
            make_comp("m", ComponentType.METER),
            make_comp("grid", ComponentType.GRID),
            make_comp("inv_b", ComponentType.INVERTER),
            make_comp("inv_a", ComponentType.INVERTER),
        ]
        forest = build_forest(components, [])
        assert forest.roots == ["grid", "m", "inv_a", "inv_b", "pv"]

    def test_first_parent_wins(self):
        """An inverter feeding both grid and meter keeps the first parent only."""
        components = [
            make_comp("inv", ComponentType.INVERTER),
            make_comp("grid", ComponentType.GRID),
            make_comp("m", ComponentType.METER),
        ]
        second = make_conn("inv", "m")
        forest = build_forest(components, [make_conn("inv", "grid"), second])

        assert forest.parent_of == {"inv": "grid"}
        assert forest.extra_edges == [second]
        assert forest.roots == ["grid", "m"]

    def test_dangling_reference_dropped(self, caplog):
        """A connection to an unknown id is dropped, reported, and not fatal."""
        components = [make_comp("pv", ComponentType.PV_ARRAY)]
        ghost_edge = make_conn("pv", "ghost")
        with caplog.at_level(logging.WARNING, logger="sld_layout.layout.topology"):
            forest = build_forest(components, [ghost_edge])

        assert forest.dropped == [ghost_edge]
        assert forest.roots == ["pv"]
        assert len(forest.issues) == 1
        assert forest.issues[0].kind == IssueKind.MALFORMED_REFERENCE
        assert forest.issues[0].subject == "ghost"
        assert "ghost" in caplog.text

    def test_self_loop_is_extra_edge(self):
        components = [make_comp("a", ComponentType.METER)]
        loop = make_conn("a", "a")
        forest = build_forest(components, [loop])
        assert forest.extra_edges == [loop]
        assert forest.graph.number_of_edges() == 0

    def test_duplicate_ids_keep_first(self):
        first = make_comp("x", ComponentType.GRID)
        second = make_comp("x", ComponentType.PV_ARRAY)
        forest = build_forest([first, second], [])
        assert forest.component("x") is first
        assert forest.roots == ["x"]

    def test_empty(self):
        forest = build_forest([], [])
        assert forest.roots == []
        assert forest.graph.number_of_nodes() == 0
