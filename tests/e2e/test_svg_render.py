"""End-to-end tests: document → layout → routing → SVG, plus a drag round trip."""

from __future__ import annotations

from sld_layout.api import commit_drag, layout_document, render_svg
from sld_layout.document import Document
from sld_layout.history import RevisionHistory
from sld_layout.viewport import PointerEvent, ViewState, move, press, release

SOLAR_SYSTEM = {
    "meta": {"projectName": "Farm <A>", "location": "Cairo", "totalCapacity": "5 kWp", "systemVoltage": "400 V"},
    "components": [
        {"id": "pv", "type": "PV_ARRAY", "label": "PV", "specs": ["550W", "10 Strings"]},
        {"id": "dcb", "type": "DC_BREAKER", "label": "DC CB", "specs": []},
        {"id": "inv", "type": "INVERTER", "label": "Inverter", "specs": ["5kW"]},
        {"id": "acb", "type": "AC_BREAKER", "label": "AC CB", "specs": []},
        {"id": "grid", "type": "GRID", "label": "Utility Grid", "specs": ["380V / 50Hz"]},
    ],
    "connections": [
        {"from": "pv", "to": "dcb", "label": "4x6mm2", "type": "DC"},
        {"from": "dcb", "to": "inv", "label": "", "type": "DC"},
        {"from": "inv", "to": "acb", "label": "AC out", "type": "AC"},
        {"from": "acb", "to": "grid", "label": "Service", "type": "AC"},
        {"from": "grid", "to": "ghost", "label": "earth", "type": "GROUND"},
    ],
}


class TestLayoutDocument:
    def test_diagram_parts(self):
        diagram = layout_document(Document.from_dict(SOLAR_SYSTEM))
        assert len(diagram.layout.placed) == 5
        assert len(diagram.routes) == 4
        assert len(diagram.layout.issues) == 1
        assert diagram.meta.project_name == "Farm <A>"

        xs = [c.x for c in diagram.layout.placed]
        assert diagram.bounds.x == min(xs) - 150
        assert diagram.bounds.width == max(xs) - min(xs) + 300


class TestRenderSvg:
    def test_structure(self):
        svg = render_svg(Document.from_dict(SOLAR_SYSTEM))
        assert svg.startswith("<svg ")
        assert svg.endswith("</svg>")
        assert svg.count("<path ") == 4
        assert svg.count('<g id="') == 5
        assert "ghost" not in svg
        assert "<title>Farm &lt;A&gt;</title>" in svg

    def test_edges_drawn_before_components(self):
        svg = render_svg(Document.from_dict(SOLAR_SYSTEM))
        assert svg.rindex("<path ") < svg.index('<g id="')

    def test_kind_colours(self):
        svg = render_svg(Document.from_dict(SOLAR_SYSTEM))
        assert 'stroke="#00FFFF" stroke-width="1.5" marker-start' in svg
        assert 'stroke="#FF00FF" stroke-width="1.5" marker-start' in svg

    def test_search_dims_non_matches(self):
        svg = render_svg(Document.from_dict(SOLAR_SYSTEM), query="inv")
        assert svg.count('opacity="0.3"') == 4
        assert '<g id="inv">' in svg

    def test_empty_document(self):
        svg = render_svg(Document())
        assert 'viewBox="0 0 800 600"' in svg

    def test_deterministic(self):
        doc = Document.from_dict(SOLAR_SYSTEM)
        assert render_svg(doc) == render_svg(doc)


class TestDragRoundTrip:
    def test_drag_commit_creates_undoable_revision(self):
        history = RevisionHistory(Document.from_dict(SOLAR_SYSTEM))
        diagram = layout_document(history.current)
        inv = diagram.layout.by_id()["inv"]

        view = press(ViewState(), PointerEvent(inv.x, inv.y), diagram.layout.placed)
        view = move(view, PointerEvent(inv.x + 23, inv.y + 47))
        view, moved = release(view)
        commit_drag(history, diagram.layout, moved)

        committed = {c.id: c for c in history.current.components}
        assert (committed["inv"].x, committed["inv"].y) == (inv.x + 20, inv.y + 40)
        assert all(c.is_pinned for c in committed.values())

        relaid = layout_document(history.current).layout.by_id()
        for comp_id, before in diagram.layout.by_id().items():
            if comp_id != "inv":
                assert (relaid[comp_id].x, relaid[comp_id].y) == (before.x, before.y)

        assert history.can_undo
        assert history.undo() == Document.from_dict(SOLAR_SYSTEM)
