"""SVG renderer — renders a laid-out diagram to an SVG string framed for export."""

from __future__ import annotations

from sld_layout.types import Component, ComponentType, ConnectionKind, Diagram, RoutedConnection

# ─── Constants ──────────────────────────────────────────────────────────────

FONT_SIZE = 11
SPEC_FONT_SIZE = 9
ID_FONT_SIZE = 9
FONT_FAMILY = "monospace"
BACKGROUND = "#181818"
MARKER_SIZE = 30  # side of the placeholder square drawn at each component
LABEL_OFFSET = 35  # label baseline below the component centre
SPEC_LINE_STEP = 10
ID_TAG_OFFSET = 42  # id tag centre above the component centre
DIMMED_OPACITY = 0.3

KIND_COLORS: dict[ConnectionKind, str] = {
    ConnectionKind.DC: "#00FFFF",
    ConnectionKind.AC: "#FF00FF",
    ConnectionKind.GROUND: "#00FF00",
}

TYPE_COLORS: dict[ComponentType, str] = {
    ComponentType.PV_ARRAY: "#00FFFF",
    ComponentType.INVERTER: "#FF00FF",
    ComponentType.GRID: "#FFFF00",
    ComponentType.DC_COMBINER: "#00FF00",
    ComponentType.DC_BREAKER: "#FF4500",
    ComponentType.AC_BREAKER: "#FF4500",
    ComponentType.DC_SPD: "#FFD700",
    ComponentType.AC_SPD: "#FFD700",
    ComponentType.LOAD: "#FFA500",
}
DEFAULT_COLOR = "#FFFFFF"


def _escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _font(size: int = FONT_SIZE) -> str:
    return f'font-family="{FONT_FAMILY}" font-size="{size}"'


def _num(v: float) -> str:
    return f"{v:g}"


# ─── Edge Rendering ─────────────────────────────────────────────────────────


def _render_route(route: RoutedConnection) -> str:
    color = KIND_COLORS.get(route.connection.kind, DEFAULT_COLOR)
    parts = [
        f'<path d="{route.path_data()}" fill="none" stroke="{color}" stroke-width="1.5" '
        f'marker-start="url(#dot)" marker-end="url(#arrowhead)"/>',
    ]

    label = route.connection.label
    if label:
        box, anchor = route.label_box, route.label_anchor
        parts.append(
            f'<rect x="{_num(box.x)}" y="{_num(box.y)}" width="{_num(box.width)}" height="{_num(box.height)}" '
            f'rx="4" fill="#000" stroke="#333" stroke-width="0.5"/>'
        )
        parts.append(
            f'<text x="{_num(anchor.x)}" y="{_num(anchor.y + 3)}" text-anchor="middle" '
            f'{_font(SPEC_FONT_SIZE)} fill="#FFFF00">{_escape(label)}</text>'
        )

    return "\n".join(parts)


# ─── Component Rendering ────────────────────────────────────────────────────


def _render_component(comp: Component, dimmed: bool) -> str:
    x, y = comp.x or 0, comp.y or 0
    color = TYPE_COLORS.get(comp.type, DEFAULT_COLOR)
    half = MARKER_SIZE / 2
    opacity = f' opacity="{DIMMED_OPACITY}"' if dimmed else ""

    parts = [
        f'<g id="{_escape(comp.id)}"{opacity}>',
        f'<rect x="{_num(x - half)}" y="{_num(y - half)}" width="{MARKER_SIZE}" height="{MARKER_SIZE}" '
        f'rx="4" fill="#222" stroke="{color}" stroke-width="1.5"/>',
        f'<text x="{_num(x)}" y="{_num(y - ID_TAG_OFFSET)}" text-anchor="middle" '
        f'{_font(ID_FONT_SIZE)} fill="#00FF00">#{_escape(comp.id)}</text>',
        f'<text x="{_num(x)}" y="{_num(y + LABEL_OFFSET)}" text-anchor="middle" '
        f'{_font()} font-weight="bold" fill="white">{_escape(comp.label)}</text>',
    ]
    for i, spec in enumerate(comp.specs):
        sy = y + LABEL_OFFSET + 13 + i * SPEC_LINE_STEP
        parts.append(
            f'<text x="{_num(x)}" y="{_num(sy)}" text-anchor="middle" {_font(SPEC_FONT_SIZE)} fill="#CCC">'
            f"{_escape(spec)}</text>"
        )
    parts.append("</g>")
    return "\n".join(parts)


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG renderer — consumes a Diagram, produces an SVG string.

    The viewBox is the diagram's export bounds, independent of any viewport
    pan or zoom. When ``highlight`` is non-empty, components outside it are
    dimmed.
    """

    def __init__(self, highlight: set[str] | None = None) -> None:
        self.highlight = highlight or set()

    def render(self, diagram: Diagram) -> str:
        b = diagram.bounds
        w, h = _num(b.width), _num(b.height)
        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" '
            f'viewBox="{_num(b.x)} {_num(b.y)} {w} {h}">',
            f"<title>{_escape(diagram.meta.project_name)}</title>",
            "<defs>",
            '  <marker id="arrowhead" markerWidth="8" markerHeight="6" refX="7" refY="3" orient="auto">',
            '    <polygon points="0 0, 8 3, 0 6" fill="#FFF"/>',
            "  </marker>",
            '  <marker id="dot" markerWidth="6" markerHeight="6" refX="3" refY="3">',
            '    <circle cx="3" cy="3" r="2" fill="#FFF"/>',
            "  </marker>",
            "</defs>",
            f'<rect x="{_num(b.x)}" y="{_num(b.y)}" width="{w}" height="{h}" fill="{BACKGROUND}"/>',
        ]

        # Edges behind components
        for route in diagram.routes:
            parts.append(_render_route(route))

        for comp in diagram.layout.placed:
            dimmed = bool(self.highlight) and comp.id not in self.highlight
            parts.append(_render_component(comp, dimmed))

        parts.append("</svg>")
        return "\n".join(parts)
