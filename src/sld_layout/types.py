"""Diagram types shared across the layout pipeline, the viewport and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ComponentType(Enum):
    """Closed set of electrical device kinds that can appear on a diagram."""

    PV_ARRAY = "PV_ARRAY"
    DC_COMBINER = "DC_COMBINER"
    DC_BREAKER = "DC_BREAKER"
    DC_SPD = "DC_SPD"
    INVERTER = "INVERTER"
    AC_BREAKER = "AC_BREAKER"
    AC_SPD = "AC_SPD"
    AC_DISTRIBUTION = "AC_DISTRIBUTION"
    METER = "METER"
    GRID = "GRID"
    LOAD = "LOAD"


class ConnectionKind(Enum):
    DC = "DC"
    AC = "AC"
    GROUND = "GROUND"


@dataclass(frozen=True)
class Component:
    """A device on the diagram.

    ``x``/``y`` are optional: ``None`` means the layout engine decides, a value
    means the position is pinned (by a previous layout or a manual drag).
    """

    id: str
    type: ComponentType
    label: str = ""
    specs: tuple[str, ...] = ()
    x: float | None = None
    y: float | None = None

    @property
    def is_pinned(self) -> bool:
        return self.x is not None and self.y is not None


@dataclass(frozen=True)
class Connection:
    """A cable between two components. Direction is as recorded, not as drawn."""

    from_id: str
    to_id: str
    label: str = ""
    kind: ConnectionKind = ConnectionKind.AC


@dataclass(frozen=True)
class ProjectMeta:
    project_name: str = "New Project"
    location: str = "Unknown"
    total_capacity: str = "0 kWp"
    system_voltage: str = "0 V"


@dataclass(frozen=True)
class Point:
    """A 2D point, in world or screen units depending on context."""

    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle: top-left corner plus size."""

    x: float
    y: float
    width: float
    height: float

    def contains(self, p: Point) -> bool:
        return self.x <= p.x <= self.x + self.width and self.y <= p.y <= self.y + self.height


class IssueKind(Enum):
    MALFORMED_REFERENCE = "malformed_reference"
    CYCLIC_PARENTAGE = "cyclic_parentage"


@dataclass(frozen=True)
class LayoutIssue:
    """A recovered input problem. The layout still completes."""

    kind: IssueKind
    subject: str
    detail: str = ""


@dataclass
class LayoutResult:
    """Output of the layout pipeline.

    ``placed`` holds the input components in input order, every one with a
    concrete ``x``/``y``. ``total_height`` is the canvas height to render into.
    """

    placed: list[Component]
    total_height: float
    issues: list[LayoutIssue] = field(default_factory=list)

    def by_id(self) -> dict[str, Component]:
        index: dict[str, Component] = {}
        for comp in self.placed:
            index.setdefault(comp.id, comp)
        return index


@dataclass(frozen=True)
class RoutedConnection:
    """A connection resolved to cubic Bezier geometry plus its label box."""

    connection: Connection
    start: Point
    control1: Point
    control2: Point
    end: Point
    label_anchor: Point
    label_box: Rect

    def path_data(self) -> str:
        """SVG path ``d`` attribute for the curve."""
        s, c1, c2, e = self.start, self.control1, self.control2, self.end
        return f"M {s.x:g} {s.y:g} C {c1.x:g} {c1.y:g}, {c2.x:g} {c2.y:g}, {e.x:g} {e.y:g}"


@dataclass
class Diagram:
    """Everything a renderer needs: placed components, routed edges, export frame."""

    layout: LayoutResult
    routes: list[RoutedConnection]
    bounds: Rect
    meta: ProjectMeta = field(default_factory=ProjectMeta)
