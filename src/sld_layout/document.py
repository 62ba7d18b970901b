"""Document revisions — the component/connection set handed to the layout core.

``Document.from_dict`` is the validation boundary: it accepts the wire shape
produced by the design assistant (``from``/``to``/``type`` on connections,
camelCase project metadata) and raises ``DocumentError`` on anything the core
should never see.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field, replace
from typing import Any

from sld_layout.errors import DocumentError
from sld_layout.types import Component, ComponentType, Connection, ConnectionKind, ProjectMeta

_META_KEYS = {
    "projectName": "project_name",
    "location": "location",
    "totalCapacity": "total_capacity",
    "systemVoltage": "system_voltage",
}


@dataclass(frozen=True)
class Document:
    """One complete revision of a diagram."""

    meta: ProjectMeta = field(default_factory=ProjectMeta)
    components: tuple[Component, ...] = ()
    connections: tuple[Connection, ...] = ()

    @classmethod
    def initial(cls) -> Document:
        """A fresh project: just the utility grid."""
        grid = Component(id="grid", type=ComponentType.GRID, label="Utility Grid", specs=("380V / 50Hz",))
        return cls(components=(grid,))

    # ── Parsing ──────────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, raw: Any) -> Document:
        if not isinstance(raw, dict):
            raise DocumentError("document must be an object")

        meta_raw = raw.get("meta") or {}
        if not isinstance(meta_raw, dict):
            raise DocumentError("must be an object", path="meta")
        meta_fields = {attr: str(meta_raw[key]) for key, attr in _META_KEYS.items() if key in meta_raw}

        components_raw = raw.get("components", [])
        connections_raw = raw.get("connections", [])
        if not isinstance(components_raw, list):
            raise DocumentError("must be a list", path="components")
        if not isinstance(connections_raw, list):
            raise DocumentError("must be a list", path="connections")

        components = tuple(_parse_component(item, f"components[{i}]") for i, item in enumerate(components_raw))
        connections = tuple(_parse_connection(item, f"connections[{i}]") for i, item in enumerate(connections_raw))
        return cls(meta=ProjectMeta(**meta_fields), components=components, connections=connections)

    @classmethod
    def from_json(cls, text: str) -> Document:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DocumentError(f"invalid JSON: {exc.msg}") from exc
        return cls.from_dict(raw)

    def to_dict(self) -> dict[str, Any]:
        meta = {key: getattr(self.meta, attr) for key, attr in _META_KEYS.items()}
        components = []
        for comp in self.components:
            item: dict[str, Any] = {
                "id": comp.id,
                "type": comp.type.value,
                "label": comp.label,
                "specs": list(comp.specs),
            }
            if comp.x is not None:
                item["x"] = comp.x
            if comp.y is not None:
                item["y"] = comp.y
            components.append(item)
        connections = [
            {"from": conn.from_id, "to": conn.to_id, "label": conn.label, "type": conn.kind.value}
            for conn in self.connections
        ]
        return {"meta": meta, "components": components, "connections": connections}

    # ── Edits ────────────────────────────────────────────────────────────────

    def with_components(self, components: list[Component]) -> Document:
        return replace(self, components=tuple(components))

    def with_label(self, component_id: str, label: str) -> Document:
        return self._edit(component_id, label=label)

    def with_specs(self, component_id: str, text: str) -> Document:
        """Replace spec lines from newline-separated text."""
        return self._edit(component_id, specs=tuple(text.split("\n")))

    def _edit(self, component_id: str, **changes: Any) -> Document:
        if not any(comp.id == component_id for comp in self.components):
            return self
        return self.with_components(
            [replace(comp, **changes) if comp.id == component_id else comp for comp in self.components]
        )


def _parse_component(item: Any, path: str) -> Component:
    if not isinstance(item, dict):
        raise DocumentError("must be an object", path=path)

    comp_id = item.get("id")
    if not isinstance(comp_id, str) or not comp_id:
        raise DocumentError("id must be a non-empty string", path=path)

    try:
        comp_type = ComponentType(item.get("type"))
    except ValueError:
        raise DocumentError(f"unknown component type {item.get('type')!r}", path=path) from None

    specs = item.get("specs") or []
    if not isinstance(specs, list):
        raise DocumentError("specs must be a list", path=path)

    return Component(
        id=comp_id,
        type=comp_type,
        label=str(item.get("label", "")),
        specs=tuple(str(s) for s in specs),
        x=_coordinate(item.get("x"), f"{path}.x"),
        y=_coordinate(item.get("y"), f"{path}.y"),
    )


def _parse_connection(item: Any, path: str) -> Connection:
    if not isinstance(item, dict):
        raise DocumentError("must be an object", path=path)

    ends = []
    for key in ("from", "to"):
        value = item.get(key)
        if not isinstance(value, str) or not value:
            raise DocumentError(f"{key!r} must be a non-empty string", path=path)
        ends.append(value)

    try:
        kind = ConnectionKind(item.get("type"))
    except ValueError:
        raise DocumentError(f"unknown connection type {item.get('type')!r}", path=path) from None

    return Connection(from_id=ends[0], to_id=ends[1], label=str(item.get("label", "")), kind=kind)


def _coordinate(value: Any, path: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DocumentError("coordinate must be a number", path=path)
    if not math.isfinite(value):
        raise DocumentError("coordinate must be finite", path=path)
    return value


def find_matches(components: list[Component], query: str) -> set[str]:
    """Ids of components whose id, label or type name contain ``query``."""
    needle = query.strip().lower()
    if not needle:
        return set()
    return {
        comp.id
        for comp in components
        if needle in comp.id.lower() or needle in comp.label.lower() or needle in comp.type.value.lower()
    }
