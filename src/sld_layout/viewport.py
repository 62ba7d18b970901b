"""Viewport controller — pan, zoom, drag and hit-testing over placed components.

The view is one immutable ``ViewState``. Every handler takes a state and an
input and returns the next state, so the transform maths can be tested
without a UI. The interaction mode is a tagged union of ``Idle``,
``Panning`` and ``Dragging``; a view is never panning and dragging at once.

Screen coordinates are relative to the canvas origin. World coordinates are
the layout's coordinates::

    world = (screen - translate) / scale
    screen = world * scale + translate

Zoom is anchored at the canvas origin: it changes ``scale`` only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Union

from sld_layout.config import GRID_SIZE, HIT_BOX_HEIGHT, HIT_BOX_WIDTH, MAX_SCALE, MIN_SCALE, ZOOM_STEP, snap
from sld_layout.types import Component, Point, Rect

logger = logging.getLogger(__name__)

PRIMARY_BUTTON = 0
MIDDLE_BUTTON = 1


@dataclass(frozen=True)
class PointerEvent:
    """A press or move from the host UI, in screen coordinates."""

    x: float
    y: float
    button: int = PRIMARY_BUTTON
    modifier: bool = False

    @property
    def point(self) -> Point:
        return Point(x=self.x, y=self.y)


# ─── Interaction Modes ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Panning:
    """Pan in progress. ``origin`` is the translate offset at press time."""

    press: Point
    origin: Point


@dataclass(frozen=True)
class Dragging:
    """Drag in progress.

    ``offset`` is the world-space gap between the press point and the
    component centre, so the component does not jump to the cursor.
    ``position`` is the live snapped position, not yet committed.
    """

    component_id: str
    offset: Point
    position: Point


Mode = Union[Idle, Panning, Dragging]


@dataclass(frozen=True)
class ViewState:
    scale: float = 1.0
    translate: Point = Point(x=0, y=0)
    mode: Mode = field(default_factory=Idle)
    selected_id: str | None = None

    @property
    def drag_target(self) -> str | None:
        return self.mode.component_id if isinstance(self.mode, Dragging) else None

    @property
    def pan_active(self) -> bool:
        return isinstance(self.mode, Panning)


@dataclass(frozen=True)
class Repositioned:
    """Emitted once per completed drag, for the document history."""

    id: str
    x: float
    y: float


# ─── Transforms ───────────────────────────────────────────────────────────────


def screen_to_world(view: ViewState, p: Point) -> Point:
    return Point(x=(p.x - view.translate.x) / view.scale, y=(p.y - view.translate.y) / view.scale)


def world_to_screen(view: ViewState, p: Point) -> Point:
    return Point(x=p.x * view.scale + view.translate.x, y=p.y * view.scale + view.translate.y)


def clamp_scale(scale: float) -> float:
    return min(max(MIN_SCALE, scale), MAX_SCALE)


def zoom(view: ViewState, delta: float) -> ViewState:
    """Change scale by ``delta``, clamped to the allowed range."""
    # Rounded so repeated 0.1 steps land on exact tenths.
    return replace(view, scale=clamp_scale(round(view.scale + delta, 6)))


def zoom_in(view: ViewState) -> ViewState:
    return zoom(view, ZOOM_STEP)


def zoom_out(view: ViewState) -> ViewState:
    return zoom(view, -ZOOM_STEP)


def reset_view(view: ViewState) -> ViewState:
    """Back to 100% with no pan. Selection survives; any gesture is dropped."""
    return replace(view, scale=1.0, translate=Point(x=0, y=0), mode=Idle())


# ─── Hit Testing ──────────────────────────────────────────────────────────────


def hit_box(comp: Component) -> Rect:
    """Fixed-size pointer target centred on the component, whatever its icon."""
    x = comp.x or 0
    y = comp.y or 0
    return Rect(x=x - HIT_BOX_WIDTH / 2, y=y - HIT_BOX_HEIGHT / 2, width=HIT_BOX_WIDTH, height=HIT_BOX_HEIGHT)


def hit_test(placed: list[Component], world: Point) -> Component | None:
    """Topmost component whose hit box contains ``world``.

    Later components are drawn on top, so they win.
    """
    for comp in reversed(placed):
        if comp.is_pinned and hit_box(comp).contains(world):
            return comp
    return None


def hover(view: ViewState, placed: list[Component], screen: Point) -> Component | None:
    """Component to inspect under the pointer. Nothing is hovered mid-gesture."""
    if not isinstance(view.mode, Idle):
        return None
    return hit_test(placed, screen_to_world(view, screen))


def tooltip_anchor(view: ViewState, comp: Component) -> Point:
    """Screen position of a component centre, for placing an inspect tooltip."""
    return world_to_screen(view, Point(x=comp.x or 0, y=comp.y or 0))


# ─── Selection ────────────────────────────────────────────────────────────────


def select(view: ViewState, component_id: str | None) -> ViewState:
    return replace(view, selected_id=component_id)


def clear_selection(view: ViewState) -> ViewState:
    return replace(view, selected_id=None)


# ─── Pointer Handlers ─────────────────────────────────────────────────────────


def press(view: ViewState, event: PointerEvent, placed: list[Component]) -> ViewState:
    """Start a pan or a drag.

    Middle button, a modifier-held primary button, or a primary press on
    empty canvas pans. A primary press on a component selects and drags it.
    Presses while a gesture is already active are ignored.
    """
    if not isinstance(view.mode, Idle):
        logger.debug("Ignoring press while %s", type(view.mode).__name__)
        return view

    pans = event.button == MIDDLE_BUTTON or (event.button == PRIMARY_BUTTON and event.modifier)
    if pans:
        return replace(view, mode=Panning(press=event.point, origin=view.translate))

    if event.button != PRIMARY_BUTTON:
        return view

    world = screen_to_world(view, event.point)
    target = hit_test(placed, world)
    if target is None:
        return replace(view, mode=Panning(press=event.point, origin=view.translate))

    current = Point(x=target.x, y=target.y)
    offset = Point(x=world.x - current.x, y=world.y - current.y)
    return replace(
        view,
        selected_id=target.id,
        mode=Dragging(component_id=target.id, offset=offset, position=current),
    )


def move(view: ViewState, event: PointerEvent, grid_size: float = GRID_SIZE) -> ViewState:
    """Update the active gesture from the live pointer."""
    mode = view.mode
    if isinstance(mode, Panning):
        translate = Point(
            x=mode.origin.x + event.x - mode.press.x,
            y=mode.origin.y + event.y - mode.press.y,
        )
        return replace(view, translate=translate)

    if isinstance(mode, Dragging):
        world = screen_to_world(view, event.point)
        position = Point(
            x=snap(world.x - mode.offset.x, grid_size),
            y=snap(world.y - mode.offset.y, grid_size),
        )
        return replace(view, mode=replace(mode, position=position))

    return view


def release(view: ViewState) -> tuple[ViewState, Repositioned | None]:
    """End the active gesture. A drag always commits its last snapped position."""
    mode = view.mode
    idle = replace(view, mode=Idle())
    if isinstance(mode, Dragging):
        return idle, Repositioned(id=mode.component_id, x=mode.position.x, y=mode.position.y)
    return idle, None


# ─── Applying Drags ───────────────────────────────────────────────────────────


def with_drag_preview(placed: list[Component], view: ViewState) -> list[Component]:
    """Placed components with the in-progress drag position applied, for rendering."""
    mode = view.mode
    if not isinstance(mode, Dragging):
        return placed
    return [
        replace(comp, x=mode.position.x, y=mode.position.y) if comp.id == mode.component_id else comp
        for comp in placed
    ]


def commit_reposition(
    components: list[Component],
    moved: Repositioned,
    placed: list[Component] | None = None,
) -> list[Component]:
    """Write a committed drag back into the document's component list.

    When ``placed`` is given, every other component is also pinned at its
    currently rendered position, so the rest of the diagram stays put on the
    next layout pass.
    """
    rendered: dict[str, Component] = {}
    for comp in placed or []:
        rendered.setdefault(comp.id, comp)

    result: list[Component] = []
    for comp in components:
        if comp.id == moved.id:
            result.append(replace(comp, x=moved.x, y=moved.y))
        elif comp.id in rendered:
            shown = rendered[comp.id]
            result.append(replace(comp, x=shown.x, y=shown.y))
        else:
            result.append(comp)
    return result
