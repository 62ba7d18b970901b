"""Layout constants and the rank table.

All geometry is in world units (SVG user units at scale 1.0).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sld_layout.types import ComponentType

# ─── Rank Table ───────────────────────────────────────────────────────────────

# Horizontal staging: generation → protection → conversion → distribution →
# metering → grid. Fractional ranks put protection devices between stages.
RANK_MAP: dict[ComponentType, float] = {
    ComponentType.PV_ARRAY: 0,
    ComponentType.DC_COMBINER: 1,
    ComponentType.DC_SPD: 1.2,
    ComponentType.DC_BREAKER: 1.5,
    ComponentType.INVERTER: 2,
    ComponentType.AC_BREAKER: 2.5,
    ComponentType.AC_SPD: 2.8,
    ComponentType.AC_DISTRIBUTION: 3,
    ComponentType.LOAD: 3.5,
    ComponentType.METER: 4,
    ComponentType.GRID: 5,
}

DEFAULT_RANK: float = 2

# Always a leaf in the reconstructed tree, whatever the recorded direction.
TERMINAL_TYPES: frozenset[ComponentType] = frozenset({ComponentType.LOAD})

# ─── Layout Geometry ──────────────────────────────────────────────────────────

GRID_SIZE: float = 20
LEVEL_WIDTH: float = 180
BASE_OFFSET_X: float = 100
BASE_NODE_HEIGHT: float = 100
SPEC_LINE_HEIGHT: float = 15
ROOT_START_Y: float = 100
ROOT_GAP: float = 40
CANVAS_MARGIN: float = 100
PINNED_CANVAS_MARGIN: float = 200
MIN_CANVAS_HEIGHT: float = 1000

# ─── Connection Routing ───────────────────────────────────────────────────────

ANCHOR_INSET: float = 35
MIN_CURVATURE: float = 60
LABEL_CHAR_WIDTH: float = 6
LABEL_PADDING: float = 10
LABEL_HEIGHT: float = 16

# ─── Viewport ─────────────────────────────────────────────────────────────────

MIN_SCALE: float = 0.1
MAX_SCALE: float = 4.0
ZOOM_STEP: float = 0.1
HIT_BOX_WIDTH: float = 60
HIT_BOX_HEIGHT: float = 100

# ─── Export Framing ───────────────────────────────────────────────────────────

EXPORT_PADDING: float = 150
EMPTY_EXPORT_WIDTH: float = 800
EMPTY_EXPORT_HEIGHT: float = 600


@dataclass(frozen=True)
class LayoutConfig:
    """Tunable numbers for layout, routing and framing."""

    grid_size: float = GRID_SIZE
    level_width: float = LEVEL_WIDTH
    base_offset_x: float = BASE_OFFSET_X
    base_node_height: float = BASE_NODE_HEIGHT
    spec_line_height: float = SPEC_LINE_HEIGHT
    root_start_y: float = ROOT_START_Y
    root_gap: float = ROOT_GAP
    canvas_margin: float = CANVAS_MARGIN
    pinned_canvas_margin: float = PINNED_CANVAS_MARGIN
    min_canvas_height: float = MIN_CANVAS_HEIGHT
    anchor_inset: float = ANCHOR_INSET
    min_curvature: float = MIN_CURVATURE
    export_padding: float = EXPORT_PADDING


def rank_of(comp_type: ComponentType) -> float:
    return RANK_MAP.get(comp_type, DEFAULT_RANK)


def snap(value: float, grid_size: float = GRID_SIZE) -> float:
    """Round to the nearest grid multiple, halves rounding up."""
    return math.floor(value / grid_size + 0.5) * grid_size
