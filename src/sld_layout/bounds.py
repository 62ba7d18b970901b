"""Export framing — the padded world rectangle around all placed components."""

from __future__ import annotations

from sld_layout.config import EMPTY_EXPORT_HEIGHT, EMPTY_EXPORT_WIDTH, EXPORT_PADDING
from sld_layout.types import Component, Rect


def bounding_box(placed: list[Component], padding: float = EXPORT_PADDING) -> Rect:
    """Smallest rectangle containing every component centre, grown by ``padding``.

    Independent of the interactive viewport. With nothing placed, returns a
    fixed default frame. Unplaced components count as sitting at the origin.
    """
    if not placed:
        return Rect(x=0, y=0, width=EMPTY_EXPORT_WIDTH, height=EMPTY_EXPORT_HEIGHT)

    xs = [comp.x if comp.x is not None else 0 for comp in placed]
    ys = [comp.y if comp.y is not None else 0 for comp in placed]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)

    return Rect(
        x=min_x - padding,
        y=min_y - padding,
        width=(max_x - min_x) + 2 * padding,
        height=(max_y - min_y) + 2 * padding,
    )
