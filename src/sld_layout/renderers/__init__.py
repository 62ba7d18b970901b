"""Diagram renderers."""

from __future__ import annotations

from sld_layout.renderers.base import Renderer
from sld_layout.renderers.svg import SvgRenderer

__all__ = ["Renderer", "SvgRenderer"]
