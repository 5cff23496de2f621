"""SVG drawing surface for sparklines."""

from libs.sparklines.svg.renderer import render_primitive, render_svg
from libs.sparklines.svg.surface import DrawingSurface, PointerHandler, SvgSurface

__all__ = [
    "DrawingSurface",
    "PointerHandler",
    "SvgSurface",
    "render_primitive",
    "render_svg",
]
