"""Sparklines: small inline line, area, column and win/loss charts.

This module provides the layout and geometry engine and an SVG surface:
- SparkLines: chart orchestrator (settings, values, render, hover)
- SparklineSettings: validated settings with copy-on-write updates
- SvgSurface: drawing surface rendering the primitives as SVG markup
- SparkLineGraph, SparkLineColumnChart, SparkLineWinLoss: pre-configured charts
"""

from __future__ import annotations

from libs.sparklines.dimensions import Dimensions, compute_dimensions
from libs.sparklines.hover import HoverController, build_point_index, find_point
from libs.sparklines.points import map_values, rescale_points
from libs.sparklines.segments import segment_points
from libs.sparklines.settings import (
    ResolvedSettings,
    SparklineSettings,
    SparklinesProps,
    resolve_settings,
)
from libs.sparklines.sparklines import SparkLines
from libs.sparklines.svg import DrawingSurface, SvgSurface
from libs.sparklines.types import ClientRect, Point, PointerEvent
from libs.sparklines.values import LabeledValue, PlainValue, parse_values, to_number
from libs.sparklines.variants import SparkLineColumnChart, SparkLineGraph, SparkLineWinLoss

__all__ = [
    # Chart
    "SparkLines",
    "SparkLineColumnChart",
    "SparkLineGraph",
    "SparkLineWinLoss",
    # Settings
    "ResolvedSettings",
    "SparklineSettings",
    "SparklinesProps",
    "resolve_settings",
    # Pipeline
    "Dimensions",
    "HoverController",
    "LabeledValue",
    "PlainValue",
    "Point",
    "build_point_index",
    "compute_dimensions",
    "find_point",
    "map_values",
    "parse_values",
    "rescale_points",
    "segment_points",
    "to_number",
    # Surface
    "ClientRect",
    "DrawingSurface",
    "PointerEvent",
    "SvgSurface",
]
