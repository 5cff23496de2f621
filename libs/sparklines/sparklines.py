"""
Sparkline chart orchestration.

``SparkLines`` owns the settings and values of one chart, runs the geometry
pipeline on ``render`` and wires pointer events of the drawing surface to the
hover handling:

    values -> map_values -> rescale_points -> compute_dimensions
           -> Bars / Lines layers + hover markers -> surface.mount

Errors raised by the pipeline (``SparklineError`` subclasses) are caught at
the render boundary: the surface shows an error placeholder and the error is
logged. Anything else is a programming error and propagates.

Example:
    >>> chart = SparkLines("revenue-trend")
    >>> chart.set_settings({"width": 100, "height": 20, "bars": {}})
    >>> chart.set_values([3, 1, -2, 5])
    >>> svg = chart.render().to_svg()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from config.settings import get_settings
from libs.common.exceptions import SparklineError
from libs.common.logging import (
    RenderContext,
    get_silent_logger,
    get_sparkline_logger,
    log_with_context,
)
from libs.sparklines.bars import Bars
from libs.sparklines.dimensions import Dimensions, compute_dimensions
from libs.sparklines.hover import (
    BarHoverMarker,
    HoverController,
    HoverMarker,
    LineHoverMarker,
    build_point_index,
)
from libs.sparklines.lines import Lines
from libs.sparklines.points import map_values, rescale_points
from libs.sparklines.settings import ResolvedSettings, SparklineSettings, SparklinesProps
from libs.sparklines.svg.surface import DrawingSurface, SvgSurface
from libs.sparklines.types import Group, Point, PointerEvent
from libs.sparklines.values import ParsedValue, parse_values

ERROR_MESSAGE = "Sparklines error (check log)"
ERROR_MESSAGE_NO_LOG = "Sparklines error"


class SparkLines:
    """One sparkline chart instance.

    Settings and values may be set in any order. Before the first ``render``
    they are only stored; once the surface has content (a chart or an error
    placeholder) every update re-renders.

    Attributes:
        sparkline_id: Id of the chart, reported in logs and set on the surface
        surface: Drawing surface the chart is mounted on
        settings: Current settings, None until set or first rendered
        points: Rescaled points of the last render
        dimensions: Viewport of the last successful render
        hover: Pointer handling of the last render, None without hover
        has_error: Whether the surface currently shows the error placeholder
    """

    def __init__(
        self,
        sparkline_id: str | None = None,
        surface: DrawingSurface | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,  # type: ignore[type-arg]
        log_errors: bool = True,
    ) -> None:
        self.sparkline_id = sparkline_id
        self.surface: DrawingSurface = surface if surface is not None else SvgSurface(sparkline_id)
        self.log_errors = log_errors
        if not log_errors:
            self.logger: logging.Logger | logging.LoggerAdapter = get_silent_logger()  # type: ignore[type-arg]
        elif logger is not None:
            self.logger = logger
        else:
            self.logger = get_sparkline_logger(sparkline_id)

        self.settings: SparklineSettings | None = None
        self.values: list[ParsedValue] | None = None
        self.points: list[Point] = []
        self.dimensions: Dimensions | None = None
        self.hover: HoverController | None = None
        self.has_error = False

    # =========================================================================
    # Input
    # =========================================================================

    def set_settings(self, settings: SparklinesProps | Mapping[str, Any] | str) -> None:
        """Set the settings, or update them when already set.

        An update only changes parts that are already configured (see
        ``SparklineSettings.update``). Invalid settings put the chart in the
        error state and leave the previous settings in place.
        """
        try:
            if self.settings is None:
                self.settings = SparklineSettings(settings)
            else:
                self.settings.update(settings)
            self.check_and_rerender()
        except SparklineError as e:
            self.set_error(e)

    def set_values(self, values: str | Sequence[Any] | None) -> None:
        """Set the values: a list (or its JSON text) of numbers, numeric
        strings, None or ``{"label": ..., "value": ...}`` objects."""
        try:
            self.values = parse_values(values)
            self.check_and_rerender()
        except SparklineError as e:
            self.set_error(e)

    # =========================================================================
    # Rendering
    # =========================================================================

    def check_and_rerender(self) -> None:
        if self.surface.has_content:
            self.render()

    def render(self) -> DrawingSurface:
        """Render the chart onto the surface.

        Default settings (a line chart) are used when none were set.

        Returns:
            The drawing surface
        """
        if self.settings is None:
            self.settings = SparklineSettings()

        with RenderContext():
            self.clear()
            try:
                self._render_chart(self.settings.snapshot)
            except SparklineError as e:
                self.set_error(e)
        return self.surface

    def clear(self) -> None:
        self.surface.clear()
        self.has_error = False
        self.hover = None

    def set_error(self, error: Exception) -> None:
        """Show the error placeholder and log the error."""
        self.has_error = True
        self.surface.show_error(ERROR_MESSAGE if self.log_errors else ERROR_MESSAGE_NO_LOG)
        self.logger.error("Sparkline error: %s", error, exc_info=error)

    def _render_chart(self, settings: ResolvedSettings) -> None:
        points = map_values(self.values or [], settings)
        if not points:
            self.logger.warning("Cannot draw sparklines without values")

        points = rescale_points(points, settings.height, get_settings().large_value_threshold)
        dims = compute_dimensions(settings.width, settings.height, points, settings.marker_size)
        self.points = points
        self.dimensions = dims

        has_lines = settings.line is not None
        has_bars = settings.bars is not None

        markers: list[HoverMarker] = []
        if settings.line is not None and settings.line.hover is not None:
            markers.append(LineHoverMarker(settings.line.hover, dims))
        if settings.bars is not None and settings.bars.hover is not None:
            markers.append(BarHoverMarker(settings.bars.hover, dims))

        # bars first, lines and dots are drawn on top of them
        layers: list[Group] = []
        if settings.bars is not None:
            layers.append(Bars(points, dims, settings.bars, self.logger).draw())
        if settings.line is not None:
            layers.append(Lines(points, dims, settings.line, self.logger).draw(center_align=has_bars))
        layers.extend(marker.container for marker in markers)

        self.surface.mount(dims.box, layers, settings.width, settings.height)

        if settings.on_hover_fn is not None or markers:
            index = build_point_index(points, dims, has_lines, has_bars)
            self.hover = HoverController(index, dims, markers, settings.on_hover_fn)
            self.surface.subscribe("mouseover", self._on_pointer_move)
            self.surface.subscribe("mousemove", self._on_pointer_move)
            self.surface.subscribe("mouseout", self._on_pointer_out)

        log_with_context(
            self.logger,
            "DEBUG",
            "Sparkline rendered",
            points=len(points),
            width=settings.width,
            height=settings.height,
            view_box=[dims.box.x, dims.box.y, dims.box.width, dims.box.height],
        )

    def _on_pointer_move(self, event: PointerEvent) -> None:
        if self.hover is not None:
            self.hover.move(event, self.surface.bounding_box())

    def _on_pointer_out(self, event: PointerEvent) -> None:
        if self.hover is not None:
            self.hover.leave()
