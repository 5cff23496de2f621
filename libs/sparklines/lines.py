"""Line chart geometry: outlines, area fills and dots."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from libs.common.exceptions import ConfigurationError, GeometryError
from libs.common.logging import log_with_context
from libs.sparklines.base import ChartLayer, screen_y
from libs.sparklines.dimensions import Dimensions
from libs.sparklines.segments import Segment, close_segment, segment_is_negative, segment_points
from libs.sparklines.settings import ColorSettings, LineSettings
from libs.sparklines.types import Circle, Group, Path, PathVertex, Point


def _segment_color(color: ColorSettings, segment: Segment) -> str:
    return color.negative_color if segment_is_negative(segment) else color.positive_color


def _dot_color(color: ColorSettings, y: float) -> str:
    if y == 0:
        return color.color
    return color.positive_color if y > 0 else color.negative_color


class Lines(ChartLayer):
    """Builds the primitives of a line chart.

    Lines are drawn per segment (see segments.py) so that each segment can
    take the color for its sign. With ``center_align`` points are placed in
    the middle of the bar slots, for lines drawn on top of bars.
    """

    def __init__(
        self,
        points: Sequence[Point],
        dimensions: Dimensions,
        settings: LineSettings,
        logger: logging.Logger | logging.LoggerAdapter,  # type: ignore[type-arg]
    ) -> None:
        super().__init__(points, dimensions, logger)
        self.settings = settings

    def place_x(self, x: float, center_align: bool) -> float:
        return self.slot_x(x) if center_align else self.step_x(x)

    def _vertices(self, points: Sequence[Point], center_align: bool) -> list[PathVertex]:
        if not points:
            raise GeometryError("Cannot create a path for lines without points")
        return [PathVertex(x=self.place_x(p.x, center_align), y=screen_y(p.y)) for p in points]

    def outline(self, segment: Segment, center_align: bool = False) -> Path:
        """Stroke-only path of one segment."""
        stroke = self.settings.stroke
        return Path(
            vertices=self._vertices(segment, center_align),
            fill="none",
            stroke=_segment_color(stroke, segment),
            stroke_width=self.dimensions.pixel_size * self.settings.stroke_width,
            stroke_opacity=stroke.opacity,
        )

    def area(self, segment: Segment, center_align: bool = False) -> Path:
        """Filled path of one segment, closed along the zero line."""
        fill = self.settings.fill
        if fill is None:
            raise ConfigurationError("Line fill is not specified")
        return Path(
            vertices=self._vertices(close_segment(segment), center_align),
            fill=_segment_color(fill, segment),
            fill_opacity=fill.opacity,
            stroke="none",
        )

    def dots(self, center_align: bool = False) -> list[Circle]:
        """One circle per point with a value."""
        dots = self.settings.dots
        if dots is None:
            raise ConfigurationError("Dots not specified in settings")
        pixel_size = self.dimensions.pixel_size
        circles = []
        for point in self.points:
            center_y = screen_y(point.y)
            if point.y is None or center_y is None:
                continue
            circles.append(
                Circle(
                    center_x=self.place_x(point.x, center_align),
                    center_y=center_y,
                    radius=dots.size * pixel_size / 2,
                    fill=_dot_color(dots.fill, point.y),
                    fill_opacity=dots.fill.opacity,
                    stroke=dots.stroke.color if dots.stroke is not None else None,
                    stroke_width=(
                        dots.stroke_width * pixel_size if dots.stroke_width is not None else None
                    ),
                    value=point.value,
                    x_label=point.x_label,
                )
            )
        return circles

    def draw(self, center_align: bool = False) -> Group:
        container = self.container()
        if self.dimensions.step_width < 1:
            log_with_context(
                self.logger,
                "WARNING",
                "Strokes and dots can look cluttered because the number of values "
                "exceeds the width of the sparkline",
                step_width=self.dimensions.step_width,
            )

        # lines first, dots are drawn on top
        lines_group = Group(name="lines")
        for segment in segment_points(self.points):
            if self.settings.fill is not None:
                lines_group.append(self.area(segment, center_align))
            lines_group.append(self.outline(segment, center_align))
        container.append(lines_group)

        if self.settings.dots is not None:
            container.append(Group(children=list(self.dots(center_align)), name="dots"))
        return container
