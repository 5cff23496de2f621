"""Bar (column) and win/loss chart geometry."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from libs.sparklines.base import ChartLayer, screen_y
from libs.sparklines.dimensions import Dimensions
from libs.sparklines.settings import BarsSettings
from libs.sparklines.types import Group, Point, Rectangle


class Bars(ChartLayer):
    """Builds one rectangle per point with a value.

    A zero value is drawn as a zero height bar on the axis rather than left
    out, the way spreadsheet column charts do it.
    """

    def __init__(
        self,
        points: Sequence[Point],
        dimensions: Dimensions,
        settings: BarsSettings,
        logger: logging.Logger | logging.LoggerAdapter,  # type: ignore[type-arg]
    ) -> None:
        super().__init__(points, dimensions, logger)
        self.settings = settings

    @property
    def bar_margin(self) -> float:
        """Inset on each side of a bar within its slot."""
        if self.settings.margin_percentage is None:
            return 0.0
        return self.settings.margin_percentage / 100 * self.dimensions.step_width / 2

    def bars(self) -> list[Rectangle]:
        step_width = self.dimensions.step_width
        margin = self.bar_margin
        fill = self.settings.fill
        rectangles = []
        for point in self.points:
            coord_y = screen_y(point.y)
            if point.y is None or coord_y is None:
                continue
            rectangles.append(
                Rectangle(
                    x=(point.x - 1) * step_width + margin,
                    # negative bars hang down from the axis
                    y=0.0 if point.y < 0 else coord_y,
                    width=step_width - margin * 2,
                    height=abs(coord_y),
                    fill=fill.negative_color if point.y < 0 else fill.positive_color,
                    fill_opacity=fill.opacity,
                    value=point.value,
                    x_label=point.x_label,
                )
            )
        return rectangles

    def draw(self) -> Group:
        container = self.container()
        container.children.extend(self.bars())
        return container
