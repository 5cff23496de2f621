"""Shared base for chart layers (lines, bars)."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from libs.sparklines.dimensions import Dimensions
from libs.sparklines.types import Group, Point, translate


def screen_y(y: float | None) -> float | None:
    """Flip a value to SVG space, where y grows downwards.

    Zero is returned as is, so no -0 ends up in the output.
    """
    if y is None:
        return None
    return -y if y != 0 else y


class ChartLayer:
    """Base of a layer that turns points into drawing primitives.

    Attributes:
        points: Rescaled points, sorted by x
        dimensions: Viewport of the current render
        logger: Logger injected by the owning chart
    """

    def __init__(
        self,
        points: Sequence[Point],
        dimensions: Dimensions,
        logger: logging.Logger | logging.LoggerAdapter,  # type: ignore[type-arg]
    ) -> None:
        self.points = list(points)
        self.dimensions = dimensions
        self.logger = logger

    def step_x(self, x: float) -> float:
        """X of a point on a line: points spread over the full plot width."""
        return (x - 1) * self.dimensions.x_step

    def slot_x(self, x: float) -> float:
        """X of the center of a point's bar slot."""
        return (x - 1) * self.dimensions.step_width + self.dimensions.step_width / 2

    def container(self) -> Group:
        return Group(transform=translate(self.dimensions.margin_x, self.dimensions.margin_y))
