"""Ready-made chart variants with pre-filled settings."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from config.settings import get_settings
from libs.sparklines.sparklines import SparkLines
from libs.sparklines.svg.surface import SvgSurface

DEFAULT_BAR_MARGIN_PERCENTAGE = 15
DEFAULT_WIN_COLOR = "green"
DEFAULT_LOSS_COLOR = "red"


class SparkLine:
    """Base of the chart variants: a SparkLines graph on an SVG surface."""

    def __init__(
        self,
        props: dict[str, Any],
        values: str | Sequence[Any] | None,
        sparkline_id: str | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,  # type: ignore[type-arg]
    ) -> None:
        self.surface = SvgSurface(sparkline_id)
        self.graph = SparkLines(sparkline_id, surface=self.surface, logger=logger)
        self.graph.set_settings(props)
        self.graph.set_values(values)

    def render(self) -> SvgSurface:
        self.graph.render()
        return self.surface

    def to_svg(self) -> str:
        return self.render().to_svg()


class SparkLineGraph(SparkLine):
    """Line graph, optionally with dot markers.

    Args:
        width: Width in pixels
        height: Height in pixels
        values: Values to plot
        color: Line color, defaults to the current color
        line_width: Stroke width in pixels
        markers: Dot settings, ``{"color": ..., "size": ...}``; dots default
            to the line color
    """

    def __init__(
        self,
        width: float,
        height: float,
        values: str | Sequence[Any] | None,
        color: str | None = None,
        line_width: float | None = None,
        markers: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        color = color or get_settings().default_color
        line: dict[str, Any] = {"stroke": {"color": color}, "strokeWidth": line_width}
        if markers is not None:
            line["dots"] = {
                "fill": {"color": markers.get("color") or color},
                "size": markers.get("size"),
            }
        super().__init__({"width": width, "height": height, "line": line}, values, **kwargs)


class SparkLineColumnChart(SparkLine):
    """Column chart with a 15% margin between columns."""

    def __init__(
        self,
        width: float,
        height: float,
        values: str | Sequence[Any] | None,
        color: str | None = None,
        **kwargs: Any,
    ) -> None:
        props = {
            "width": width,
            "height": height,
            "bars": {
                "marginPercentage": DEFAULT_BAR_MARGIN_PERCENTAGE,
                "fill": {"color": color or get_settings().default_color},
            },
        }
        super().__init__(props, values, **kwargs)


class SparkLineWinLoss(SparkLine):
    """Win/loss chart: green bars up for positive values, red bars down for
    negative ones."""

    def __init__(
        self,
        width: float,
        height: float,
        values: str | Sequence[Any] | None,
        color_win: str | None = None,
        color_loss: str | None = None,
        **kwargs: Any,
    ) -> None:
        props = {
            "width": width,
            "height": height,
            "bars": {
                "isWinLoss": True,
                "marginPercentage": DEFAULT_BAR_MARGIN_PERCENTAGE,
                "fill": {
                    "colorForPositiveValues": color_win or DEFAULT_WIN_COLOR,
                    "colorForNegativeValues": color_loss or DEFAULT_LOSS_COLOR,
                },
            },
        }
        super().__init__(props, values, **kwargs)
