"""Viewport sizing and pixel-to-unit scaling.

The SVG viewport is sized by the value range, not by the requested pixel
size: its height is the (padded) value range and its width follows from the
requested aspect ratio. Stroke widths and dot sizes, given in pixels, are
converted to viewport units with ``pixel_size``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from libs.common.exceptions import GeometryError
from libs.sparklines.types import Box, Point

# Extra viewport units added above and below the value range. Renderers may
# place a circle with center/radius 5/5 at 4.5/4.5, this keeps it inside.
RENDER_PADDING = 1


@dataclass(frozen=True)
class Dimensions:
    """Viewport geometry of one render.

    Attributes:
        margin_x: Horizontal inset keeping overflowing markers inside the viewport
        margin_y: Vertical inset (always 0, the height already includes overflow)
        pixel_size: Viewport units per pixel
        x_step: Distance between consecutive points on a line
        step_width: Width of the slot of one point on a bar chart
        box: Viewport (viewBox) in viewport units
    """

    margin_x: float
    margin_y: float
    pixel_size: float
    x_step: float
    step_width: float
    box: Box


def _require_finite(label: str, *values: float) -> None:
    if not all(math.isfinite(v) for v in values):
        raise GeometryError(
            f"Sparkline cannot be rendered as it will contain infinite {label}, "
            "please check settings like width and given values"
        )


def value_range(points: Sequence[Point]) -> tuple[float, float, float]:
    """Return (min, max, range) of the defined y values.

    The range is floored at 1 so that a series of equal values still gets a
    viewport with height.
    """
    ys = [p.y for p in points if p.y is not None]
    min_val = min(ys) if ys else 0.0
    max_val = max(ys) if ys else 0.0
    return min_val, max_val, max(max_val - min_val, 1)


def compute_dimensions(
    width: float,
    height: float,
    points: Sequence[Point],
    marker_size: float | None = None,
) -> Dimensions:
    """Compute the viewport for a set of points.

    Args:
        width: Requested width in pixels
        height: Requested height in pixels
        points: Mapped (and rescaled) points
        marker_size: Size in pixels of the largest marker that may overflow
            the plot area, defaults to 1

    Returns:
        Dimensions of the viewport

    Raises:
        GeometryError: If any derived quantity is not finite, e.g. for a zero
            or infinite height
    """
    if not math.isfinite(height) or height <= 0:
        raise GeometryError(
            "Sparkline cannot be rendered as it will contain infinite height, "
            "please check width and ratio settings"
        )

    x_count = len({p.x for p in points})
    min_val, max_val, val_range = value_range(points)

    scale = val_range / height
    overflow_size = marker_size if marker_size is not None else 1
    enlarge_by = scale * overflow_size

    min_y = min_val - enlarge_by / 2 - RENDER_PADDING
    max_y = max_val + enlarge_by / 2 + RENDER_PADDING
    svg_height = max(max_y - min_y, 1)
    svg_width = svg_height * (width / height)
    _require_finite("dimensions", svg_width, svg_height)

    pixel_size = svg_height / height
    _require_finite("pixels", pixel_size)

    margin_x = pixel_size * overflow_size / 2
    _require_finite("margins", margin_x)

    plot_width = svg_width - margin_x * 2
    x_step = plot_width / (x_count - 1) if x_count > 1 else svg_width
    step_width = plot_width / x_count if x_count > 0 else svg_width
    _require_finite("intervals", x_step, step_width)

    return Dimensions(
        margin_x=margin_x,
        margin_y=0,
        pixel_size=pixel_size,
        x_step=x_step,
        step_width=step_width,
        box=Box(x=0, y=-max_y, width=svg_width, height=svg_height),
    )
