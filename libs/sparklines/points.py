"""Mapping of input values to points.

``map_values`` resolves each input value (missing value policy, win/loss
collapsing); ``rescale_points`` then scales all y values so the value range
stays within what SVG renderers draw reliably.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from libs.common.exceptions import GeometryError
from libs.sparklines.dimensions import value_range
from libs.sparklines.settings import ResolvedSettings
from libs.sparklines.types import Point
from libs.sparklines.values import LabeledValue, ParsedValue, to_number

WIN_VALUE = 1.0
LOSS_VALUE = -1.0

_INFINITE_NUMBERS = (
    "Sparkline cannot be rendered as it will contain infinite numbers, "
    "please check settings like width and given values"
)


def win_loss_value(value: float | None) -> float | None:
    """Collapse a value to +1/-1 by sign, keeping zero and missing values."""
    if value is None or value == 0:
        return value
    return WIN_VALUE if value > 0 else LOSS_VALUE


def map_values(values: Sequence[ParsedValue], settings: ResolvedSettings) -> list[Point]:
    """Map parsed values to points with x = 1..N.

    A missing value is a gap, unless ``show_undefined_values_as`` is
    "unchanged": then the previous resolved value is repeated. A missing
    first value stays a gap.

    Raises:
        SparklineValueError: If a value is not numeric or is infinite
    """
    carry_forward = settings.show_undefined_values_as == "unchanged"
    is_win_loss = settings.bars is not None and settings.bars.is_win_loss

    points: list[Point] = []
    last_value: float | None = None
    for index, item in enumerate(values):
        x = index + 1
        label = item.label if isinstance(item, LabeledValue) else None
        value = to_number(item.value, f"at index {index}")
        if value is None and carry_forward:
            value = last_value
        y = win_loss_value(value) if is_win_loss else value
        points.append(Point(x=x, x_label=label, y=y, value=value))
        last_value = value
    return points


def scale_factor(val_range: float, height: float, threshold: float) -> tuple[float, bool]:
    """Return (factor, divide) for a value range.

    Large ranges are divided down, since some renderers lose precision on
    large coordinates. Ranges smaller than the pixel height are multiplied up,
    a viewport height below 1 renders badly too. The second rule wins.
    """
    factor, divide = 1.0, False
    if val_range > threshold:
        factor, divide = float(math.floor(val_range / height)), True
    if height > val_range:
        factor, divide = float(math.ceil(height / val_range)), False
    return factor, divide


def rescale_points(
    points: Sequence[Point], height: float, threshold: float = 5000
) -> list[Point]:
    """Rescale y values of the points, sorted by x.

    The ``value`` of each point is left untouched.

    Raises:
        GeometryError: If the value range, the height or a rescaled y is
            not finite
    """
    _, _, val_range = value_range(points)
    if not (math.isfinite(val_range) and math.isfinite(height) and height > 0):
        raise GeometryError(_INFINITE_NUMBERS)
    factor, divide = scale_factor(val_range, height, threshold)

    scaled: list[Point] = []
    for p in sorted(points, key=lambda p: p.x):
        y = p.y
        if y is not None:
            y = y / factor if divide else y * factor
            if not math.isfinite(y):
                raise GeometryError(_INFINITE_NUMBERS)
        scaled.append(Point(x=p.x, x_label=p.x_label, y=y, value=p.value))
    return scaled
